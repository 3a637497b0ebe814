"""
Marshmallow DTO Schemas for the Pokemon Review API

Each schema is the transport projection of one entity. ``load`` validates a
JSON body and returns a transient model instance, ``dump`` projects a model to
a DTO dict. DTOs never carry relations, so serialized payloads cannot contain
cycles, and ``None`` values are dropped on dump.

Field names use the camelCase keys of the public JSON contract.
"""

from marshmallow import (
    EXCLUDE,
    Schema,
    ValidationError,
    fields as ma_fields,
    post_dump,
    post_load,
    validate,
)

from models import Category, Country, Owner, Pokemon, Review, Reviewer


def validate_not_blank(value: str) -> None:
    """Reject strings made only of whitespace."""
    if value is not None and not value.strip():
        raise ValidationError('Field may not be blank.')


def name_field(max_length: int = 100, data_key: str = None, required: bool = True):
    """String field for a name-like value with blank and length checks."""
    if required:
        return ma_fields.Str(
            required=True,
            data_key=data_key,
            validate=[validate.Length(min=1, max=max_length), validate_not_blank],
        )
    return ma_fields.Str(
        load_default=None,
        allow_none=True,
        data_key=data_key,
        validate=validate.Length(max=max_length),
    )


class BaseDtoSchema(Schema):
    """
    Base schema mapping between a model class and its DTO.

    Subclasses set ``__model__``. Unknown keys in request bodies are ignored.
    """

    __model__ = None

    class Meta:
        unknown = EXCLUDE

    id = ma_fields.Int(load_default=None, allow_none=True)

    @post_load
    def make_entity(self, data, **kwargs):
        """Build a transient model instance from validated data."""
        return self.__model__(**data)

    @post_dump
    def remove_none_values(self, data, **kwargs):
        return {key: value for key, value in data.items() if value is not None}


class PokemonSchema(BaseDtoSchema):
    __model__ = Pokemon

    name = name_field()
    birth_date = ma_fields.Date(required=True, data_key='birthDate')


class CategorySchema(BaseDtoSchema):
    __model__ = Category

    name = name_field()


class CountrySchema(BaseDtoSchema):
    __model__ = Country

    name = name_field()


class OwnerSchema(BaseDtoSchema):
    __model__ = Owner

    first_name = name_field(data_key='firstName')
    last_name = name_field(data_key='lastName')
    gym = name_field(required=False)


class ReviewerSchema(BaseDtoSchema):
    __model__ = Reviewer

    first_name = name_field(data_key='firstName', required=False)
    last_name = name_field(data_key='lastName')


class ReviewSchema(BaseDtoSchema):
    __model__ = Review

    title = name_field(max_length=200)
    text = ma_fields.Str(load_default=None, allow_none=True)
    rating = ma_fields.Int(required=True, validate=validate.Range(min=1, max=5))
