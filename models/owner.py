"""
Owner and Country models.

An Owner belongs to exactly one Country and holds any number of Pokemon
through the ``pokemon_owners`` join table.
"""

from sqlalchemy.orm import validates

from models.base import BaseModel, db, normalize_name, strip_value
from models.pokemon import pokemon_owners


class Country(BaseModel):
    """Country an Owner comes from."""

    __tablename__ = 'countries'

    name = db.Column(db.String(100), nullable=False)
    name_key = db.Column(db.String(100), nullable=False, unique=True)

    owners = db.relationship('Owner', back_populates='country', lazy='select')

    @validates('name')
    def validate_name(self, key, value):
        value = strip_value(value)
        self.name_key = normalize_name(value)
        return value


class Owner(BaseModel):
    """Pokemon trainer with an optional gym."""

    __tablename__ = 'owners'

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    gym = db.Column(db.String(100), nullable=True)
    country_id = db.Column(db.Integer, db.ForeignKey('countries.id'), nullable=False, index=True)
    first_name_key = db.Column(db.String(100), nullable=False)
    last_name_key = db.Column(db.String(100), nullable=False)

    country = db.relationship('Country', back_populates='owners')
    pokemon = db.relationship('Pokemon', secondary=pokemon_owners,
                              back_populates='owners', lazy='select')

    __table_args__ = (
        db.UniqueConstraint('last_name_key', 'first_name_key', name='uq_owners_full_name'),
    )

    @validates('first_name', 'last_name', 'gym')
    def validate_names(self, key, value):
        value = strip_value(value)
        if key != 'gym':
            setattr(self, f"{key}_key", normalize_name(value))
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

