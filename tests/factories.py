"""
Factory Boy factories for the Pokemon Review models.

Every factory commits through the Flask-SQLAlchemy scoped session, so objects
are visible to request handlers running in the same application context.
Natural keys use sequences so repeated factory calls never collide on the
unique indexes.
"""

import factory
from factory import fuzzy
from factory.alchemy import SQLAlchemyModelFactory
from faker import Faker

from models import Category, Country, Owner, Pokemon, Review, Reviewer, db

fake = Faker()


class BaseFactory(SQLAlchemyModelFactory):
    """Shared session configuration for all model factories."""

    class Meta:
        abstract = True
        sqlalchemy_session = db.session
        sqlalchemy_session_persistence = 'commit'


class CountryFactory(BaseFactory):
    class Meta:
        model = Country

    name = factory.Sequence(lambda n: f"{fake.country()[:80]} {n}")


class CategoryFactory(BaseFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")


class OwnerFactory(BaseFactory):
    class Meta:
        model = Owner

    first_name = factory.Faker('first_name')
    last_name = factory.Sequence(lambda n: f"{fake.last_name()}{n}")
    gym = factory.LazyAttribute(lambda obj: f"{obj.first_name}s Gym")
    country = factory.SubFactory(CountryFactory)


class PokemonFactory(BaseFactory):
    class Meta:
        model = Pokemon

    name = factory.Sequence(lambda n: f"Pokemon{n}")
    birth_date = factory.Faker('date_between', start_date='-10y', end_date='today')


class ReviewerFactory(BaseFactory):
    class Meta:
        model = Reviewer

    first_name = factory.Faker('first_name')
    last_name = factory.Sequence(lambda n: f"{fake.last_name()}{n}")


class ReviewFactory(BaseFactory):
    class Meta:
        model = Review

    title = factory.Sequence(lambda n: f"Review {n}")
    text = factory.Faker('sentence')
    rating = fuzzy.FuzzyInteger(1, 5)
    pokemon = factory.SubFactory(PokemonFactory)
    reviewer = factory.SubFactory(ReviewerFactory)
