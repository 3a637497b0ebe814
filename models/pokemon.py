"""
Pokemon and Category models with their many-to-many join tables.
"""

from sqlalchemy.orm import validates

from models.base import BaseModel, db, normalize_name, strip_value


# Join table linking Pokemon to the Owners that hold them
pokemon_owners = db.Table(
    'pokemon_owners',
    db.Column('pokemon_id', db.Integer,
              db.ForeignKey('pokemon.id', ondelete='CASCADE'), primary_key=True),
    db.Column('owner_id', db.Integer,
              db.ForeignKey('owners.id', ondelete='CASCADE'), primary_key=True),
)

# Join table linking Pokemon to their Categories
pokemon_categories = db.Table(
    'pokemon_categories',
    db.Column('pokemon_id', db.Integer,
              db.ForeignKey('pokemon.id', ondelete='CASCADE'), primary_key=True),
    db.Column('category_id', db.Integer,
              db.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
)


class Pokemon(BaseModel):
    """
    A Pokemon with its reviews, owners and categories.

    Reviews are not cascaded by the ORM; removing them before the Pokemon is
    the caller's job so that a failed bulk delete leaves the Pokemon intact.
    """

    __tablename__ = 'pokemon'

    name = db.Column(db.String(100), nullable=False)
    birth_date = db.Column(db.Date, nullable=False)
    # normalize_name(name); natural-key lookups and uniqueness use this column
    name_key = db.Column(db.String(100), nullable=False, unique=True)

    reviews = db.relationship('Review', back_populates='pokemon', lazy='select')
    owners = db.relationship('Owner', secondary=pokemon_owners,
                             back_populates='pokemon', lazy='select')
    categories = db.relationship('Category', secondary=pokemon_categories,
                                 back_populates='pokemon', lazy='select')

    @validates('name')
    def validate_name(self, key, value):
        value = strip_value(value)
        self.name_key = normalize_name(value)
        return value


class Category(BaseModel):
    """Pokemon category such as Electric or Water."""

    __tablename__ = 'categories'

    name = db.Column(db.String(100), nullable=False)
    name_key = db.Column(db.String(100), nullable=False, unique=True)

    pokemon = db.relationship('Pokemon', secondary=pokemon_categories,
                              back_populates='categories', lazy='select')

    @validates('name')
    def validate_name(self, key, value):
        value = strip_value(value)
        self.name_key = normalize_name(value)
        return value

