"""
Repository Layer for the Pokemon Review API

One repository per entity family. Each is constructed with an optional
SQLAlchemy session and falls back to ``db.session``.
"""

from repositories.base_repository import BaseRepository
from repositories.category_repository import CategoryRepository
from repositories.country_repository import CountryRepository
from repositories.owner_repository import OwnerRepository
from repositories.pokemon_repository import PokemonRepository
from repositories.review_repository import ReviewRepository
from repositories.reviewer_repository import ReviewerRepository

__all__ = [
    'BaseRepository',
    'PokemonRepository',
    'CategoryRepository',
    'CountryRepository',
    'OwnerRepository',
    'ReviewRepository',
    'ReviewerRepository',
]
