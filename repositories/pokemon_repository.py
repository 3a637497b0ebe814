"""Data access for Pokemon, including owner/category links and ratings."""

import logging
from typing import Optional

from sqlalchemy import func, select

from models import Category, Owner, Pokemon, Review
from repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class PokemonRepository(BaseRepository[Pokemon]):
    """Repository for the ``pokemon`` table and its join tables."""

    model = Pokemon
    key_column = 'name_key'

    def get_rating(self, pokemon_id: int) -> float:
        """
        Average rating of the Pokemon's reviews.

        Returns:
            float: The mean rating, or 0.0 when the Pokemon has no reviews
        """
        statement = select(func.avg(Review.rating)).where(Review.pokemon_id == pokemon_id)
        average = self.db_session.execute(statement).scalar()
        return float(average) if average is not None else 0.0

    def create(self, pokemon: Pokemon, owner: Optional[Owner] = None,
               category: Optional[Category] = None) -> bool:
        """Persist a Pokemon linked to its first owner and category."""
        if owner is not None:
            pokemon.owners.append(owner)
        if category is not None:
            pokemon.categories.append(category)
        return super().create(pokemon)

    def update(self, pokemon: Pokemon, owner: Optional[Owner] = None,
               category: Optional[Category] = None) -> Optional[Pokemon]:
        """Replace the Pokemon's fields and, when given, its owner and category links."""
        merged = self.db_session.merge(pokemon)
        if owner is not None:
            merged.owners = [owner]
        if category is not None:
            merged.categories = [category]
        if not self.save(f"update Pokemon {pokemon.id}"):
            return None
        return merged
