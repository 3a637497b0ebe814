"""Data access for Categories."""

from typing import List

from sqlalchemy import select

from models import Category, Pokemon
from repositories.base_repository import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category
    key_column = 'name_key'

    def list_pokemon_by_category(self, category_id: int) -> List[Pokemon]:
        """Pokemon filed under the category, in insertion order."""
        statement = (
            select(Pokemon)
            .join(Pokemon.categories)
            .where(Category.id == category_id)
            .order_by(Pokemon.id)
        )
        return list(self.db_session.scalars(statement).all())
