"""Data access for Owners and the Pokemon they hold."""

from typing import List, Optional

from sqlalchemy import select

from models import Country, Owner, Pokemon, normalize_name
from repositories.base_repository import BaseRepository


class OwnerRepository(BaseRepository[Owner]):
    """
    Owners are identified naturally by their full name: the last name is
    matched first and the first name disambiguates, both case-insensitively.
    """

    model = Owner

    def get_by_name(self, last_name: Optional[str], first_name: Optional[str] = None,
                    exclude_id: Optional[int] = None) -> Optional[Owner]:
        statement = select(Owner).where(Owner.last_name_key == normalize_name(last_name))
        if first_name is not None:
            statement = statement.where(Owner.first_name_key == normalize_name(first_name))
        return self._first(statement, exclude_id)

    def list_pokemon_by_owner(self, owner_id: int) -> List[Pokemon]:
        statement = (
            select(Pokemon)
            .join(Pokemon.owners)
            .where(Owner.id == owner_id)
            .order_by(Pokemon.id)
        )
        return list(self.db_session.scalars(statement).all())

    def list_owners_of_pokemon(self, pokemon_id: int) -> List[Owner]:
        statement = (
            select(Owner)
            .join(Owner.pokemon)
            .where(Pokemon.id == pokemon_id)
            .order_by(Owner.id)
        )
        return list(self.db_session.scalars(statement).all())

    def create(self, owner: Owner, country: Optional[Country] = None) -> bool:
        if country is not None:
            owner.country = country
        return super().create(owner)

    def update(self, owner: Owner, country: Optional[Country] = None) -> Optional[Owner]:
        """Replace the owner's fields, moving it to ``country`` when given."""
        if country is not None:
            owner.country_id = country.id
        return super().update(owner)
