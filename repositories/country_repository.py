"""Data access for Countries."""

from typing import List, Optional

from sqlalchemy import select

from models import Country, Owner
from repositories.base_repository import BaseRepository


class CountryRepository(BaseRepository[Country]):
    model = Country
    key_column = 'name_key'

    def get_country_by_owner(self, owner_id: int) -> Optional[Country]:
        """Country of the given owner, or None when the owner is unknown."""
        statement = select(Country).join(Country.owners).where(Owner.id == owner_id)
        return self.db_session.scalars(statement).first()

    def list_owners_from_country(self, country_id: int) -> List[Owner]:
        statement = select(Owner).where(Owner.country_id == country_id).order_by(Owner.id)
        return list(self.db_session.scalars(statement).all())
