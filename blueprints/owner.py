"""
Owner resource handlers (``/api/Owner``).

Owners are created inside a country given by the ``countryId`` query
parameter. Updates may move an owner to another country by passing
``countryId`` again; without it the current country is kept.
"""

import logging

from flask_restx import Namespace

from blueprints.api import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    RepositoryResource,
    created_response,
    handle_handler_exceptions,
    no_content,
    optional_query_id,
    query_id,
    require_exists,
    require_matching_id,
    require_payload,
    validate_id,
)
from blueprints.schemas import OwnerSchema, PokemonSchema
from repositories import CountryRepository, OwnerRepository

logger = logging.getLogger(__name__)

owner_ns = Namespace('Owner', path='/Owner', description='Owner operations')


class OwnerResource(RepositoryResource):
    repositories = {
        'owner_repository': OwnerRepository,
        'country_repository': CountryRepository,
    }

    def _load_country(self, country_id):
        country = self.country_repository.get(country_id)
        if country is None:
            raise NotFoundError(f"Country with ID {country_id} not found")
        return country

    def _check_unique(self, owner, exclude_id=None):
        existing = self.owner_repository.get_by_name(
            owner.last_name, owner.first_name, exclude_id=exclude_id
        )
        if existing is not None:
            raise ConflictError(f"Owner '{owner.first_name} {owner.last_name}' already exists")


@owner_ns.route('', endpoint='owner_list')
class OwnerList(OwnerResource):

    @handle_handler_exceptions('retrieving owners')
    def get(self):
        """List every owner."""
        return OwnerSchema(many=True).dump(self.owner_repository.list()), 200

    @owner_ns.doc(params={'countryId': 'Id of the owner\'s country'})
    @handle_handler_exceptions('creating the owner')
    def post(self):
        """Create an owner in country ``countryId``."""
        payload = require_payload('Owner')
        country_id = query_id('countryId')
        if country_id is None or country_id <= 0:
            raise BadRequestError("Valid country ID is required")
        owner = OwnerSchema(exclude=('id',)).load(payload)

        country = self._load_country(country_id)
        self._check_unique(owner)

        if not self.owner_repository.create(owner, country):
            raise PersistenceError("Failed to create owner")

        return created_response(OwnerSchema(), owner, 'api.owner_item', owner_id=owner.id)


@owner_ns.route('/<int(signed=True):owner_id>', endpoint='owner_item')
class OwnerItem(OwnerResource):

    @handle_handler_exceptions('retrieving the owner')
    def get(self, owner_id: int):
        validate_id(owner_id, "Invalid owner ID")
        owner = self.owner_repository.get(owner_id)
        if owner is None:
            raise NotFoundError(f"Owner with ID {owner_id} not found")
        return OwnerSchema().dump(owner), 200

    @owner_ns.doc(params={'countryId': 'Optional id of a new country'})
    @handle_handler_exceptions('updating the owner')
    def put(self, owner_id: int):
        validate_id(owner_id, "Invalid owner ID")
        payload = require_payload('Owner')
        country_id = optional_query_id('countryId', "Valid country ID is required")
        owner = OwnerSchema().load(payload)
        require_matching_id(owner_id, owner.id, 'Owner')

        require_exists(self.owner_repository, owner_id, 'Owner')
        country = self._load_country(country_id) if country_id is not None else None
        self._check_unique(owner, exclude_id=owner_id)

        if self.owner_repository.update(owner, country) is None:
            raise PersistenceError("Failed to update owner")

        return no_content()

    @handle_handler_exceptions('deleting the owner')
    def delete(self, owner_id: int):
        validate_id(owner_id, "Invalid owner ID")
        owner = self.owner_repository.get(owner_id)
        if owner is None:
            raise NotFoundError(f"Owner with ID {owner_id} not found")

        if not self.owner_repository.delete(owner):
            raise PersistenceError("Failed to delete owner")

        return no_content()


@owner_ns.route('/<int(signed=True):owner_id>/pokemon', endpoint='owner_pokemon')
class OwnerPokemon(OwnerResource):

    @handle_handler_exceptions('retrieving pokemon for the owner')
    def get(self, owner_id: int):
        """Pokemon held by the owner."""
        validate_id(owner_id, "Invalid owner ID")
        require_exists(self.owner_repository, owner_id, 'Owner')
        pokemon = self.owner_repository.list_pokemon_by_owner(owner_id)
        return PokemonSchema(many=True).dump(pokemon), 200
