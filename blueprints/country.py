"""
Country resource handlers (``/api/Country``).

``GET /owners/<ownerId>`` resolves the country of an owner and answers 404
when none is found, without a separate owner existence check.
"""

import logging

from flask_restx import Namespace

from blueprints.api import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    RepositoryResource,
    created_response,
    handle_handler_exceptions,
    no_content,
    require_exists,
    require_matching_id,
    require_payload,
    validate_id,
)
from blueprints.schemas import CountrySchema, OwnerSchema
from repositories import CountryRepository

logger = logging.getLogger(__name__)

country_ns = Namespace('Country', path='/Country', description='Country operations')


class CountryResource(RepositoryResource):
    repositories = {'country_repository': CountryRepository}

    def _check_unique(self, country, exclude_id=None):
        if self.country_repository.get_by_name(country.name, exclude_id=exclude_id) is not None:
            raise ConflictError(f"Country with name '{country.name}' already exists")


@country_ns.route('', endpoint='country_list')
class CountryList(CountryResource):

    @handle_handler_exceptions('retrieving countries')
    def get(self):
        """List every country."""
        return CountrySchema(many=True).dump(self.country_repository.list()), 200

    @handle_handler_exceptions('creating the country')
    def post(self):
        """Create a country."""
        payload = require_payload('Country')
        country = CountrySchema(exclude=('id',)).load(payload)
        self._check_unique(country)

        if not self.country_repository.create(country):
            raise PersistenceError("Failed to create country")

        return created_response(CountrySchema(), country, 'api.country_item', country_id=country.id)


@country_ns.route('/<int(signed=True):country_id>', endpoint='country_item')
class CountryItem(CountryResource):

    @handle_handler_exceptions('retrieving the country')
    def get(self, country_id: int):
        validate_id(country_id, "Invalid country ID")
        country = self.country_repository.get(country_id)
        if country is None:
            raise NotFoundError(f"Country with ID {country_id} not found")
        return CountrySchema().dump(country), 200

    @handle_handler_exceptions('updating the country')
    def put(self, country_id: int):
        validate_id(country_id, "Invalid country ID")
        payload = require_payload('Country')
        country = CountrySchema().load(payload)
        require_matching_id(country_id, country.id, 'Country')
        require_exists(self.country_repository, country_id, 'Country')
        self._check_unique(country, exclude_id=country_id)

        if self.country_repository.update(country) is None:
            raise PersistenceError("Failed to update country")

        return no_content()

    @handle_handler_exceptions('deleting the country')
    def delete(self, country_id: int):
        validate_id(country_id, "Invalid country ID")
        country = self.country_repository.get(country_id)
        if country is None:
            raise NotFoundError(f"Country with ID {country_id} not found")

        # Owners reference their country; the store refuses while any remain
        if not self.country_repository.delete(country):
            raise PersistenceError("Failed to delete country")

        return no_content()


@country_ns.route('/owners/<int(signed=True):owner_id>', endpoint='country_of_owner')
class CountryOfOwner(CountryResource):

    @handle_handler_exceptions('retrieving the country for the owner')
    def get(self, owner_id: int):
        """Country the owner comes from."""
        validate_id(owner_id, "Invalid owner ID")
        country = self.country_repository.get_country_by_owner(owner_id)
        if country is None:
            raise NotFoundError(f"Country for owner with ID {owner_id} not found")
        return CountrySchema().dump(country), 200


@country_ns.route('/<int(signed=True):country_id>/owners', endpoint='country_owners')
class CountryOwners(CountryResource):

    @handle_handler_exceptions('retrieving owners for the country')
    def get(self, country_id: int):
        """Owners from the country."""
        validate_id(country_id, "Invalid country ID")
        require_exists(self.country_repository, country_id, 'Country')
        owners = self.country_repository.list_owners_from_country(country_id)
        return OwnerSchema(many=True).dump(owners), 200
