"""
Pokemon resource handlers.

Routes (under ``/api/Pokemon``):
    GET    ''                      list all Pokemon
    GET    /<id>                   one Pokemon
    GET    /<id>/rating            average review rating (0.0 without reviews)
    POST   ''?ownerId&catId        create, linked to an owner and a category
    PUT    /<id>?ownerId&catId     full replacement, relinking owner and category
    DELETE /<id>                   delete, removing the Pokemon's reviews first
"""

import logging

from flask_restx import Namespace

from blueprints.api import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    RepositoryResource,
    BadRequestError,
    created_response,
    handle_handler_exceptions,
    no_content,
    query_id,
    require_exists,
    require_matching_id,
    require_payload,
    validate_id,
)
from blueprints.schemas import PokemonSchema
from repositories import (
    CategoryRepository,
    OwnerRepository,
    PokemonRepository,
    ReviewRepository,
)

logger = logging.getLogger(__name__)

pokemon_ns = Namespace('Pokemon', path='/Pokemon', description='Pokemon operations')

FOREIGN_KEY_PARAMS = {'ownerId': 'Id of the owner', 'catId': 'Id of the category'}


class PokemonResource(RepositoryResource):
    repositories = {
        'pokemon_repository': PokemonRepository,
        'review_repository': ReviewRepository,
        'owner_repository': OwnerRepository,
        'category_repository': CategoryRepository,
    }

    def _resolve_foreign_keys(self):
        """Validate ``ownerId``/``catId`` and return the referenced entities."""
        owner_id = query_id('ownerId')
        category_id = query_id('catId')
        if owner_id is None or owner_id <= 0 or category_id is None or category_id <= 0:
            raise BadRequestError("Valid owner ID and category ID are required")
        return owner_id, category_id

    def _load_references(self, owner_id, category_id):
        owner = self.owner_repository.get(owner_id)
        if owner is None:
            raise NotFoundError(f"Owner with ID {owner_id} not found")
        category = self.category_repository.get(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return owner, category


@pokemon_ns.route('', endpoint='pokemon_list')
class PokemonList(PokemonResource):

    @pokemon_ns.doc('list_pokemon')
    @handle_handler_exceptions('retrieving pokemon')
    def get(self):
        """List every Pokemon."""
        pokemon = self.pokemon_repository.list()
        return PokemonSchema(many=True).dump(pokemon), 200

    @pokemon_ns.doc('create_pokemon', params=FOREIGN_KEY_PARAMS)
    @handle_handler_exceptions('creating the pokemon')
    def post(self):
        """Create a Pokemon owned by ``ownerId`` in category ``catId``."""
        payload = require_payload('Pokemon')
        owner_id, category_id = self._resolve_foreign_keys()
        pokemon = PokemonSchema(exclude=('id',)).load(payload)

        owner, category = self._load_references(owner_id, category_id)

        if self.pokemon_repository.get_by_name(pokemon.name) is not None:
            raise ConflictError(f"Pokemon with name '{pokemon.name}' already exists")

        if not self.pokemon_repository.create(pokemon, owner, category):
            raise PersistenceError("Failed to create pokemon")

        logger.info(f"Created pokemon {pokemon.id} ({pokemon.name})")
        return created_response(PokemonSchema(), pokemon, 'api.pokemon_item', pokemon_id=pokemon.id)


@pokemon_ns.route('/<int(signed=True):pokemon_id>', endpoint='pokemon_item')
class PokemonItem(PokemonResource):

    @pokemon_ns.doc('get_pokemon')
    @handle_handler_exceptions('retrieving the pokemon')
    def get(self, pokemon_id: int):
        """Fetch one Pokemon."""
        validate_id(pokemon_id, "Invalid Pokemon ID")
        pokemon = self.pokemon_repository.get(pokemon_id)
        if pokemon is None:
            raise NotFoundError(f"Pokemon with ID {pokemon_id} not found")
        return PokemonSchema().dump(pokemon), 200

    @pokemon_ns.doc('update_pokemon', params=FOREIGN_KEY_PARAMS)
    @handle_handler_exceptions('updating the pokemon')
    def put(self, pokemon_id: int):
        """Replace a Pokemon and its owner/category links."""
        validate_id(pokemon_id, "Invalid Pokemon ID")
        payload = require_payload('Pokemon')
        owner_id, category_id = self._resolve_foreign_keys()
        pokemon = PokemonSchema().load(payload)
        require_matching_id(pokemon_id, pokemon.id, 'Pokemon')

        require_exists(self.pokemon_repository, pokemon_id, 'Pokemon')
        owner, category = self._load_references(owner_id, category_id)

        if self.pokemon_repository.get_by_name(pokemon.name, exclude_id=pokemon_id) is not None:
            raise ConflictError(f"Pokemon with name '{pokemon.name}' already exists")

        if self.pokemon_repository.update(pokemon, owner, category) is None:
            raise PersistenceError("Failed to update pokemon")

        return no_content()

    @pokemon_ns.doc('delete_pokemon')
    @handle_handler_exceptions('deleting the pokemon')
    def delete(self, pokemon_id: int):
        """Delete a Pokemon after removing its reviews."""
        validate_id(pokemon_id, "Invalid Pokemon ID")
        require_exists(self.pokemon_repository, pokemon_id, 'Pokemon')

        reviews = self.review_repository.list_reviews_by_pokemon(pokemon_id)
        if reviews and not self.review_repository.delete_many(reviews):
            raise PersistenceError("Failed to delete associated reviews")

        pokemon = self.pokemon_repository.get(pokemon_id)
        if not self.pokemon_repository.delete(pokemon):
            raise PersistenceError("Failed to delete pokemon")

        logger.info(f"Deleted pokemon {pokemon_id} and {len(reviews)} reviews")
        return no_content()


@pokemon_ns.route('/<int(signed=True):pokemon_id>/rating', endpoint='pokemon_rating')
class PokemonRating(PokemonResource):

    @pokemon_ns.doc('get_pokemon_rating')
    @handle_handler_exceptions('retrieving the pokemon rating')
    def get(self, pokemon_id: int):
        """Average rating of the Pokemon's reviews."""
        validate_id(pokemon_id, "Invalid Pokemon ID")
        require_exists(self.pokemon_repository, pokemon_id, 'Pokemon')
        return self.pokemon_repository.get_rating(pokemon_id), 200
