"""
Category resource handlers (``/api/Category``).
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
from blueprints.schemas import CategorySchema, PokemonSchema
from repositories import CategoryRepository

logger = logging.getLogger(__name__)

category_ns = Namespace('Category', path='/Category', description='Category operations')


class CategoryResource(RepositoryResource):
    repositories = {'category_repository': CategoryRepository}

    def _check_unique(self, category, exclude_id=None):
        if self.category_repository.get_by_name(category.name, exclude_id=exclude_id) is not None:
            raise ConflictError(f"Category with name '{category.name}' already exists")


@category_ns.route('', endpoint='category_list')
class CategoryList(CategoryResource):

    @handle_handler_exceptions('retrieving categories')
    def get(self):
        """List every category."""
        return CategorySchema(many=True).dump(self.category_repository.list()), 200

    @handle_handler_exceptions('creating the category')
    def post(self):
        """Create a category."""
        payload = require_payload('Category')
        category = CategorySchema(exclude=('id',)).load(payload)
        self._check_unique(category)

        if not self.category_repository.create(category):
            raise PersistenceError("Failed to create category")

        return created_response(CategorySchema(), category, 'api.category_item', category_id=category.id)


@category_ns.route('/<int(signed=True):category_id>', endpoint='category_item')
class CategoryItem(CategoryResource):

    @handle_handler_exceptions('retrieving the category')
    def get(self, category_id: int):
        validate_id(category_id, "Invalid category ID")
        category = self.category_repository.get(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return CategorySchema().dump(category), 200

    @handle_handler_exceptions('updating the category')
    def put(self, category_id: int):
        validate_id(category_id, "Invalid category ID")
        payload = require_payload('Category')
        category = CategorySchema().load(payload)
        require_matching_id(category_id, category.id, 'Category')
        require_exists(self.category_repository, category_id, 'Category')
        self._check_unique(category, exclude_id=category_id)

        if self.category_repository.update(category) is None:
            raise PersistenceError("Failed to update category")

        return no_content()

    @handle_handler_exceptions('deleting the category')
    def delete(self, category_id: int):
        validate_id(category_id, "Invalid category ID")
        category = self.category_repository.get(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")

        if not self.category_repository.delete(category):
            raise PersistenceError("Failed to delete category")

        return no_content()


@category_ns.route('/<int(signed=True):category_id>/pokemon', endpoint='category_pokemon')
class CategoryPokemon(CategoryResource):

    @handle_handler_exceptions('retrieving pokemon for the category')
    def get(self, category_id: int):
        """Pokemon filed under the category."""
        validate_id(category_id, "Invalid category ID")
        require_exists(self.category_repository, category_id, 'Category')
        pokemon = self.category_repository.list_pokemon_by_category(category_id)
        return PokemonSchema(many=True).dump(pokemon), 200
