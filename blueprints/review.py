"""
Review resource handlers (``/api/Review``).

A review is created for the reviewer ``reviewerId`` about the Pokemon
``pokeId``. Both are resolved and re-checked before the review is written.
``DELETE /reviewer/<reviewerId>`` removes every review by one reviewer.
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
from blueprints.schemas import ReviewSchema
from repositories import PokemonRepository, ReviewRepository, ReviewerRepository

logger = logging.getLogger(__name__)

review_ns = Namespace('Review', path='/Review', description='Review operations')

FOREIGN_KEY_PARAMS = {'reviewerId': 'Id of the reviewer', 'pokeId': 'Id of the reviewed Pokemon'}


class ReviewResource(RepositoryResource):
    repositories = {
        'review_repository': ReviewRepository,
        'reviewer_repository': ReviewerRepository,
        'pokemon_repository': PokemonRepository,
    }

    def _check_unique(self, review, exclude_id=None):
        if self.review_repository.get_by_name(review.title, exclude_id=exclude_id) is not None:
            raise ConflictError(f"Review with title '{review.title}' already exists")

    def _load_references(self, reviewer_id, pokemon_id):
        reviewer = self.reviewer_repository.get(reviewer_id) if reviewer_id is not None else None
        if reviewer_id is not None and reviewer is None:
            raise NotFoundError(f"Reviewer with ID {reviewer_id} not found")
        pokemon = self.pokemon_repository.get(pokemon_id) if pokemon_id is not None else None
        if pokemon_id is not None and pokemon is None:
            raise NotFoundError(f"Pokemon with ID {pokemon_id} not found")
        return reviewer, pokemon


@review_ns.route('', endpoint='review_list')
class ReviewList(ReviewResource):

    @handle_handler_exceptions('retrieving reviews')
    def get(self):
        """List every review."""
        return ReviewSchema(many=True).dump(self.review_repository.list()), 200

    @review_ns.doc(params=FOREIGN_KEY_PARAMS)
    @handle_handler_exceptions('creating the review')
    def post(self):
        """Create a review by ``reviewerId`` about ``pokeId``."""
        payload = require_payload('Review')
        reviewer_id = query_id('reviewerId')
        pokemon_id = query_id('pokeId')
        if reviewer_id is None or reviewer_id <= 0 or pokemon_id is None or pokemon_id <= 0:
            raise BadRequestError("Valid reviewer ID and Pokemon ID are required")
        review = ReviewSchema(exclude=('id',)).load(payload)

        require_exists(self.reviewer_repository, reviewer_id, 'Reviewer')
        require_exists(self.pokemon_repository, pokemon_id, 'Pokemon')
        self._check_unique(review)

        reviewer, pokemon = self._load_references(reviewer_id, pokemon_id)
        if not self.review_repository.create(review, reviewer, pokemon):
            raise PersistenceError("Failed to create review")

        return created_response(ReviewSchema(), review, 'api.review_item', review_id=review.id)


@review_ns.route('/<int(signed=True):review_id>', endpoint='review_item')
class ReviewItem(ReviewResource):

    @handle_handler_exceptions('retrieving the review')
    def get(self, review_id: int):
        validate_id(review_id, "Invalid review ID")
        review = self.review_repository.get(review_id)
        if review is None:
            raise NotFoundError(f"Review with ID {review_id} not found")
        return ReviewSchema().dump(review), 200

    @review_ns.doc(params=FOREIGN_KEY_PARAMS)
    @handle_handler_exceptions('updating the review')
    def put(self, review_id: int):
        """Replace a review; ``reviewerId``/``pokeId`` optionally re-point it."""
        validate_id(review_id, "Invalid review ID")
        payload = require_payload('Review')
        reviewer_id = optional_query_id('reviewerId', "Invalid reviewer ID")
        pokemon_id = optional_query_id('pokeId', "Invalid pokemon ID")
        review = ReviewSchema().load(payload)
        require_matching_id(review_id, review.id, 'Review')

        require_exists(self.review_repository, review_id, 'Review')
        reviewer, pokemon = self._load_references(reviewer_id, pokemon_id)
        self._check_unique(review, exclude_id=review_id)

        if self.review_repository.update(review, reviewer, pokemon) is None:
            raise PersistenceError("Failed to update review")

        return no_content()

    @handle_handler_exceptions('deleting the review')
    def delete(self, review_id: int):
        validate_id(review_id, "Invalid review ID")
        review = self.review_repository.get(review_id)
        if review is None:
            raise NotFoundError(f"Review with ID {review_id} not found")

        if not self.review_repository.delete(review):
            raise PersistenceError("Failed to delete review")

        return no_content()


@review_ns.route('/pokemon/<int(signed=True):pokemon_id>', endpoint='reviews_of_pokemon')
class ReviewsOfPokemon(ReviewResource):

    @handle_handler_exceptions('retrieving reviews for the pokemon')
    def get(self, pokemon_id: int):
        """Reviews of one Pokemon."""
        validate_id(pokemon_id, "Invalid Pokemon ID")
        require_exists(self.pokemon_repository, pokemon_id, 'Pokemon')
        reviews = self.review_repository.list_reviews_by_pokemon(pokemon_id)
        return ReviewSchema(many=True).dump(reviews), 200


@review_ns.route('/reviewer/<int(signed=True):reviewer_id>', endpoint='reviews_of_reviewer')
class ReviewsOfReviewer(ReviewResource):

    @handle_handler_exceptions('deleting reviews by the reviewer')
    def delete(self, reviewer_id: int):
        """Delete every review written by the reviewer."""
        validate_id(reviewer_id, "Invalid reviewer ID")
        require_exists(self.reviewer_repository, reviewer_id, 'Reviewer')

        reviews = self.review_repository.list_reviews_by_reviewer(reviewer_id)
        if reviews and not self.review_repository.delete_many(reviews):
            raise PersistenceError("Failed to delete reviews")

        return no_content()
