"""
Reviewer resource handlers (``/api/Reviewer``).

Deleting a reviewer removes every review they wrote first. If that bulk
delete fails the reviewer is left untouched and the request answers 500.
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
from blueprints.schemas import ReviewSchema, ReviewerSchema
from repositories import ReviewRepository, ReviewerRepository

logger = logging.getLogger(__name__)

reviewer_ns = Namespace('Reviewer', path='/Reviewer', description='Reviewer operations')


class ReviewerResource(RepositoryResource):
    repositories = {
        'reviewer_repository': ReviewerRepository,
        'review_repository': ReviewRepository,
    }

    def _check_unique(self, reviewer, exclude_id=None):
        existing = self.reviewer_repository.get_by_name(
            reviewer.first_name, reviewer.last_name, exclude_id=exclude_id
        )
        if existing is not None:
            raise ConflictError(f"Reviewer '{reviewer.full_name}' already exists")


@reviewer_ns.route('', endpoint='reviewer_list')
class ReviewerList(ReviewerResource):

    @handle_handler_exceptions('retrieving reviewers')
    def get(self):
        """List every reviewer."""
        return ReviewerSchema(many=True).dump(self.reviewer_repository.list()), 200

    @handle_handler_exceptions('creating the reviewer')
    def post(self):
        """Create a reviewer."""
        payload = require_payload('Reviewer')
        reviewer = ReviewerSchema(exclude=('id',)).load(payload)
        self._check_unique(reviewer)

        if not self.reviewer_repository.create(reviewer):
            raise PersistenceError("Failed to create reviewer")

        return created_response(ReviewerSchema(), reviewer, 'api.reviewer_item', reviewer_id=reviewer.id)


@reviewer_ns.route('/<int(signed=True):reviewer_id>', endpoint='reviewer_item')
class ReviewerItem(ReviewerResource):

    @handle_handler_exceptions('retrieving the reviewer')
    def get(self, reviewer_id: int):
        validate_id(reviewer_id, "Invalid reviewer ID")
        reviewer = self.reviewer_repository.get(reviewer_id)
        if reviewer is None:
            raise NotFoundError(f"Reviewer with ID {reviewer_id} not found")
        return ReviewerSchema().dump(reviewer), 200

    @handle_handler_exceptions('updating the reviewer')
    def put(self, reviewer_id: int):
        validate_id(reviewer_id, "Invalid reviewer ID")
        payload = require_payload('Reviewer')
        reviewer = ReviewerSchema().load(payload)
        require_matching_id(reviewer_id, reviewer.id, 'Reviewer')
        require_exists(self.reviewer_repository, reviewer_id, 'Reviewer')
        self._check_unique(reviewer, exclude_id=reviewer_id)

        if self.reviewer_repository.update(reviewer) is None:
            raise PersistenceError("Failed to update reviewer")

        return no_content()

    @handle_handler_exceptions('deleting the reviewer')
    def delete(self, reviewer_id: int):
        """Delete a reviewer after removing their reviews."""
        validate_id(reviewer_id, "Invalid reviewer ID")
        require_exists(self.reviewer_repository, reviewer_id, 'Reviewer')

        reviews = self.review_repository.list_reviews_by_reviewer(reviewer_id)
        if reviews and not self.review_repository.delete_many(reviews):
            raise PersistenceError("Failed to delete associated reviews")

        reviewer = self.reviewer_repository.get(reviewer_id)
        if not self.reviewer_repository.delete(reviewer):
            raise PersistenceError("Failed to delete reviewer")

        logger.info(f"Deleted reviewer {reviewer_id} and {len(reviews)} reviews")
        return no_content()


@reviewer_ns.route('/<int(signed=True):reviewer_id>/reviews', endpoint='reviewer_reviews')
class ReviewerReviews(ReviewerResource):

    @handle_handler_exceptions('retrieving reviews for the reviewer')
    def get(self, reviewer_id: int):
        """Reviews written by the reviewer."""
        validate_id(reviewer_id, "Invalid reviewer ID")
        require_exists(self.reviewer_repository, reviewer_id, 'Reviewer')
        reviews = self.reviewer_repository.list_reviews_by_reviewer(reviewer_id)
        return ReviewSchema(many=True).dump(reviews), 200
