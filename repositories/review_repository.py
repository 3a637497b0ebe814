"""Data access for Reviews, including the bulk delete used by cascades."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from models import Pokemon, Review, Reviewer
from repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    model = Review
    key_column = 'title_key'

    def list_reviews_by_pokemon(self, pokemon_id: int) -> List[Review]:
        statement = select(Review).where(Review.pokemon_id == pokemon_id).order_by(Review.id)
        return list(self.db_session.scalars(statement).all())

    def list_reviews_by_reviewer(self, reviewer_id: int) -> List[Review]:
        statement = select(Review).where(Review.reviewer_id == reviewer_id).order_by(Review.id)
        return list(self.db_session.scalars(statement).all())

    def create(self, review: Review, reviewer: Optional[Reviewer] = None,
               pokemon: Optional[Pokemon] = None) -> bool:
        if reviewer is not None:
            review.reviewer = reviewer
        if pokemon is not None:
            review.pokemon = pokemon
        return super().create(review)

    def update(self, review: Review, reviewer: Optional[Reviewer] = None,
               pokemon: Optional[Pokemon] = None) -> Optional[Review]:
        """Replace the review's fields, re-pointing it when a reviewer or Pokemon is given."""
        if reviewer is not None:
            review.reviewer_id = reviewer.id
        if pokemon is not None:
            review.pokemon_id = pokemon.id
        return super().update(review)

    def delete_many(self, reviews: Iterable[Review]) -> bool:
        """
        Delete every review in one commit.

        Either all rows are removed or none are; a failure is rolled back and
        reported as False.
        """
        reviews = list(reviews)
        try:
            for review in reviews:
                self.db_session.delete(review)
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(f"Failed to stage deletion of {len(reviews)} reviews: {str(e)}")
            return False
        return self.save(f"delete {len(reviews)} reviews")
