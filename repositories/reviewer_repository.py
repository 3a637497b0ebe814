"""Data access for Reviewers."""

from typing import List, Optional

from sqlalchemy import select

from models import Review, Reviewer, normalize_name
from repositories.base_repository import BaseRepository


class ReviewerRepository(BaseRepository[Reviewer]):
    """Reviewers are unique on their combined first and last name."""

    model = Reviewer

    def get_by_name(self, first_name: Optional[str], last_name: Optional[str] = None,
                    exclude_id: Optional[int] = None) -> Optional[Reviewer]:
        statement = select(Reviewer).where(
            Reviewer.first_name_key == normalize_name(first_name),
            Reviewer.last_name_key == normalize_name(last_name),
        )
        return self._first(statement, exclude_id)

    def list_reviews_by_reviewer(self, reviewer_id: int) -> List[Review]:
        statement = select(Review).where(Review.reviewer_id == reviewer_id).order_by(Review.id)
        return list(self.db_session.scalars(statement).all())
