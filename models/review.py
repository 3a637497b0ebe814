"""
Review and Reviewer models.

A Review always points at one Pokemon and one Reviewer. Deleting either parent
requires the caller to remove the Reviews first.
"""

from sqlalchemy.orm import validates

from models.base import BaseModel, db, normalize_name, strip_value


class Reviewer(BaseModel):
    """Person writing reviews. The first name is optional."""

    __tablename__ = 'reviewers'

    first_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=False)
    # First name is optional; its key is '' when absent
    first_name_key = db.Column(db.String(100), nullable=False, default='')
    last_name_key = db.Column(db.String(100), nullable=False)

    reviews = db.relationship('Review', back_populates='reviewer', lazy='select')

    __table_args__ = (
        db.UniqueConstraint('first_name_key', 'last_name_key', name='uq_reviewers_full_name'),
    )

    @validates('first_name', 'last_name')
    def validate_names(self, key, value):
        value = strip_value(value)
        setattr(self, f"{key}_key", normalize_name(value))
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name}".strip()


class Review(BaseModel):
    """A rated review of a Pokemon."""

    __tablename__ = 'reviews'

    title = db.Column(db.String(200), nullable=False)
    title_key = db.Column(db.String(200), nullable=False, unique=True)
    text = db.Column(db.Text, nullable=True)
    rating = db.Column(db.Integer, nullable=False)
    pokemon_id = db.Column(db.Integer, db.ForeignKey('pokemon.id'), nullable=False, index=True)
    reviewer_id = db.Column(db.Integer, db.ForeignKey('reviewers.id'), nullable=False, index=True)

    pokemon = db.relationship('Pokemon', back_populates='reviews')
    reviewer = db.relationship('Reviewer', back_populates='reviews')

    __table_args__ = (
        db.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )

    @validates('title')
    def validate_title(self, key, value):
        value = strip_value(value)
        self.title_key = normalize_name(value)
        return value

