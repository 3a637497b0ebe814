"""Initial Pokemon Review schema

Revision ID: a7c41e90b2d3
Revises:
Create Date: 2024-06-01 09:00:00.000000

Tables Created:
1. countries, categories, reviewers - lookup entities with unique names
2. owners - trainers, each in exactly one country
3. pokemon - with unique names
4. pokemon_owners, pokemon_categories - many-to-many join tables
5. reviews - rated reviews tying a reviewer to a Pokemon

Natural keys are enforced with unique constraints on ``*_key`` columns holding
the trimmed, lower-cased form the models compute, so names that differ only in
case or surrounding whitespace collide on every backend.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a7c41e90b2d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'countries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('name_key', sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('name_key', sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        'reviewers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('first_name_key', sa.String(100), nullable=False, server_default=''),
        sa.Column('last_name_key', sa.String(100), nullable=False),
        sa.UniqueConstraint('first_name_key', 'last_name_key', name='uq_reviewers_full_name'),
    )

    op.create_table(
        'owners',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('gym', sa.String(100), nullable=True),
        sa.Column('country_id', sa.Integer(), sa.ForeignKey('countries.id'), nullable=False),
        sa.Column('first_name_key', sa.String(100), nullable=False),
        sa.Column('last_name_key', sa.String(100), nullable=False),
        sa.UniqueConstraint('last_name_key', 'first_name_key', name='uq_owners_full_name'),
    )
    op.create_index('ix_owners_country_id', 'owners', ['country_id'])

    op.create_table(
        'pokemon',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('name_key', sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        'pokemon_owners',
        sa.Column('pokemon_id', sa.Integer(),
                  sa.ForeignKey('pokemon.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('owner_id', sa.Integer(),
                  sa.ForeignKey('owners.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'pokemon_categories',
        sa.Column('pokemon_id', sa.Integer(),
                  sa.ForeignKey('pokemon.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('title_key', sa.String(200), nullable=False, unique=True),
        sa.Column('text', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('pokemon_id', sa.Integer(), sa.ForeignKey('pokemon.id'), nullable=False),
        sa.Column('reviewer_id', sa.Integer(), sa.ForeignKey('reviewers.id'), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )
    op.create_index('ix_reviews_pokemon_id', 'reviews', ['pokemon_id'])
    op.create_index('ix_reviews_reviewer_id', 'reviews', ['reviewer_id'])


def downgrade():
    op.drop_table('reviews')
    op.drop_table('pokemon_categories')
    op.drop_table('pokemon_owners')
    op.drop_table('pokemon')
    op.drop_table('owners')
    op.drop_table('reviewers')
    op.drop_table('categories')
    op.drop_table('countries')
