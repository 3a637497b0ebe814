"""
Sample data bootstrap for the Pokemon Review API.

``seed_data`` fills an empty database with three countries, categories,
reviewers, owners and Pokemon plus nine reviews, all inside one transaction.
It is only run on explicit request: ``python app.py seeddata`` or
``flask seed-data``.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models import (
    Category,
    Country,
    DatabaseManager,
    Owner,
    Pokemon,
    Review,
    Reviewer,
    db,
)

logger = logging.getLogger(__name__)

COUNTRIES = ['Kanto', 'Saffron City', 'Millet Town']

CATEGORIES = ['Electric', 'Water', 'Grass']

REVIEWERS = [('Teddy', 'Smith'), ('Taylor', 'Jones'), ('Jessica', 'McGregor')]

# (first name, last name, gym, index into COUNTRIES)
OWNERS = [
    ('Jack', 'London', 'Brocks Gym', 0),
    ('Harry', 'Potter', 'Mistys Gym', 1),
    ('Ash', 'Ketchum', 'Ashs Gym', 2),
]

# Each Pokemon has one category and one owner (by index) and three reviews,
# written by the reviewers in REVIEWERS order.
POKEMON = [
    {
        'name': 'Pikachu',
        'birth_date': date(2020, 1, 15),
        'category': 0,
        'owner': 0,
        'reviews': [
            ('Amazing Electric Pokemon', 'Pikachu is the best electric Pokemon with great abilities!', 5),
            ('Reliable Companion', 'Pikachu is excellent in battles and very loyal.', 5),
            ('Overrated', 'Pikachu gets too much attention compared to other Pokemon.', 3),
        ],
    },
    {
        'name': 'Squirtle',
        'birth_date': date(2020, 3, 10),
        'category': 1,
        'owner': 1,
        'reviews': [
            ('Excellent Water Type', 'Squirtle has powerful water attacks and great evolution potential.', 5),
            ('Strong Defender', "Squirtle's defense capabilities are impressive for a basic Pokemon.", 4),
            ('Slow Starter', 'Squirtle takes time to become truly powerful.', 3),
        ],
    },
    {
        'name': 'Venusaur',
        'birth_date': date(2019, 5, 20),
        'category': 2,
        'owner': 2,
        'reviews': [
            ('Powerful Grass Pokemon', 'Venusaur has incredible strength and diverse grass-type moves.', 5),
            ('Battle Champion', 'Venusaur dominates in gym battles with its powerful attacks.', 5),
            ('Hard to Train', 'Venusaur requires significant effort to train effectively.', 2),
        ],
    },
]


def has_existing_data(session: Session) -> bool:
    """True when any Pokemon, Owner, Reviewer or Country is already stored."""
    for model in (Pokemon, Owner, Reviewer, Country):
        if session.execute(select(model.id).limit(1)).first() is not None:
            return True
    return False


def seed_data(session: Optional[Session] = None) -> bool:
    """
    Populate an empty database with sample data.

    Args:
        session: Session to write with; defaults to ``db.session``

    Returns:
        bool: True when data was inserted, False when the database already
              held data and nothing was written

    Raises:
        DatabaseError: If any insert fails; nothing is committed in that case
    """
    session = session or db.session

    if has_existing_data(session):
        logger.info("Database already contains data, skipping seed")
        return False

    with DatabaseManager.transaction(session):
        countries = [Country(name=name) for name in COUNTRIES]
        categories = [Category(name=name) for name in CATEGORIES]
        reviewers = [Reviewer(first_name=first, last_name=last) for first, last in REVIEWERS]
        owners = [
            Owner(first_name=first, last_name=last, gym=gym, country=countries[country])
            for first, last, gym, country in OWNERS
        ]

        for entry in POKEMON:
            pokemon = Pokemon(name=entry['name'], birth_date=entry['birth_date'])
            pokemon.categories.append(categories[entry['category']])
            pokemon.owners.append(owners[entry['owner']])
            for reviewer, (title, text, rating) in zip(reviewers, entry['reviews']):
                pokemon.reviews.append(
                    Review(title=title, text=text, rating=rating, reviewer=reviewer)
                )
            session.add(pokemon)

        session.add_all(countries + categories + reviewers + owners)

    logger.info(
        f"Seeded {len(COUNTRIES)} countries, {len(CATEGORIES)} categories, "
        f"{len(REVIEWERS)} reviewers, {len(OWNERS)} owners and {len(POKEMON)} pokemon"
    )
    return True
