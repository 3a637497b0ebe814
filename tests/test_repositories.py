"""
Repository tests run directly against the session, without HTTP.
"""

import datetime
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from models import Category, Pokemon, Review
from repositories import (
    CategoryRepository,
    CountryRepository,
    OwnerRepository,
    PokemonRepository,
    ReviewRepository,
    ReviewerRepository,
)
from tests.utils import count_rows


class TestBaseRepository:

    def test_exists_and_get(self, category_factory):
        category = category_factory()
        repository = CategoryRepository()

        assert repository.exists(category.id) is True
        assert repository.exists(category.id + 100) is False
        assert repository.get(category.id) is category
        assert repository.get(category.id + 100) is None

    def test_list_is_empty_without_rows(self):
        assert PokemonRepository().list() == []

    @pytest.mark.parametrize('candidate', ['Water', 'water', '  WATER ', 'wAtEr'])
    def test_get_by_name_normalizes(self, category_factory, candidate):
        category = category_factory(name='Water')

        assert CategoryRepository().get_by_name(candidate) is category

    @pytest.mark.parametrize('stored, candidate', [('ÉLECTRIQUE', 'électrique'), ('Straße', ' STRAßE ')])
    def test_get_by_name_folds_non_ascii_case(self, category_factory, stored, candidate):
        category = category_factory(name=stored)

        assert CategoryRepository().get_by_name(candidate) is category

    def test_get_by_name_excludes_id(self, category_factory):
        category = category_factory(name='Water')
        repository = CategoryRepository()

        assert repository.get_by_name('water', exclude_id=category.id) is None
        assert repository.get_by_name('water', exclude_id=category.id + 1) is category

    def test_create_assigns_id(self, db_session):
        category = Category(name='Dragon')

        assert CategoryRepository().create(category) is True
        assert category.id is not None
        assert count_rows(db_session, Category) == 1

    def test_failed_commit_returns_false(self, db_session):
        repository = CategoryRepository()

        with patch.object(db_session, 'commit', side_effect=OperationalError('COMMIT', {}, Exception('disk full'))):
            assert repository.create(Category(name='Ghost')) is False

        assert count_rows(db_session, Category) == 0

    def test_update_returns_merged_entity(self, category_factory):
        category = category_factory(name='Rock')
        repository = CategoryRepository()

        merged = repository.update(Category(id=category.id, name='Ground'))

        assert merged is category
        assert category.name == 'Ground'

    def test_delete(self, category_factory, db_session):
        category = category_factory()

        assert CategoryRepository().delete(category) is True
        assert count_rows(db_session, Category) == 0

    def test_delete_expired_entity(self, category_factory, db_session):
        category = category_factory()
        db_session.expire(category)

        assert CategoryRepository().delete(category) is True
        assert count_rows(db_session, Category) == 0


class TestPokemonRepository:

    def test_rating_average(self, pokemon_factory, review_factory):
        pokemon = pokemon_factory()
        for rating in (5, 2, 2):
            review_factory(pokemon=pokemon, rating=rating)

        assert PokemonRepository().get_rating(pokemon.id) == pytest.approx(3.0)

    def test_rating_without_reviews(self, pokemon_factory):
        assert PokemonRepository().get_rating(pokemon_factory().id) == 0.0

    def test_create_links_owner_and_category(self, owner_factory, category_factory):
        owner = owner_factory()
        category = category_factory()
        pokemon = Pokemon(name='Snorlax', birth_date=datetime.date(2015, 6, 1))

        assert PokemonRepository().create(pokemon, owner, category) is True
        assert OwnerRepository().list_pokemon_by_owner(owner.id) == [pokemon]
        assert CategoryRepository().list_pokemon_by_category(category.id) == [pokemon]

    def test_update_relinks(self, owner_factory, category_factory, pokemon_factory):
        old_owner = owner_factory()
        old_category = category_factory()
        pokemon = pokemon_factory(owners=[old_owner], categories=[old_category])
        new_owner = owner_factory()
        new_category = category_factory()

        merged = PokemonRepository().update(
            Pokemon(id=pokemon.id, name=pokemon.name, birth_date=pokemon.birth_date),
            new_owner,
            new_category,
        )

        assert merged.owners == [new_owner]
        assert merged.categories == [new_category]
        assert OwnerRepository().list_pokemon_by_owner(old_owner.id) == []


class TestOwnerAndCountryRepositories:

    def test_owner_name_lookup(self, owner_factory):
        owner = owner_factory(first_name='Ash', last_name='Ketchum')
        repository = OwnerRepository()

        assert repository.get_by_name(' KETCHUM', 'ash') is owner
        assert repository.get_by_name('ketchum') is owner
        assert repository.get_by_name('ketchum', 'gary') is None

    def test_owner_name_lookup_non_ascii(self, owner_factory):
        owner = owner_factory(first_name='Zoë', last_name='ÖZTÜRK')

        assert OwnerRepository().get_by_name('öztürk', 'ZOË') is owner

    def test_owners_of_pokemon(self, owned_pokemon):
        owners = OwnerRepository().list_owners_of_pokemon(owned_pokemon['pokemon'].id)

        assert owners == [owned_pokemon['owner']]

    def test_country_by_owner(self, owner_factory):
        owner = owner_factory()
        repository = CountryRepository()

        assert repository.get_country_by_owner(owner.id) is owner.country
        assert repository.get_country_by_owner(owner.id + 1000) is None

    def test_owners_from_country(self, country_factory, owner_factory):
        country = country_factory()
        owner = owner_factory(country=country)

        assert CountryRepository().list_owners_from_country(country.id) == [owner]


class TestReviewRepositories:

    def test_reviewer_lookup_with_missing_first_name(self, reviewer_factory):
        reviewer = reviewer_factory(first_name=None, last_name='Oak')
        repository = ReviewerRepository()

        assert repository.get_by_name(None, 'oak') is reviewer
        assert repository.get_by_name('', ' OAK ') is reviewer
        assert repository.get_by_name('Samuel', 'Oak') is None

    def test_review_title_lookup_non_ascii(self, review_factory):
        review = review_factory(title='ÉNORME')

        assert ReviewRepository().get_by_name(' énorme') is review

    def test_reviews_by_pokemon_and_reviewer(self, pokemon_factory, reviewer_factory, review_factory):
        pokemon = pokemon_factory()
        reviewer = reviewer_factory()
        both = review_factory(pokemon=pokemon, reviewer=reviewer)
        by_pokemon = review_factory(pokemon=pokemon)
        review_factory()
        repository = ReviewRepository()

        assert repository.list_reviews_by_pokemon(pokemon.id) == [both, by_pokemon]
        assert repository.list_reviews_by_reviewer(reviewer.id) == [both]
        assert ReviewerRepository().list_reviews_by_reviewer(reviewer.id) == [both]

    def test_delete_many(self, review_factory, db_session):
        reviews = [review_factory() for _ in range(3)]

        assert ReviewRepository().delete_many(reviews[:2]) is True
        assert count_rows(db_session, Review) == 1

    def test_delete_many_failure_keeps_rows(self, review_factory, db_session):
        reviews = [review_factory() for _ in range(2)]
        repository = ReviewRepository()

        with patch.object(db_session, 'commit', side_effect=OperationalError('COMMIT', {}, Exception('locked'))):
            assert repository.delete_many(reviews) is False

        assert count_rows(db_session, Review) == 2
