"""
Owner endpoint tests: country validation, full-name conflicts and the
owner's Pokemon listing.
"""

from typing import Dict

import pytest
from flask.testing import FlaskClient

from models import Owner
from tests.utils import assert_error_response, count_rows, post_json, put_json

OWNER_URL = '/api/Owner'


@pytest.mark.integration
class TestOwnerReads:

    def test_list_owners(self, client: FlaskClient, owner_factory):
        owners = [owner_factory(), owner_factory()]

        response = client.get(OWNER_URL)

        assert response.status_code == 200
        assert [o['id'] for o in response.get_json()] == [o.id for o in owners]

    def test_get_owner_dto(self, client: FlaskClient, owner_factory):
        owner = owner_factory(first_name='Ash', last_name='Ketchum', gym=None)

        response = client.get(f"{OWNER_URL}/{owner.id}")

        assert response.status_code == 200
        assert response.get_json() == {'id': owner.id, 'firstName': 'Ash', 'lastName': 'Ketchum'}

    def test_get_unknown_owner(self, client: FlaskClient):
        assert_error_response(client.get(f"{OWNER_URL}/77"), 404, 'Owner with ID 77 not found')

    @pytest.mark.parametrize('bad_id', [0, -1])
    def test_get_invalid_id(self, client: FlaskClient, bad_id: int):
        assert_error_response(client.get(f"{OWNER_URL}/{bad_id}"), 400, 'Invalid owner ID')

    def test_pokemon_by_owner(self, client: FlaskClient, owned_pokemon: Dict, pokemon_factory):
        pokemon_factory()

        response = client.get(f"{OWNER_URL}/{owned_pokemon['owner'].id}/pokemon")

        assert response.status_code == 200
        assert [p['id'] for p in response.get_json()] == [owned_pokemon['pokemon'].id]

    def test_pokemon_by_unknown_owner(self, client: FlaskClient):
        assert client.get(f"{OWNER_URL}/404/pokemon").status_code == 404

    def test_pokemon_by_invalid_owner_id(self, client: FlaskClient):
        assert client.get(f"{OWNER_URL}/0/pokemon").status_code == 400


@pytest.mark.integration
class TestOwnerCreate:

    def test_create_owner(self, client: FlaskClient, country_factory, db_session):
        country = country_factory()

        response = post_json(client, f"{OWNER_URL}?countryId={country.id}",
                             {'firstName': 'Brock', 'lastName': 'Harrison', 'gym': 'Pewter Gym'})

        assert response.status_code == 201
        body = response.get_json()
        assert body['firstName'] == 'Brock'
        assert body['gym'] == 'Pewter Gym'
        assert response.headers['Location'].endswith(f"{OWNER_URL}/{body['id']}")
        assert db_session.get(Owner, body['id']).country_id == country.id

    @pytest.mark.parametrize('query', ['', '?countryId=0', '?countryId=-2', '?countryId=x'])
    def test_country_id_required(self, client: FlaskClient, query: str):
        response = post_json(client, f"{OWNER_URL}{query}", {'firstName': 'A', 'lastName': 'B'})

        assert_error_response(response, 400, 'Valid country ID is required')

    def test_unknown_country(self, client: FlaskClient, db_session):
        response = post_json(client, f"{OWNER_URL}?countryId=999", {'firstName': 'A', 'lastName': 'B'})

        assert_error_response(response, 404, 'Country with ID 999 not found')
        assert count_rows(db_session, Owner) == 0

    @pytest.mark.parametrize('first, last', [('Misty', 'Waterflower'), ('misty', 'WATERFLOWER'),
                                             (' Misty ', ' waterflower')])
    def test_duplicate_full_name(self, client: FlaskClient, owner_factory, first: str, last: str):
        existing = owner_factory(first_name='Misty', last_name='Waterflower')

        response = post_json(client, f"{OWNER_URL}?countryId={existing.country_id}",
                             {'firstName': first, 'lastName': last})

        assert response.status_code == 409

    def test_same_last_name_different_first_name(self, client: FlaskClient, owner_factory):
        existing = owner_factory(first_name='Misty', last_name='Waterflower')

        response = post_json(client, f"{OWNER_URL}?countryId={existing.country_id}",
                             {'firstName': 'Daisy', 'lastName': 'Waterflower'})

        assert response.status_code == 201

    def test_missing_body(self, client: FlaskClient, country_factory):
        country = country_factory()

        response = client.post(f"{OWNER_URL}?countryId={country.id}")

        assert_error_response(response, 400, 'Owner data is required')

    def test_missing_last_name(self, client: FlaskClient, country_factory):
        country = country_factory()

        response = post_json(client, f"{OWNER_URL}?countryId={country.id}", {'firstName': 'Gary'})

        body = assert_error_response(response, 400)
        assert 'lastName' in body['error_details']


@pytest.mark.integration
class TestOwnerUpdateDelete:

    def test_update_without_country_keeps_country(self, client: FlaskClient, owner_factory, db_session):
        owner = owner_factory()
        country_id = owner.country_id

        response = put_json(client, f"{OWNER_URL}/{owner.id}",
                            {'id': owner.id, 'firstName': 'Gary', 'lastName': 'Oak', 'gym': 'Viridian'})

        assert response.status_code == 204
        db_session.expire_all()
        updated = db_session.get(Owner, owner.id)
        assert (updated.first_name, updated.last_name, updated.gym) == ('Gary', 'Oak', 'Viridian')
        assert updated.country_id == country_id

    def test_update_moves_owner_to_country(self, client: FlaskClient, owner_factory,
                                           country_factory, db_session):
        owner = owner_factory()
        country = country_factory()

        response = put_json(client, f"{OWNER_URL}/{owner.id}?countryId={country.id}",
                            {'id': owner.id, 'firstName': owner.first_name, 'lastName': owner.last_name})

        assert response.status_code == 204
        db_session.expire_all()
        assert db_session.get(Owner, owner.id).country_id == country.id

    def test_update_with_unknown_country(self, client: FlaskClient, owner_factory):
        owner = owner_factory()

        response = put_json(client, f"{OWNER_URL}/{owner.id}?countryId=999",
                            {'id': owner.id, 'firstName': 'Gary', 'lastName': 'Oak'})

        assert_error_response(response, 404, 'Country with ID 999 not found')

    def test_update_id_mismatch(self, client: FlaskClient, owner_factory):
        owner = owner_factory()

        response = put_json(client, f"{OWNER_URL}/{owner.id}",
                            {'id': owner.id + 10, 'firstName': 'Gary', 'lastName': 'Oak'})

        assert_error_response(response, 400, 'Owner ID mismatch')

    def test_update_conflicting_name(self, client: FlaskClient, owner_factory):
        owner = owner_factory()
        other = owner_factory(first_name='Gary', last_name='Oak')

        response = put_json(client, f"{OWNER_URL}/{owner.id}",
                            {'id': owner.id, 'firstName': 'GARY', 'lastName': 'oak'})

        assert response.status_code == 409
        assert client.get(f"{OWNER_URL}/{other.id}").get_json()['firstName'] == 'Gary'

    def test_update_unknown_owner(self, client: FlaskClient):
        response = put_json(client, f"{OWNER_URL}/55", {'id': 55, 'firstName': 'A', 'lastName': 'B'})

        assert response.status_code == 404

    def test_delete_owner_keeps_pokemon(self, client: FlaskClient, owned_pokemon: Dict):
        owner = owned_pokemon['owner']

        response = client.delete(f"{OWNER_URL}/{owner.id}")

        assert response.status_code == 204
        assert client.get(f"{OWNER_URL}/{owner.id}").status_code == 404
        assert client.get(f"/api/Pokemon/{owned_pokemon['pokemon'].id}").status_code == 200

    def test_delete_unknown_owner(self, client: FlaskClient):
        assert client.delete(f"{OWNER_URL}/808").status_code == 404

    def test_delete_invalid_id(self, client: FlaskClient):
        assert client.delete(f"{OWNER_URL}/-8").status_code == 400
