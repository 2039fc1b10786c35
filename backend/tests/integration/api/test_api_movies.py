"""HTTP tests for the movie catalog endpoints."""

from __future__ import annotations

import json

import pytest
import responses
from movie_catalog.infra.tmdb.tmdb_client import DEFAULT_BASE_URL
from tests.factories.movie import GenreFactory, MovieFactory, RatingFactory, WatchlistItemFactory

API = "/api/v1/movies"


class TestListMovies:
    def test_page_and_meta(self, client):
        MovieFactory.create_batch(3)
        resp = client.get(f"{API}?page=2&limit=2")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["meta"] == {"total": 3, "page": 2, "limit": 2}
        assert len(body["data"]) == 1

    def test_limit_is_capped(self, client):
        resp = client.get(f"{API}?limit=500")
        assert resp.get_json()["meta"]["limit"] == 100

    def test_bad_page(self, client):
        resp = client.get(f"{API}?page=0")
        assert resp.status_code == 422

    def test_filters(self, client):
        scifi = GenreFactory(name="Science Fiction")
        MovieFactory(title="Arrival", genres=[scifi])
        MovieFactory(title="Paddington")
        titles = [m["title"] for m in client.get(f"{API}?genre=fiction").get_json()["data"]]
        assert titles == ["Arrival"]
        titles = [m["title"] for m in client.get(f"{API}?search=PADD").get_json()["data"]]
        assert titles == ["Paddington"]

    def test_pages_are_cached_in_redis(self, client, redis_cache):
        MovieFactory(title="Heat")
        client.get(f"{API}?search=heat")
        cached = json.loads(redis_cache.get("movies_1_10_allgenre_heat"))
        assert [m["title"] for m in cached["items"]] == ["Heat"]


class TestGetMovie:
    def test_anonymous(self, client):
        movie = MovieFactory()
        data = client.get(f"{API}/{movie.id}").get_json()["data"]
        assert data["id"] == movie.id
        assert data["is_in_watchlist"] is False
        assert data["user_rating"] is None

    def test_authenticated_view(self, client, user, auth_header):
        movie = MovieFactory()
        WatchlistItemFactory(user=user, movie=movie)
        RatingFactory(user=user, movie=movie, rating=9)

        data = client.get(f"{API}/{movie.id}", headers=auth_header).get_json()["data"]
        assert data["is_in_watchlist"] is True
        assert data["user_rating"] == 9.0

    def test_missing(self, client):
        resp = client.get(f"{API}/424242")
        assert resp.status_code == 404
        assert resp.get_json()["detail"] == "Movie with ID 424242 not found"


class TestWrites:
    def test_writes_require_auth(self, client):
        assert client.post(API, json={"tmdb_id": 1, "title": "x"}).status_code == 401
        assert client.put(f"{API}/1", json={"title": "x"}).status_code == 401
        assert client.delete(f"{API}/1").status_code == 401
        assert client.post(f"{API}/sync").status_code == 401

    def test_create_update_delete(self, client, auth_header):
        resp = client.post(
            API,
            json={
                "tmdb_id": 27205,
                "title": "Inception",
                "release_date": "2010-07-16",
                "genres": [{"id": 28, "name": "Action"}],
            },
            headers=auth_header,
        )
        assert resp.status_code == 201
        created = resp.get_json()["data"]
        assert created["genres"] == [{"id": 28, "name": "Action"}]

        dup = client.post(API, json={"tmdb_id": 27205, "title": "Again"}, headers=auth_header)
        assert dup.status_code == 409

        resp = client.put(
            f"{API}/{created['id']}", json={"vote_average": 8.8}, headers=auth_header
        )
        assert resp.status_code == 200
        assert resp.get_json()["data"]["vote_average"] == 8.8
        assert resp.get_json()["data"]["title"] == "Inception"

        resp = client.delete(f"{API}/{created['id']}", headers=auth_header)
        assert resp.get_json() == {"message": "Movie deleted successfully"}
        assert client.get(f"{API}/{created['id']}").status_code == 404

    def test_update_invalidates_cached_detail(self, client, auth_header, redis_cache):
        movie = MovieFactory(title="Before")
        client.get(f"{API}/{movie.id}")
        assert redis_cache.exists(f"movie_{movie.id}_nouser")

        client.put(f"{API}/{movie.id}", json={"title": "After"}, headers=auth_header)

        assert not redis_cache.exists(f"movie_{movie.id}_nouser")
        assert client.get(f"{API}/{movie.id}").get_json()["data"]["title"] == "After"

    def test_create_validation(self, client, auth_header):
        resp = client.post(API, json={"title": ""}, headers=auth_header)
        assert resp.status_code == 422
        assert {"tmdb_id", "title"} <= set(resp.get_json()["details"]["errors"])


class TestSync:
    @responses.activate
    def test_sync_pulls_popular_movies(self, client, auth_header):
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/movie/popular",
            json={"page": 1, "results": [{"id": 155}]},
        )
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/movie/155",
            json={
                "id": 155,
                "title": "The Dark Knight",
                "release_date": "2008-07-16",
                "genres": [{"id": 80, "name": "Crime"}],
            },
        )

        resp = client.post(f"{API}/sync", json={"pages": 1}, headers=auth_header)

        assert resp.status_code == 200
        assert resp.get_json()["data"] == {
            "pages": 1,
            "movies": 1,
            "message": "Movies synced successfully",
        }
        listed = client.get(f"{API}?search=dark").get_json()["data"]
        assert listed[0]["genres"] == [{"id": 80, "name": "Crime"}]

    @responses.activate
    def test_provider_failure_is_bad_gateway(self, client, auth_header):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/movie/popular", status=503)
        resp = client.post(f"{API}/sync", json={"pages": 1}, headers=auth_header)
        assert resp.status_code == 502
        assert resp.get_json()["code"] == "bad_gateway"

    @pytest.mark.parametrize("pages", [0, 51])
    def test_pages_out_of_range(self, client, auth_header, pages):
        resp = client.post(f"{API}/sync", json={"pages": pages}, headers=auth_header)
        assert resp.status_code == 422
