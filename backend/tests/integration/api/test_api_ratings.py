"""HTTP tests for the rating endpoints."""

from __future__ import annotations

from tests.factories.movie import MovieFactory, RatingFactory

API = "/api/v1/ratings"


def test_requires_auth(client):
    assert client.get(f"{API}/user").status_code == 401


def test_rate_then_read_back(client, auth_header, user):
    movie = MovieFactory(title="Amelie")

    resp = client.post(
        API, json={"movie_id": movie.id, "rating": 9, "comment": "Lovely"}, headers=auth_header
    )
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert (data["rating"], data["comment"], data["movie_title"]) == (9.0, "Lovely", "Amelie")
    assert data["user_id"] == user.id

    mine = client.get(f"{API}/{movie.id}", headers=auth_header).get_json()["data"]
    assert mine["id"] == data["id"]

    listed = client.get(f"{API}/user", headers=auth_header).get_json()
    assert listed["meta"] == {"total": 1}

    detail = client.get(f"/api/v1/movies/{movie.id}", headers=auth_header).get_json()["data"]
    assert detail["user_rating"] == 9.0


def test_unrated_movie_returns_null(client, auth_header):
    movie = MovieFactory()
    resp = client.get(f"{API}/{movie.id}", headers=auth_header)
    assert resp.status_code == 200
    assert resp.get_json() == {"data": None}


def test_out_of_range_score(client, auth_header):
    movie = MovieFactory()
    resp = client.post(API, json={"movie_id": movie.id, "rating": 11}, headers=auth_header)
    assert resp.status_code == 422


def test_unknown_movie(client, auth_header):
    resp = client.post(API, json={"movie_id": 9999, "rating": 5}, headers=auth_header)
    assert resp.status_code == 404


def test_patch_and_delete(client, auth_header, user):
    movie = MovieFactory()
    RatingFactory(user=user, movie=movie, rating=2, comment="no")

    resp = client.patch(f"{API}/{movie.id}", json={"rating": 7}, headers=auth_header)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["rating"] == 7.0
    assert resp.get_json()["data"]["comment"] == "no"

    resp = client.delete(f"{API}/{movie.id}", headers=auth_header)
    assert resp.get_json() == {"message": "Rating deleted successfully"}

    resp = client.delete(f"{API}/{movie.id}", headers=auth_header)
    assert resp.status_code == 404
    assert resp.get_json()["detail"] == f"Rating for movie ID {movie.id} not found"


def test_movie_ratings_and_average(client, auth_header):
    movie = MovieFactory()
    RatingFactory(movie=movie, rating=10)
    RatingFactory(movie=movie, rating=7)
    RatingFactory(movie=movie, rating=6)

    listed = client.get(f"{API}/movie/{movie.id}", headers=auth_header).get_json()
    assert listed["meta"]["total"] == 3

    avg = client.get(f"{API}/movie/{movie.id}/average", headers=auth_header).get_json()["data"]
    assert avg == {"average": 7.67, "count": 3}


def test_rating_clears_cached_average(client, auth_header, redis_cache):
    movie = MovieFactory()
    RatingFactory(movie=movie, rating=4)
    client.get(f"{API}/movie/{movie.id}/average", headers=auth_header)
    assert redis_cache.exists(f"rating_avg_{movie.id}")

    client.post(API, json={"movie_id": movie.id, "rating": 8}, headers=auth_header)

    assert not redis_cache.exists(f"rating_avg_{movie.id}")
    avg = client.get(f"{API}/movie/{movie.id}/average", headers=auth_header).get_json()["data"]
    assert avg == {"average": 6.0, "count": 2}
