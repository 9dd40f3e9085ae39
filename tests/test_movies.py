import pytest
from bson import ObjectId

MALFORMED_IDS = [
    "123",
    "not-an-object-id",
    "aaaaaaaaaaaa",
    "zzzzzzzzzzzzzzzzzzzzzzzz",
    "507f1f77bcf86cd79943901",
    "507f1f77bcf86cd7994390111",
]


def create_movie(client, payload):
    response = client.post("/movie", json=payload)
    assert response.status_code == 201
    return response.json()["insertedId"]


def test_list_movies_empty(client):
    response = client.get("/movie")
    assert response.status_code == 200
    assert response.json() == []


def test_list_movies_returns_every_document(client):
    for n in range(30):
        create_movie(client, {"title": f"Movie {n}"})

    response = client.get("/movie")
    assert response.status_code == 200
    titles = [doc["title"] for doc in response.json()]
    assert titles == [f"Movie {n}" for n in range(30)]
    assert all(ObjectId.is_valid(doc["_id"]) for doc in response.json())


def test_create_movie_returns_insert_result(client, movies):
    response = client.post("/movie", json={"title": "Inception", "year": 2010})
    assert response.status_code == 201
    body = response.json()
    assert body["acknowledged"] is True
    assert ObjectId.is_valid(body["insertedId"])
    assert movies.docs[0]["_id"] == ObjectId(body["insertedId"])


def test_create_then_get_round_trip(client):
    payload = {"title": "Arrival", "genres": ["Drama", "Sci-Fi"], "details": {"runtime": 116}}
    movie_id = create_movie(client, payload)

    response = client.get(f"/movie/{movie_id}")
    assert response.status_code == 200
    assert response.json() == {"_id": movie_id, **payload}


def test_create_movie_rejects_non_object_body(client, fake_db):
    response = client.post("/movie", json=["title", "Inception"])
    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be a JSON object"}
    assert "movie.insert_one" not in fake_db.calls


def test_get_missing_movie_is_404(client):
    response = client.get(f"/movie/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Movie not found"}


@pytest.mark.parametrize("bad_id", MALFORMED_IDS)
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_malformed_id_rejected_before_database(client, fake_db, method, bad_id):
    kwargs = {"json": {"title": "x"}} if method == "PUT" else {}
    response = client.request(method, f"/movie/{bad_id}", **kwargs)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid ID format"}
    assert fake_db.calls == []


def test_update_merges_fields(client):
    movie_id = create_movie(client, {"title": "Heat", "year": 1994})

    response = client.put(f"/movie/{movie_id}", json={"year": 1995, "director": "Michael Mann"})
    assert response.status_code == 200
    assert response.json() == {"message": "Movie updated successfully!"}

    doc = client.get(f"/movie/{movie_id}").json()
    assert doc == {"_id": movie_id, "title": "Heat", "year": 1995, "director": "Michael Mann"}


def test_update_never_changes_identifier(client, movies):
    movie_id = create_movie(client, {"title": "Alien"})
    other_id = str(ObjectId())

    response = client.put(f"/movie/{movie_id}", json={"_id": other_id, "title": "Aliens"})
    assert response.status_code == 200

    assert client.get(f"/movie/{movie_id}").json() == {"_id": movie_id, "title": "Aliens"}
    assert client.get(f"/movie/{other_id}").status_code == 404
    assert [doc["_id"] for doc in movies.docs] == [ObjectId(movie_id)]


def test_update_missing_movie_is_404(client):
    response = client.put(f"/movie/{ObjectId()}", json={"title": "Ghost"})
    assert response.status_code == 404
    assert response.json() == {"error": "Movie not found"}


def test_update_with_only_identifier_skips_write(client, fake_db):
    movie_id = create_movie(client, {"title": "Solaris"})

    response = client.put(f"/movie/{movie_id}", json={"_id": movie_id})
    assert response.status_code == 200
    assert "movie.update_one" not in fake_db.calls

    response = client.put(f"/movie/{ObjectId()}", json={})
    assert response.status_code == 404


def test_delete_is_not_idempotent(client):
    movie_id = create_movie(client, {"title": "Memento"})

    first = client.delete(f"/movie/{movie_id}")
    assert first.status_code == 200
    assert first.json() == {"message": "Movie deleted successfully!"}

    second = client.delete(f"/movie/{movie_id}")
    assert second.status_code == 404
    assert second.json() == {"error": "Movie not found"}


def test_inception_lifecycle(client):
    created = client.post("/movie", json={"title": "Inception"})
    assert created.status_code == 201
    movie_id = created.json()["insertedId"]

    fetched = client.get(f"/movie/{movie_id}")
    assert fetched.status_code == 200
    assert fetched.json() == {"_id": movie_id, "title": "Inception"}

    deleted = client.delete(f"/movie/{movie_id}")
    assert deleted.json() == {"message": "Movie deleted successfully!"}

    assert client.get(f"/movie/{movie_id}").status_code == 404


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("GET", "/movie", {}),
        ("GET", f"/movie/{ObjectId()}", {}),
        ("POST", "/movie", {"json": {"title": "Inception"}}),
        ("PUT", f"/movie/{ObjectId()}", {"json": {"title": "Inception"}}),
        ("DELETE", f"/movie/{ObjectId()}", {}),
    ],
)
def test_database_failure_is_500(broken_client, method, path, kwargs):
    response = broken_client.request(method, path, **kwargs)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_disconnected_database_is_503(disconnected_client):
    response = disconnected_client.get("/movie")
    assert response.status_code == 503
    assert response.json() == {"error": "Database service not available"}


def test_malformed_id_wins_over_disconnected_database(disconnected_client):
    response = disconnected_client.get("/movie/123")
    assert response.status_code == 400
