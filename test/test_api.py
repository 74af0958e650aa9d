"""
End-to-end tests through the HTTP routes (in-memory storage).
"""
import pytest
from bson import ObjectId

from socialapp.api.v1 import ROUTE_TABLE


def _sign_up(client, username, password="secret"):
    response = client.post("/api/users", json={"username": username, "password": password})
    assert response.status_code == 201
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return client


@pytest.fixture
def alice_client(client):
    return _sign_up(client, "alice")


@pytest.fixture
def bob_client(make_client):
    return _sign_up(make_client(), "bob")


def test_route_table_is_explicit():
    keys = [(route.method, route.path) for route in ROUTE_TABLE]

    assert len(keys) == len(set(keys))
    assert ("PATCH", "/communities/{id}/join") in keys


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_login_sets_session_cookie(alice_client):
    assert "sid" in alice_client.cookies

    response = alice_client.get("/api/session")

    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert "password" not in response.json()


def test_unauthenticated_request(client):
    response = client.post("/api/posts", json={"content": "hi"})

    assert response.status_code == 403
    assert response.json() == {"kind": "NotAllowed", "message": "Must be logged in!"}


def test_duplicate_community_title(alice_client, bob_client):
    response = alice_client.post("/api/communities", json={"title": "Hikers", "description": "desc"})
    assert response.status_code == 201
    assert response.json()["community"]["author"] == "alice"

    response = bob_client.post("/api/communities", json={"title": "Hikers", "description": "other"})

    assert response.status_code == 403
    assert response.json()["kind"] == "NotAllowed"
    assert "Community already exists" in response.json()["message"]


def test_membership_flow_with_readable_errors(alice_client, bob_client):
    created = alice_client.post("/api/communities", json={"title": "Hikers", "description": "desc"}).json()
    _id = created["community"]["_id"]

    assert bob_client.patch(f"/api/communities/{_id}/join").status_code == 200
    assert alice_client.get(f"/api/communities/{_id}/members").json() == {"num_members": 2}

    assert bob_client.patch(f"/api/communities/{_id}/leave").status_code == 200
    assert alice_client.get(f"/api/communities/{_id}/members").json() == {"num_members": 1}

    response = bob_client.patch(f"/api/communities/{_id}/leave")
    assert response.status_code == 404
    assert response.json() == {
        "kind": "NotFound",
        "message": "bob is not a member of community Hikers",
    }


def test_only_author_deletes_community(alice_client, bob_client):
    _id = alice_client.post("/api/communities", json={"title": "Hikers"}).json()["community"]["_id"]

    response = bob_client.delete(f"/api/communities/{_id}")
    assert response.status_code == 403
    assert response.json()["message"] == "bob is not the author of community Hikers"

    assert alice_client.delete(f"/api/communities/{_id}").status_code == 200
    assert alice_client.get("/api/communities").json() == []


def test_favorites_and_featuring(alice_client, bob_client):
    post = alice_client.post("/api/posts", json={"content": "hello"}).json()["post"]["_id"]

    assert bob_client.post(f"/api/posts/{post}/favorites").status_code == 201
    response = bob_client.post(f"/api/posts/{post}/favorites")
    assert response.status_code == 403
    assert response.json()["message"] == f"bob has already favorited item {post}"

    assert alice_client.get(f"/api/posts/{post}/favorites").json() == {"num_favorites": 1}
    assert len(alice_client.get("/api/users/bob/favorites").json()) == 1

    response = alice_client.post("/api/featured", json={"item": post})
    assert response.status_code == 200
    assert response.json()["featured"] is False
    assert alice_client.get("/api/featured").json() == []


def test_friend_requests(alice_client, bob_client):
    assert alice_client.post("/api/friend/requests/bob").status_code == 200

    requests = bob_client.get("/api/friend/requests").json()
    assert [(r["from"], r["to"], r["status"]) for r in requests] == [("alice", "bob", "pending")]

    response = bob_client.post("/api/friend/requests/alice")
    assert response.status_code == 403
    assert response.json()["message"] == "Friend request between bob and alice already exists!"

    assert bob_client.put("/api/friend/accept/alice").status_code == 200
    assert alice_client.get("/api/friends").json() == ["bob"]
    assert bob_client.get("/api/friends").json() == ["alice"]


def test_invalid_object_id_is_bad_request(alice_client):
    response = alice_client.patch("/api/communities/not-an-id/join")

    assert response.status_code == 400


def test_missing_body_field_is_validation_error(alice_client):
    response = alice_client.post("/api/communities", json={"description": "no title"})

    assert response.status_code == 422


def test_unknown_community_is_not_found(alice_client):
    response = alice_client.get(f"/api/communities/{ObjectId()}/members")

    assert response.status_code == 404
    assert response.json()["kind"] == "NotFound"


def test_logout_clears_session(alice_client):
    assert alice_client.post("/api/logout").status_code == 200

    response = alice_client.get("/api/session")
    assert response.status_code == 403


def test_documents_follow_response_models(alice_client):
    created = alice_client.post("/api/posts", json={"content": "hello", "options": {"background_color": "red"}})
    assert created.status_code == 201
    post = created.json()["post"]
    assert set(post) == {"_id", "author", "content", "options", "date_created", "date_updated"}
    assert post["author"] == "alice"
    assert post["options"] == {"background_color": "red"}
    assert ObjectId.is_valid(post["_id"])

    users = alice_client.get("/api/users").json()
    assert [set(user) for user in users] == [{"_id", "username", "date_created", "date_updated"}]

    community = alice_client.post("/api/communities", json={"title": "Hikers"}).json()["community"]
    assert community["members"] == [users[0]["_id"]]
    assert community["description"] == ""


def test_deleted_post_leaves_community_feed(alice_client):
    community = alice_client.post("/api/communities", json={"title": "Hikers"}).json()["community"]["_id"]
    post = alice_client.post("/api/posts", json={"content": "hello"}).json()["post"]["_id"]
    assert alice_client.post(f"/api/communities/{community}/items", json={"item": post}).status_code == 201

    assert alice_client.delete(f"/api/posts/{post}").status_code == 200

    assert alice_client.get(f"/api/communities/{community}/items").json() == []
