# tests/v1/test_likes.py
"""Tests for like endpoints."""

from __future__ import annotations

from fastapi import status


def _toggle(client, headers, target_id: int, target_type: str = "post"):
    return client.post(
        "/api/v1/likes",
        json={"target_id": target_id, "target_type": target_type},
        headers=headers,
    )


def test_toggle_and_status(client, alice, make_post, alice_headers, bob_headers) -> None:
    post = make_post(alice, "Likeable")
    params = {"target_id": post.id, "target_type": "post"}

    liked = _toggle(client, bob_headers, post.id)
    assert liked.status_code == status.HTTP_200_OK
    assert liked.json() == {"liked": True, "count": 1}
    assert client.get("/api/v1/likes/user", params=params, headers=bob_headers).json() == {"liked": True}
    assert client.get("/api/v1/likes/user", params=params, headers=alice_headers).json() == {"liked": False}

    assert _toggle(client, alice_headers, post.id).json() == {"liked": True, "count": 2}
    assert _toggle(client, bob_headers, post.id).json() == {"liked": False, "count": 1}
    assert client.get("/api/v1/likes/count", params=params, headers=bob_headers).json() == {"count": 1}


def test_like_creates_notification_for_owner_only(client, alice, make_post, alice_headers, bob_headers) -> None:
    post = make_post(alice, "Notify me")
    _toggle(client, alice_headers, post.id)
    _toggle(client, bob_headers, post.id)

    notices = client.get("/api/v1/notifications", headers=alice_headers).json()
    assert len(notices) == 1
    assert notices[0]["type"] == "like-post"
    assert notices[0]["actor_username"] == "bob"


def test_invalid_target_type(client, alice_headers) -> None:
    assert _toggle(client, alice_headers, 1, "comment").status_code == status.HTTP_400_BAD_REQUEST
    response = client.get(
        "/api/v1/likes/count", params={"target_id": 1, "target_type": "user"}, headers=alice_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_missing_target(client, alice_headers) -> None:
    assert _toggle(client, alice_headers, 404, "reply").status_code == status.HTTP_404_NOT_FOUND


def test_count_requires_query_parameters(client, alice_headers) -> None:
    response = client.get("/api/v1/likes/count", headers=alice_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
