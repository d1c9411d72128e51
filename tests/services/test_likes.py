# tests/services/test_likes.py
"""Tests for the like ledger."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from noteboard.core.errors import Forbidden, NotFound, ValidationError
from noteboard.models import Like, Notification
from noteboard.services.likes import LikeLedger, ToggleResult


def _notifications(db_session):
    return list(db_session.execute(select(Notification).order_by(Notification.id)).scalars())


@pytest.mark.parametrize("target_type", ["post", "reply"])
def test_toggle_twice_restores_count(
    db_session, alice, bob, make_post, make_reply, as_identity, target_type
) -> None:
    post = make_post(alice, "Likeable")
    target_id = post.id if target_type == "post" else make_reply(post, alice).id
    ledger = LikeLedger(db_session)

    first = ledger.toggle(as_identity(bob), target_id, target_type)
    second = ledger.toggle(as_identity(bob), target_id, target_type)

    assert (first.liked, first.count) == (True, 1)
    assert (second.liked, second.count) == (False, 0)
    assert ledger.get_user_like_status(bob.id, target_id, target_type) is False


def test_like_post_notifies_owner(db_session, alice, bob, make_post, as_identity) -> None:
    post = make_post(alice, "Sunset", text="photo")

    LikeLedger(db_session).toggle(as_identity(bob), post.id, "post")

    [notice] = _notifications(db_session)
    assert notice.recipient_user_id == alice.id
    assert notice.type == "like-post"
    assert notice.actor_username == "bob"
    assert notice.message == 'bob liked your forum "Sunset"'


def test_like_reply_notifies_author(db_session, alice, bob, make_post, make_reply, as_identity) -> None:
    post = make_post(alice, "Recipes")
    reply = make_reply(post, bob, "try cumin")

    LikeLedger(db_session).toggle(as_identity(alice), reply.id, "reply")

    [notice] = _notifications(db_session)
    assert notice.recipient_user_id == bob.id
    assert notice.type == "like-reply"
    assert notice.post_id == post.id
    assert notice.post_title == "Recipes"
    assert notice.reply_id == reply.id
    assert notice.reply_text == "try cumin"


def test_liking_own_post_is_silent_but_counted(db_session, alice, make_post, as_identity) -> None:
    post = make_post(alice, "Selfie")

    result = LikeLedger(db_session).toggle(as_identity(alice), post.id, "post")

    assert result.liked is True
    assert result.count == 1
    assert _notifications(db_session) == []


def test_unlike_does_not_notify_again(db_session, alice, bob, make_post, as_identity) -> None:
    post = make_post(alice, "Once")
    ledger = LikeLedger(db_session)
    ledger.toggle(as_identity(bob), post.id, "post")
    ledger.toggle(as_identity(bob), post.id, "post")

    assert len(_notifications(db_session)) == 1


def test_invalid_target_type(db_session, alice, as_identity) -> None:
    ledger = LikeLedger(db_session)
    with pytest.raises(ValidationError):
        ledger.toggle(as_identity(alice), 1, "comment")
    with pytest.raises(ValidationError):
        ledger.get_count(1, "")


def test_missing_target(db_session, alice, as_identity) -> None:
    ledger = LikeLedger(db_session)
    with pytest.raises(NotFound):
        ledger.toggle(as_identity(alice), 404, "post")
    with pytest.raises(NotFound):
        ledger.toggle(as_identity(alice), 404, "reply")


def test_likes_are_counted_per_target_type(db_session, alice, bob, make_post, make_reply, as_identity) -> None:
    post = make_post(alice, "Same id space")
    reply = make_reply(post, alice)
    ledger = LikeLedger(db_session)
    ledger.toggle(as_identity(bob), post.id, "post")

    assert ledger.get_count(post.id, "post") == 1
    if reply.id != post.id:
        assert ledger.get_count(reply.id, "post") == 0
    assert ledger.get_count(reply.id, "reply") == 0


def test_liked_lists_are_newest_first_and_private(
    db_session, alice, bob, make_post, make_reply, as_identity
) -> None:
    older = make_post(alice, "Older")
    newer = make_post(alice, "Newer")
    reply = make_reply(older, alice, "a reply")
    ledger = LikeLedger(db_session)
    ledger.toggle(as_identity(bob), older.id, "post")
    ledger.toggle(as_identity(bob), newer.id, "post")
    ledger.toggle(as_identity(bob), reply.id, "reply")

    liked = ledger.liked_posts(bob.id, as_identity(bob))
    assert [item.title for item in liked] == ["Newer", "Older"]
    assert all(item.username == "alice" for item in liked)

    [liked_reply] = ledger.liked_replies(bob.id, as_identity(bob))
    assert liked_reply.text == "a reply"
    assert liked_reply.post_title == "Older"
    assert liked_reply.username == "alice"

    with pytest.raises(Forbidden):
        ledger.liked_posts(bob.id, as_identity(alice))
    with pytest.raises(Forbidden):
        ledger.liked_replies(bob.id, as_identity(alice))


def test_racing_duplicate_like_is_ignored(db_session, alice, bob, make_post, as_identity, monkeypatch) -> None:
    post = make_post(alice, "Contested")
    db_session.add(Like(user_id=bob.id, target_id=post.id, target_type="post"))
    db_session.commit()
    ledger = LikeLedger(db_session)
    # Simulate the other toggle committing between the lookup and the insert.
    monkeypatch.setattr(ledger.likes, "find_one", lambda **filters: None)

    result = ledger.toggle(as_identity(bob), post.id, "post")

    assert result == ToggleResult(liked=True, count=1)
    assert [n for n in _notifications(db_session) if n.type == "like-post"] == []
