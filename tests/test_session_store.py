from datetime import timedelta

import pytest

from comingsoon.core.errors import SessionExpired, Unauthorized
from comingsoon.services.session_store import SessionStore


def test_create_then_validate_returns_identity(session_store):
    token = session_store.create({"username": "admin"})

    assert session_store.validate(token) == {"username": "admin"}
    assert token in session_store


def test_tokens_are_unique(session_store):
    tokens = {session_store.create({"username": "admin"}) for _ in range(20)}
    assert len(tokens) == 20


@pytest.mark.parametrize("token", [None, "", "not-a-real-token"])
def test_unknown_token_is_unauthorized(session_store, token):
    with pytest.raises(Unauthorized) as exc:
        session_store.validate(token)
    assert not isinstance(exc.value, SessionExpired)


def test_expired_token_is_rejected_and_evicted(session_store, clock):
    token = session_store.create({"username": "admin"})
    clock.advance(timedelta(hours=24).total_seconds())

    with pytest.raises(SessionExpired):
        session_store.validate(token)

    assert token not in session_store
    # Second attempt sees an unknown token, not an expired one
    with pytest.raises(Unauthorized) as exc:
        session_store.validate(token)
    assert not isinstance(exc.value, SessionExpired)


def test_validate_does_not_extend_expiry(session_store, clock):
    token = session_store.create({"username": "admin"})
    clock.advance(23 * 3600)
    session_store.validate(token)
    clock.advance(3600)

    with pytest.raises(SessionExpired):
        session_store.validate(token)


def test_destroy_is_idempotent(session_store):
    token = session_store.create({"username": "admin"})
    session_store.destroy(token)
    session_store.destroy(token)
    session_store.destroy(None)

    assert len(session_store) == 0


def test_purge_expired_runs_on_create(clock):
    store = SessionStore(ttl=timedelta(minutes=10), clock=clock)
    old = store.create({"username": "admin"})
    clock.advance(600)
    fresh = store.create({"username": "admin"})

    assert old not in store
    assert fresh in store
    assert len(store) == 1


def test_returned_identity_is_a_copy(session_store):
    token = session_store.create({"username": "admin"})
    session_store.validate(token)["username"] = "mallory"

    assert session_store.validate(token) == {"username": "admin"}
