from __future__ import annotations

import base64
from datetime import timedelta

import pytest
from conftest import START, FrozenClock

from blog.application.services.session_issuer import SessionIssuer


def test_expiration_time_is_now_plus_duration() -> None:
    clock = FrozenClock()
    issuer = SessionIssuer(duration=timedelta(minutes=5), clock=clock)

    assert issuer.expiration_time() == START + timedelta(minutes=5)
    clock.advance(minutes=2)
    assert issuer.expiration_time() == START + timedelta(minutes=7)


def test_is_expired_boundary_is_inclusive() -> None:
    clock = FrozenClock()
    issuer = SessionIssuer(duration=timedelta(minutes=5), clock=clock)
    deadline = START + timedelta(minutes=5)

    assert issuer.is_expired(deadline) is False
    clock.advance(minutes=5)
    assert issuer.is_expired(deadline) is True
    clock.advance(seconds=1)
    assert issuer.is_expired(deadline) is True


def test_new_session_ids_are_128_bit_and_cookie_safe() -> None:
    issuer = SessionIssuer(duration=timedelta(minutes=5))

    ids = {issuer.new_session_id() for _ in range(200)}

    assert len(ids) == 200
    for session_id in ids:
        assert all(c.isalnum() or c in "-_" for c in session_id)
        padded = session_id + "=" * (-len(session_id) % 4)
        assert len(base64.urlsafe_b64decode(padded)) == 16


@pytest.mark.parametrize("duration", [timedelta(0), timedelta(seconds=-1)])
def test_non_positive_duration_is_rejected(duration: timedelta) -> None:
    with pytest.raises(ValueError):
        SessionIssuer(duration=duration)
