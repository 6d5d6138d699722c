import logging

import pytest

from socialproof.errors import NetworkError, PersistenceUnavailable
from socialproof.policy import FETCH_CONTENT, READ_THROTTLE_STATE, recover


def test_recover_returns_action_result() -> None:
    assert recover(READ_THROTTLE_STATE, lambda: "value", lambda: "fallback") == "value"


def test_recover_uses_fallback_for_covered_errors(caplog: pytest.LogCaptureFixture) -> None:
    def fail() -> str:
        raise NetworkError(503, "down")

    with caplog.at_level(logging.ERROR):
        assert recover(FETCH_CONTENT, fail, lambda: "generated") == "generated"
    assert "using generated content" in caplog.text


def test_recover_propagates_other_errors() -> None:
    def fail() -> str:
        raise PersistenceUnavailable("disk gone")

    with pytest.raises(PersistenceUnavailable):
        recover(FETCH_CONTENT, fail, lambda: "generated")


def test_recover_does_not_hide_programming_errors() -> None:
    def fail() -> str:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        recover(READ_THROTTLE_STATE, fail, lambda: "fallback")
