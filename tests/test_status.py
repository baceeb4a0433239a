import pytest

from pylbfgs import LBFGSError, Status, strerror
from pylbfgs.workspace import Workspace


def test_success_family():
    successes = {status for status in Status if status.is_success}
    assert successes == {Status.CONVERGENCE, Status.STOP, Status.ALREADY_MINIMIZED}


def test_codes_match_legacy_values():
    assert Status.UNKNOWNERROR == -1024
    assert Status.CANCELED == -1022
    assert Status.INCREASEGRADIENT == -1001
    assert len(Status) == 27


@pytest.mark.parametrize("status", list(Status))
def test_every_status_has_a_distinct_description(status):
    message = strerror(status)
    assert message and message != "(unknown)"
    assert status.message == message
    others = [strerror(other) for other in Status if other is not status]
    assert message not in others


def test_unknown_code():
    assert strerror(12345) == "(unknown)"
    assert strerror(-1) == "(unknown)"


def test_strerror_accepts_plain_integers():
    assert strerror(0) == "Success: reached convergence (g_epsilon)."


def test_error_carries_status():
    err = LBFGSError(Status.MINIMUMSTEP)
    assert err.status is Status.MINIMUMSTEP
    assert str(err) == strerror(Status.MINIMUMSTEP)


@pytest.mark.parametrize("obj", [Status, Workspace.acquire, Workspace.release])
def test_public_objects_are_documented(obj):
    assert obj.__doc__ and obj.__doc__.strip()
