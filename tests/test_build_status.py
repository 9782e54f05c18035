import pytest

from ferrousci.build_status import BuildStatus


def test_build_status_terminal():
    assert not BuildStatus.PENDING.is_terminal()
    assert not BuildStatus.RUNNING.is_terminal()
    assert BuildStatus.SUCCESS.is_terminal()
    assert BuildStatus.FAILED.is_terminal()
    assert BuildStatus.CANCELLED.is_terminal()


def test_build_status_in_progress():
    assert not BuildStatus.PENDING.is_in_progress()
    assert BuildStatus.RUNNING.is_in_progress()
    assert not BuildStatus.SUCCESS.is_in_progress()
    assert not BuildStatus.FAILED.is_in_progress()
    assert not BuildStatus.CANCELLED.is_in_progress()


def test_build_status_display():
    assert str(BuildStatus("Success")) == "Success"
    assert str(BuildStatus("Failed")) == "Failed"
    assert f"{BuildStatus('Cancelled')}" == "Cancelled"
    assert str(BuildStatus.default()) == "Pending"


def test_build_status_description():
    assert BuildStatus.RUNNING.description() == "Running"
    assert BuildStatus.SUCCESS.description() == "Completed successfully"
    assert BuildStatus.PENDING.description() == "Waiting to start"


def test_success_and_failed_flags():
    assert BuildStatus.SUCCESS.is_success()
    assert not BuildStatus.FAILED.is_success()
    assert BuildStatus.FAILED.is_failed()
    assert not BuildStatus.CANCELLED.is_failed()


def test_default_is_pending():
    assert BuildStatus.default() is BuildStatus.PENDING


@pytest.mark.parametrize(
    "status, emoji",
    [
        (BuildStatus.PENDING, "\u23f8\ufe0f"),
        (BuildStatus.RUNNING, "\U0001f3c3"),
        (BuildStatus.SUCCESS, "\u2705"),
        (BuildStatus.FAILED, "\u274c"),
        (BuildStatus.CANCELLED, "\U0001f6ab"),
    ],
)
def test_emoji(status, emoji):
    assert status.emoji() == emoji


def test_round_trip_by_value():
    for status in BuildStatus:
        assert BuildStatus(str(status)) is status