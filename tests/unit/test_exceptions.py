"""Messages and hierarchy of scopehound errors."""

import pytest

from scopehound.core.exceptions import (
    LaunchError,
    ParseError,
    ProcessError,
    ProcessTimeout,
    QueueFull,
    ScopeHoundError,
    SourceUnavailableError,
)


@pytest.mark.parametrize(
    "error",
    [
        QueueFull(2),
        LaunchError("not found", command="cscope"),
        ProcessError("boom", returncode=1),
        ProcessTimeout(5.0),
        ParseError("bad", line="x"),
        SourceUnavailableError("/a.c"),
    ],
)
def test_all_errors_share_a_base(error):
    assert isinstance(error, ScopeHoundError)


def test_queue_full_message():
    error = QueueFull(3)

    assert str(error) == "queue full"
    assert error.capacity == 3


def test_process_error_prefers_stderr():
    assert str(ProcessError("cscope: cannot open file", returncode=1)) == "cscope: cannot open file"
    assert str(ProcessError("", returncode=4)) == "exit status 4"


def test_timeout_message_and_fields():
    error = ProcessTimeout(2.5)

    assert str(error) == "timed out after 2.5s"
    assert error.returncode is None


def test_source_unavailable_message():
    error = SourceUnavailableError("/src/x.c", line="x.c f 1 y", reason="denied")

    assert str(error) == 'Could not open "/src/x.c".'
    assert error.line == "x.c f 1 y"
    assert error.reason == "denied"
