import signal
import threading

import pytest

from packcli.helper import title, with_interrupt


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello", "Hello"),
        ("hello world", "Hello World"),
    ],
)
def test_title(text, expected):
    assert title(text) == expected


def test_title_lowercases_rest_and_keeps_apostrophes():
    assert title("HELLO") == title("hello")
    assert title("don't") == "Don't"


def test_interrupt_sets_event_and_restores_handler():
    original = signal.getsignal(signal.SIGINT)
    with with_interrupt() as cancelled:
        assert not cancelled.is_set()
        signal.raise_signal(signal.SIGINT)
        assert cancelled.wait(2)
    assert signal.getsignal(signal.SIGINT) is original


def test_parent_event_propagates():
    parent = threading.Event()
    with with_interrupt(parent) as cancelled:
        assert not cancelled.is_set()
        parent.set()
        assert cancelled.wait(2)


def test_exit_cancels_event():
    with with_interrupt() as cancelled:
        assert not cancelled.is_set()
    assert cancelled.is_set()