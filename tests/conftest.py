import sys
import threading
import time
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1]))

import logging

import pytest

from peerauth.logger import LOGGER_NAME, AuthLogger
from peerauth.model import Credentials
from peerauth.verifiers import STANDARD_PARAMS, STRONG_PARAMS, Argon2Verifier


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.events = []

    def emit(self, record):
        if isinstance(record.msg, dict):
            self.events.append(record.msg)


class BlockingAuthenticator:
    """Returns *result*, holding callers for *blocking* usernames until released."""

    def __init__(self, result, blocking=None):
        self.result = result
        self.blocking = blocking
        self.calls = []
        self.entered = threading.Event()
        self.release = threading.Event()
        self._lock = threading.Lock()

    def authenticate(self, credentials):
        with self._lock:
            self.calls.append(credentials)
        if self.blocking is None or credentials.username in self.blocking:
            self.entered.set()
            assert self.release.wait(5), "never released"
        return self.result


class CountingVerifier:
    def __init__(self, inner):
        self.inner = inner
        self.calls = 0
        self._lock = threading.Lock()

    def verify(self, candidate, stored):
        with self._lock:
            self.calls += 1
        return self.inner.verify(candidate, stored)

    def hash(self, plain):
        return self.inner.hash(plain)


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met in time")
        time.sleep(0.005)


@pytest.fixture()
def auth_logger():
    return AuthLogger()


@pytest.fixture()
def events():
    handler = RecordingHandler()
    root = logging.getLogger(LOGGER_NAME)
    root.addHandler(handler)
    yield handler.events
    root.removeHandler(handler)


@pytest.fixture(scope="session")
def standard_verifier():
    return Argon2Verifier(**STANDARD_PARAMS)


@pytest.fixture(scope="session")
def strong_verifier():
    return Argon2Verifier(**STRONG_PARAMS)


@pytest.fixture()
def bob():
    return Credentials(username="bob", password="foo")


@pytest.fixture()
def credential_file(tmp_path):
    path = tmp_path / "credentials.txt"
    path.write_text(
        "# allowed peers\n"
        "bob:foo\n"
        "\n"
        "  alice : bar  \n"
        "carol:pa:ss\n",
        encoding="utf-8",
    )
    return path
