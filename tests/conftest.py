"""
Shared fixtures for auth tests
"""

import threading
from unittest.mock import MagicMock, patch

import pytest
from pyarrow import flight

from flightconnect.call_options import CallOptions, LOGIN_TIMEOUT


class StubConnection:
    """Minimal connection: attribute store plus cancel signal."""

    def __init__(self, login_timeout=None):
        self._attributes = {}
        if login_timeout is not None:
            self._attributes[LOGIN_TIMEOUT] = login_timeout
        self.cancel_event = threading.Event()

    def get_attribute(self, name):
        return self._attributes.get(name)


@pytest.fixture
def connection():
    return StubConnection()


@pytest.fixture
def client():
    return MagicMock(spec=flight.FlightClient)


@pytest.fixture
def passthrough_options():
    """Make CallOptions.to_flight() return the CallOptions itself so mocks can inspect it."""
    with patch.object(CallOptions, "to_flight", autospec=True, side_effect=lambda self: self):
        yield


@pytest.fixture
def make_connection():
    """Factory for stub connections with a given login timeout."""
    return StubConnection
