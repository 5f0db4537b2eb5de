"""
Tests for the async connection wrapper
"""

import threading
from unittest.mock import MagicMock, Mock

import anyio
import pytest
from pyarrow import flight

from flightconnect import connect_async
from flightconnect import driver as driver_module
from flightconnect.async_connection import AsyncFlightConnection
from flightconnect.driver import Driver
from flightconnect.exceptions import AuthenticationError


def make_client():
    return MagicMock(spec=flight.FlightClient)


@pytest.mark.asyncio
async def test_async_connect_token():
    client = make_client()
    conn = AsyncFlightConnection(token="abc", client_factory=Mock(return_value=client))

    async with conn:
        await conn.connect()

        assert conn.is_connected
        assert conn.call_options.headers == [("authorization", "Bearer abc")]
        client.authenticate.assert_called_once()

    assert conn.is_closed
    client.close.assert_called_once()


@pytest.mark.asyncio
async def test_async_connect_failure_propagates():
    client = make_client()
    client.authenticate_basic_token.side_effect = flight.FlightUnauthenticatedError("nope")
    conn = AsyncFlightConnection(uid="admin", pwd="bad", client_factory=Mock(return_value=client))

    with pytest.raises(AuthenticationError):
        await conn.connect()

    assert not conn.is_connected


@pytest.mark.asyncio
async def test_cancel_aborts_oauth_polling():
    client = make_client()
    discovered = threading.Event()

    def handshake(user, password, options):
        discovered.set()
        raise flight.FlightUnauthenticatedError("pending", b"https://idp.example/authorize")

    client.authenticate_basic_token.side_effect = handshake
    conn = AsyncFlightConnection(authType="external", client_factory=Mock(return_value=client), browser=Mock())

    with anyio.move_on_after(0.5):
        await conn.connect()

    assert discovered.is_set()
    assert conn.connection.cancel_event.is_set()
    assert not conn.is_connected


@pytest.mark.asyncio
async def test_cancelled_connect_drops_late_client():
    client = make_client()
    started = threading.Event()
    release = threading.Event()
    closed = threading.Event()

    def handshake(user, password, options):
        started.set()
        release.wait(5)
        return (b"authorization", b"Bearer xyz")

    client.authenticate_basic_token.side_effect = handshake
    client.close.side_effect = lambda: closed.set()
    conn = AsyncFlightConnection(uid="admin", pwd="secret", client_factory=Mock(return_value=client))

    with anyio.move_on_after(0.2):
        await conn.connect()

    assert started.is_set()
    assert conn.is_closed
    release.set()

    assert await anyio.to_thread.run_sync(closed.wait, 5)
    client.close.assert_called_once()
    assert not conn.is_connected


@pytest.mark.asyncio
async def test_module_connect_async(monkeypatch):
    client = make_client()
    monkeypatch.setattr(driver_module, "_default_driver", Driver(client_factory=Mock(return_value=client)))

    conn = await connect_async(token="abc", connection_timeout=3)

    assert isinstance(conn, AsyncFlightConnection)
    assert conn.call_options.timeout == 3.0
    await conn.close()
