"""
flightconnect Async Connection - await-able wrapper around FlightConnection

Authentication blocks (the OAuth flow can wait up to two minutes), so it
runs on a worker thread.
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, TYPE_CHECKING

import anyio

from flightconnect.connection import ClientFactory, FlightConnection
from flightconnect.call_options import CallOptions

if TYPE_CHECKING:
    from flightconnect.auth.browser import BrowserLauncher

logger = logging.getLogger(__name__)


class AsyncFlightConnection:
    """
    Async version of FlightConnection.

    Cancelling the awaiting task closes the underlying connection so the
    worker thread stops polling and drops any client it still opens.
    """

    def __init__(
        self,
        connection_string: str = None,
        properties: Mapping[str, Any] = None,
        client_factory: ClientFactory = None,
        browser: "BrowserLauncher" = None,
        connection: FlightConnection = None,
        **kwargs
    ):
        self._connection = connection or FlightConnection(
            connection_string=connection_string,
            properties=properties,
            client_factory=client_factory,
            browser=browser,
            **kwargs
        )

    async def connect(self) -> "AsyncFlightConnection":
        try:
            await anyio.to_thread.run_sync(self._connection.connect, abandon_on_cancel=True)
        except anyio.get_cancelled_exc_class():
            # The abandoned worker sees the closed connection and drops its client.
            logger.debug("Connect cancelled, closing connection")
            self._connection.close()
            raise
        return self

    async def close(self):
        """Close the connection and release resources."""
        await anyio.to_thread.run_sync(self._connection.close)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    def abort(self) -> None:
        self._connection.abort()

    def set_attribute(self, name: str, value: int) -> None:
        self._connection.set_attribute(name, value)

    def get_attribute(self, name: str) -> Optional[int]:
        return self._connection.get_attribute(name)

    @property
    def connection(self) -> FlightConnection:
        """Access the underlying synchronous connection."""
        return self._connection

    @property
    def call_options(self) -> CallOptions:
        return self._connection.call_options

    @property
    def user(self) -> str:
        return self._connection.user

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def is_closed(self) -> bool:
        return self._connection.is_closed

    def __repr__(self) -> str:
        return f"<AsyncFlightConnection wrapping {self._connection!r}>"
