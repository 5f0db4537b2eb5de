"""
flightconnect Driver - process-level entry point that opens connections

The driver is constructed explicitly by whoever owns the process entry
point. Log registration happens once per driver, on first use.
"""

from __future__ import annotations
import logging
import os
import threading
from typing import Any, Mapping, Optional

from flightconnect.async_connection import AsyncFlightConnection
from flightconnect.auth.browser import BrowserLauncher
from flightconnect.call_options import CONNECTION_TIMEOUT, LOGIN_TIMEOUT
from flightconnect.connection import ClientFactory, FlightConnection
from flightconnect.exceptions import ConfigurationError
from flightconnect.properties import PWD, UID

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "flightconnect"
LOG_LEVEL_ENV = "FLIGHTCONNECT_LOG_LEVEL"


class Driver:
    """
    Opens authenticated connections.

    Provides:
    - One-time log registration
    - connect()/connect_async() with attributes applied before authentication
    """

    def __init__(self, client_factory: ClientFactory = None, browser: BrowserLauncher = None):
        self._client_factory = client_factory
        self._browser = browser
        self._init_lock = threading.Lock()
        self._initialized = False

    def initialize(self) -> None:
        """Register the package log; later calls are no-ops."""
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            self.register_log()
            self._initialized = True

    @staticmethod
    def register_log() -> None:
        """
        Attach a NullHandler to the package logger and apply the level from
        FLIGHTCONNECT_LOG_LEVEL when set.
        """
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
            package_logger.addHandler(logging.NullHandler())

        level_name = os.environ.get(LOG_LEVEL_ENV)
        if level_name:
            level = logging.getLevelName(level_name.strip().upper())
            if not isinstance(level, int):
                raise ConfigurationError(f"Invalid {LOG_LEVEL_ENV}: {level_name!r}")
            package_logger.setLevel(level)
        logger.debug("flightconnect log registered")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def create_connection(
        self,
        connection_string: str = None,
        *,
        properties: Mapping[str, Any] = None,
        user: str = None,
        password: str = None,
        login_timeout: int = None,
        connection_timeout: int = None,
        **kwargs
    ) -> FlightConnection:
        """Build a configured but not yet authenticated connection."""
        self.initialize()

        # Explicit credentials land on the ODBC UID/PWD keys.
        if user is not None:
            kwargs[UID] = user
        if password is not None:
            kwargs[PWD] = password

        connection = FlightConnection(
            connection_string=connection_string,
            properties=properties,
            client_factory=self._client_factory,
            browser=self._browser,
            **kwargs
        )
        if login_timeout is not None:
            connection.set_attribute(LOGIN_TIMEOUT, login_timeout)
        if connection_timeout is not None:
            connection.set_attribute(CONNECTION_TIMEOUT, connection_timeout)
        return connection

    def connect(self, connection_string: str = None, **kwargs) -> FlightConnection:
        """
        Open and authenticate a connection.

        Args:
            connection_string: ODBC-style "key=value;..." string
            properties: Extra properties mapping
            user: User name (stored as UID)
            password: Password (stored as PWD)
            login_timeout: Handshake timeout in seconds
            connection_timeout: Timeout in seconds for later RPCs
            **kwargs: Additional connection properties

        Returns:
            Connected FlightConnection

        Examples:
            driver = Driver()
            conn = driver.connect("host=db.example.com;port=32010;uid=admin;pwd=secret")

            conn = driver.connect(host="db.example.com", authType="external")
        """
        connection = self.create_connection(connection_string, **kwargs)
        return connection.connect()

    async def connect_async(self, connection_string: str = None, **kwargs) -> AsyncFlightConnection:
        """Open and authenticate a connection without blocking the event loop."""
        connection = self.create_connection(connection_string, **kwargs)
        return await AsyncFlightConnection(connection=connection).connect()


_default_driver: Optional[Driver] = None
_default_driver_lock = threading.Lock()


def get_default_driver() -> Driver:
    """Process default driver, created on first call."""
    global _default_driver
    if _default_driver is None:
        with _default_driver_lock:
            if _default_driver is None:
                _default_driver = Driver()
    return _default_driver
