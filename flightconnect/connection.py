"""
flightconnect Connection - authenticated Flight connection

Owns the Flight client, the selected auth method and the call options
every later RPC on the connection must carry.
"""

from __future__ import annotations
import logging
import threading
from typing import Any, Callable, Dict, Mapping, Optional, TYPE_CHECKING

from pyarrow import flight

from flightconnect.auth.browser import BrowserLauncher
from flightconnect.auth.selector import resolve_auth_method
from flightconnect.call_options import (
    CONNECTION_TIMEOUT,
    LOGIN_TIMEOUT,
    CallOptions,
    timeout_from_attribute,
)
from flightconnect.connection_base import ConnectionMixin
from flightconnect.exceptions import (
    AuthenticationCancelledError,
    ConfigurationError,
    ConnectionClosedError,
    DriverError,
)
from flightconnect.properties import PropertyMap

if TYPE_CHECKING:
    from flightconnect.auth.base import AuthMethod

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., flight.FlightClient]

SUPPORTED_ATTRIBUTES = (LOGIN_TIMEOUT, CONNECTION_TIMEOUT)


class FlightConnection(ConnectionMixin):
    """
    Connection to a Flight SQL service.

    Provides:
    - Property and attribute management
    - Client construction (plain or TLS)
    - Authentication before any SQL RPC
    - Abort signal for a long-running browser login
    """

    def __init__(
        self,
        connection_string: str = None,
        properties: Mapping[str, Any] = None,
        client_factory: ClientFactory = None,
        browser: BrowserLauncher = None,
        **kwargs
    ):
        self._properties = self.build_properties(connection_string, properties, **kwargs)
        self._client_factory = client_factory or flight.FlightClient
        self._browser = browser
        self._attributes: Dict[str, int] = {}

        self._client: Optional[flight.FlightClient] = None
        self._auth_method: Optional["AuthMethod"] = None
        self._call_options: Optional[CallOptions] = None
        self._closed = False
        self._state_lock = threading.Lock()
        self.cancel_event = threading.Event()

        logger.debug("FlightConnection created: properties=%s", self._properties)

    # =========================================================================
    # Attributes
    # =========================================================================

    def set_attribute(self, name: str, value: int) -> None:
        """
        Set a connection attribute.

        Args:
            name: LOGIN_TIMEOUT or CONNECTION_TIMEOUT
            value: Seconds, unsigned integer (0 means transport default)
        """
        if name not in SUPPORTED_ATTRIBUTES:
            raise ConfigurationError(f"Unsupported connection attribute: {name}")
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(f"Attribute {name} must be a non-negative integer, got {value!r}")
        self._attributes[name] = value

    def get_attribute(self, name: str) -> Optional[int]:
        return self._attributes.get(name)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def connect(self) -> "FlightConnection":
        """
        Open the Flight client and authenticate.

        Call options are only published once authentication succeeded;
        on failure, abort or a concurrent close the client is closed again.
        """
        self._check_open()
        if self._call_options is not None:
            raise DriverError("Connection is already established")
        # An abort only applies to the login in progress.
        self.cancel_event.clear()

        location = self.build_location(self._properties)
        client = self._client_factory(location, **self.build_client_options(self._properties))
        try:
            auth_method = resolve_auth_method(client, self._properties, browser=self._browser)
            call_options = CallOptions(
                timeout=timeout_from_attribute(self.get_attribute(CONNECTION_TIMEOUT))
            )
            auth_method.authenticate(self, call_options)
        except BaseException:
            client.close()
            raise

        with self._state_lock:
            if self._closed or self.cancel_event.is_set():
                client.close()
                if self._closed:
                    raise ConnectionClosedError("Connection was closed during authentication")
                raise AuthenticationCancelledError("Authentication was cancelled.")
            self._client = client
            self._auth_method = auth_method
            self._call_options = call_options
        logger.debug("FlightConnection established: location=%s, user=%s", location, self.user or "(none)")
        return self

    def abort(self) -> None:
        """Interrupt an in-flight authentication (e.g. the OAuth polling loop)."""
        self.cancel_event.set()

    def close(self):
        """Close the connection and release the Flight client."""
        with self._state_lock:
            if self._closed:
                return
            self.cancel_event.set()
            if self._client is not None:
                self._client.close()
            self._client = None
            self._auth_method = None
            self._call_options = None
            self._closed = True
        logger.debug("FlightConnection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _check_open(self):
        if self._closed:
            raise ConnectionClosedError("Connection is closed")

    def _check_connected(self):
        self._check_open()
        if self._call_options is None:
            raise DriverError("Connection is not established")

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def properties(self) -> PropertyMap:
        return self._properties

    @property
    def client(self) -> flight.FlightClient:
        """Authenticated Flight client."""
        self._check_connected()
        return self._client

    @property
    def call_options(self) -> CallOptions:
        """Headers and timeout every RPC on this connection must carry."""
        self._check_connected()
        return self._call_options

    def flight_call_options(self) -> flight.FlightCallOptions:
        return self.call_options.to_flight()

    @property
    def auth_method(self) -> Optional["AuthMethod"]:
        return self._auth_method

    @property
    def user(self) -> str:
        return self._auth_method.get_user() if self._auth_method else ""

    @property
    def is_connected(self) -> bool:
        return not self._closed and self._call_options is not None

    @property
    def is_closed(self) -> bool:
        """Check if connection is closed."""
        return self._closed

    def __repr__(self) -> str:
        """String representation for debugging."""
        if self._closed:
            status = "closed"
        elif self._call_options is not None:
            status = "connected"
        else:
            status = "new"
        return f"<FlightConnection host={self._properties.get('host')} auth={self._auth_method!r} status={status}>"
