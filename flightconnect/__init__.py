"""
flightconnect - Authenticated connections to Arrow Flight SQL services

Usage:
    import flightconnect

    conn = flightconnect.connect("host=db.example.com;port=32010;uid=admin;pwd=secret")
    print(conn.call_options.headers)

    # Browser-based OAuth
    conn = flightconnect.connect(host="db.example.com", authType="external")
"""

from flightconnect.connection import FlightConnection
from flightconnect.async_connection import AsyncFlightConnection
from flightconnect.call_options import CallOptions, CONNECTION_TIMEOUT, LOGIN_TIMEOUT
from flightconnect.driver import Driver, get_default_driver
from flightconnect.properties import PropertyMap, parse_connection_string
from flightconnect.exceptions import (
    FlightConnectError,
    DriverError,
    ConfigurationError,
    AuthenticationError,
    OAuthDiscoveryError,
    OAuthTimeoutError,
    AuthenticationCancelledError,
    CommunicationError,
    ConnectionClosedError,
)
from flightconnect.auth import (
    AuthMethod,
    BasicCredentialAuthMethod,
    BearerTokenAuthMethod,
    BrowserOAuthAuthMethod,
    resolve_auth_method,
)

__version__ = "0.1.0"
__all__ = [
    "connect",
    "connect_async",
    "FlightConnection",
    "AsyncFlightConnection",
    "CallOptions",
    "LOGIN_TIMEOUT",
    "CONNECTION_TIMEOUT",
    "Driver",
    "get_default_driver",
    "PropertyMap",
    "parse_connection_string",
    # Exceptions
    "FlightConnectError",
    "DriverError",
    "ConfigurationError",
    "AuthenticationError",
    "OAuthDiscoveryError",
    "OAuthTimeoutError",
    "AuthenticationCancelledError",
    "CommunicationError",
    "ConnectionClosedError",
    # Authentication
    "AuthMethod",
    "BasicCredentialAuthMethod",
    "BearerTokenAuthMethod",
    "BrowserOAuthAuthMethod",
    "resolve_auth_method",
]


def connect(connection_string: str = None, **kwargs) -> FlightConnection:
    """
    Open an authenticated connection with the process default driver.

    Args:
        connection_string: ODBC-style connection string (e.g., "host=db;port=32010;uid=admin;pwd=secret")
        **kwargs: user, password, login_timeout, connection_timeout or any connection property

    Returns:
        Connected FlightConnection

    Examples:
        # Using a connection string
        conn = flightconnect.connect("host=db.example.com;useEncryption=false;token=abc")

        # Using explicit parameters
        conn = flightconnect.connect(host="db.example.com", user="admin", password="secret",
                                     login_timeout=10)
    """
    return get_default_driver().connect(connection_string, **kwargs)


async def connect_async(connection_string: str = None, **kwargs) -> AsyncFlightConnection:
    """
    Open an authenticated connection without blocking the event loop.
    """
    return await get_default_driver().connect_async(connection_string, **kwargs)
