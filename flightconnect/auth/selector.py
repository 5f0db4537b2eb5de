"""
Auth method selection - pick a strategy from connection properties

Decision table, first match wins:

1. authType=external        -> BrowserOAuthAuthMethod
2. any user/password alias  -> BasicCredentialAuthMethod
3. token                    -> BearerTokenAuthMethod
4. otherwise                -> ConfigurationError
"""

from __future__ import annotations
import logging
from typing import Tuple

from pyarrow import flight

from flightconnect.auth.base import AuthMethod
from flightconnect.auth.browser import BrowserLauncher
from flightconnect.auth.methods import BasicCredentialAuthMethod, BearerTokenAuthMethod
from flightconnect.auth.oauth import BrowserOAuthAuthMethod
from flightconnect.exceptions import ConfigurationError
from flightconnect.properties import (
    AUTH_TYPE,
    HOST,
    PASSWORD_ALIASES,
    PORT,
    TOKEN,
    USE_ENCRYPTION,
    USER_ALIASES,
    PropertyMap,
    as_bool,
)

logger = logging.getLogger(__name__)

EXTERNAL_AUTH_TYPE = "external"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 32010


def parse_port(value: str) -> int:
    """Parse a port property; malformed values are fatal, never defaulted."""
    try:
        port = int(value.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid port: {value!r} is not an integer")
    if not 0 < port < 65536:
        raise ConfigurationError(f"Invalid port: {port} is out of range")
    return port


def resolve_endpoint(properties: PropertyMap) -> Tuple[str, int, bool]:
    """
    Resolve host, port and encryption flag with their defaults.

    Returns:
        (host, port, use_encryption)
    """
    host = properties.get(HOST, DEFAULT_HOST)
    port = parse_port(properties[PORT]) if PORT in properties else DEFAULT_PORT

    use_encryption = True
    parsed = as_bool(properties.get(USE_ENCRYPTION))
    if parsed is not None:
        use_encryption = parsed
    return host, port, use_encryption


def resolve_auth_method(
    client: flight.FlightClient,
    properties: PropertyMap,
    browser: BrowserLauncher = None,
) -> AuthMethod:
    """
    Choose the auth method for a connection.

    No RPC is made here; the client is only handed to the chosen method.

    Args:
        client: Flight client the method will authenticate through
        properties: Connection properties
        browser: Browser launcher for the OAuth flow

    Returns:
        Configured AuthMethod

    Raises:
        ConfigurationError: If no credential source is configured or a
            numeric property is malformed
    """
    if properties.get(AUTH_TYPE) == EXTERNAL_AUTH_TYPE:
        host, port, use_encryption = resolve_endpoint(properties)
        logger.debug("Selected OAuth authentication for %s:%s", host, port)
        return BrowserOAuthAuthMethod(client, host, port, use_encryption, browser=browser)

    # Blank passwords are legitimate, so one side is enough.
    user = properties.resolve(USER_ALIASES)
    password = properties.resolve(PASSWORD_ALIASES)
    if user is not None or password is not None:
        logger.debug("Selected user/password authentication for user %s", user or "(none)")
        return BasicCredentialAuthMethod(client, user or "", password or "")

    if TOKEN in properties:
        logger.debug("Selected token authentication")
        return BearerTokenAuthMethod(client, properties[TOKEN])

    raise ConfigurationError(
        "Authentication credentials are required. "
        "Provide user/password, a token, or set authType=external for OAuth."
    )
