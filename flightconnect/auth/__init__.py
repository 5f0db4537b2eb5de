"""
flightconnect Authentication Package

Decides how a connection authenticates and decorates its call options:
- User/password exchange (Flight basic-token handshake)
- Pre-issued bearer token
- Browser OAuth with server-side discovery and polling
"""

from flightconnect.auth.base import AuthMethod, classify_flight_error
from flightconnect.auth.browser import BrowserLauncher, open_default_browser
from flightconnect.auth.methods import (
    BasicCredentialAuthMethod,
    BearerTokenAuthMethod,
    NoOpClientAuthHandler,
)
from flightconnect.auth.oauth import BrowserOAuthAuthMethod, DISCOVERY_USER
from flightconnect.auth.selector import resolve_auth_method, resolve_endpoint

__all__ = [
    # Base/Abstract
    "AuthMethod",
    "classify_flight_error",
    # Concrete Methods
    "BasicCredentialAuthMethod",
    "BearerTokenAuthMethod",
    "BrowserOAuthAuthMethod",
    "NoOpClientAuthHandler",
    "DISCOVERY_USER",
    # Browser
    "BrowserLauncher",
    "open_default_browser",
    # Selection
    "resolve_auth_method",
    "resolve_endpoint",
]
