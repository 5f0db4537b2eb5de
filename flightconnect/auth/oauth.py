"""
Browser OAuth auth method - server-side discovery flow

The server multiplexes "where do I log in" and "here is your token" over
the basic-token handshake, keyed by a reserved user name:

1. Discover: handshake as ``__discover__``; the server fails it with the
   OAuth URL in the status ``extra_info`` (or returns it as the header value).
2. Launch the user's browser at that URL.
3. Poll the same handshake once a second until the server hands out a
   bearer token, for at most two minutes.
"""

from __future__ import annotations
import logging
import threading
from typing import Optional, TYPE_CHECKING

from pyarrow import flight

from flightconnect.auth.base import AuthMethod, FLIGHT_FAILURES
from flightconnect.auth.browser import BrowserLauncher, open_default_browser
from flightconnect.call_options import CallOptions, as_text, login_call_options
from flightconnect.exceptions import (
    AuthenticationCancelledError,
    OAuthDiscoveryError,
    OAuthTimeoutError,
)

if TYPE_CHECKING:
    from flightconnect.connection import FlightConnection

logger = logging.getLogger(__name__)

DISCOVERY_USER = "__discover__"
MAX_POLL_ATTEMPTS = 120  # 2 minutes at 1-second intervals
POLL_INTERVAL = 1.0


class BrowserOAuthAuthMethod(AuthMethod):
    """
    OAuth authentication through the user's browser.

    No token is kept on the object; it only lives for one authenticate() call.
    Host, port and encryption are only used to describe the server in
    diagnostics.
    """

    def __init__(
        self,
        client: flight.FlightClient,
        host: str,
        port: int,
        use_encryption: bool,
        browser: BrowserLauncher = None,
        poll_interval: float = POLL_INTERVAL,
        max_attempts: int = MAX_POLL_ATTEMPTS,
    ):
        self._client = client
        self._host = host
        self._port = port
        self._use_encryption = use_encryption
        self._browser = browser or open_default_browser
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts

    @property
    def server(self) -> str:
        scheme = "grpc+tls" if self._use_encryption else "grpc+tcp"
        return f"{scheme}://{self._host}:{self._port}"

    def authenticate(self, connection: "FlightConnection", call_options: CallOptions) -> None:
        oauth_url = self.discover(connection)
        cancel_event = getattr(connection, "cancel_event", None)
        if cancel_event is not None and cancel_event.is_set():
            raise AuthenticationCancelledError("OAuth authentication was cancelled.")
        logger.info("OAuth discovery returned URL for %s, launching browser for authentication.", self.server)

        self.launch_browser(oauth_url)

        bearer_token = self.wait_for_token(connection)
        call_options.append_bearer(bearer_token)

    def discover(self, connection: "FlightConnection") -> str:
        """
        Ask the server for the OAuth URL.

        Returns:
            The URL the user must visit

        Raises:
            OAuthDiscoveryError: If the server answered with anything else
        """
        discover_options = login_call_options(connection)
        try:
            header = self._client.authenticate_basic_token(
                DISCOVERY_USER, "", discover_options.to_flight()
            )
        except FLIGHT_FAILURES as e:
            if isinstance(e, flight.FlightUnauthenticatedError):
                extra = as_text(getattr(e, "extra_info", b"") or b"")
                if extra:
                    return extra
            raise OAuthDiscoveryError(f"OAuth discovery failed against {self.server}: {e}") from e

        url = as_text(header[1])
        if not url:
            raise OAuthDiscoveryError(f"OAuth discovery failed against {self.server}: empty URL")
        return url

    def launch_browser(self, url: str) -> None:
        """Open the login page; a failed launch is logged, never raised."""
        try:
            self._browser(url)
        except Exception as e:
            logger.warning("Failed to launch browser: %s. Please open %s manually.", e, url)

    def wait_for_token(self, connection: "FlightConnection") -> str:
        """
        Poll the server until the browser login has produced a bearer token.

        Failed handshakes mean the user has not finished yet and are retried.

        Raises:
            OAuthTimeoutError: After max_attempts polls without a token
            AuthenticationCancelledError: If the connection was aborted
        """
        cancel_event: Optional[threading.Event] = getattr(connection, "cancel_event", None)
        if cancel_event is None:
            cancel_event = threading.Event()

        for attempt in range(1, self._max_attempts + 1):
            if cancel_event.wait(self._poll_interval):
                raise AuthenticationCancelledError("OAuth authentication was cancelled.")

            poll_options = login_call_options(connection)
            try:
                header = self._client.authenticate_basic_token(
                    DISCOVERY_USER, "", poll_options.to_flight()
                )
            except FLIGHT_FAILURES as e:
                logger.debug("OAuth poll %d/%d not ready: %s", attempt, self._max_attempts, e)
                continue

            token = as_text(header[1])
            if token:
                logger.info("OAuth token received successfully.")
                return token

        raise OAuthTimeoutError("OAuth authentication timed out waiting for browser login.")

    def __repr__(self) -> str:
        return f"<BrowserOAuthAuthMethod server={self.server}>"
