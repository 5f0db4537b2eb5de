"""
Credential auth methods - user/password exchange and pre-issued bearer token
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from pyarrow import flight

from flightconnect.auth.base import AuthMethod, FLIGHT_FAILURES, classify_flight_error
from flightconnect.call_options import CallOptions, login_call_options

if TYPE_CHECKING:
    from flightconnect.connection import FlightConnection

logger = logging.getLogger(__name__)


class NoOpClientAuthHandler(flight.ClientAuthHandler):
    """Handshake handler that sends a blank payload; the server accepts any handshake."""

    def authenticate(self, outgoing, incoming):
        outgoing.write(b"")

    def get_token(self):
        return b""


class BasicCredentialAuthMethod(AuthMethod):
    """
    User/password authentication through the Flight basic-token handshake.

    The server answers with a bearer header that is attached to every
    later call on the connection.
    """

    def __init__(self, client: flight.FlightClient, user: str, password: str):
        self._client = client
        self._user = user
        self._password = password

    def authenticate(self, connection: "FlightConnection", call_options: CallOptions) -> None:
        auth_options = login_call_options(connection)
        try:
            header = self._client.authenticate_basic_token(
                self._user, self._password, auth_options.to_flight()
            )
        except FLIGHT_FAILURES as e:
            raise classify_flight_error(e, "Failed to authenticate with user and password") from e

        call_options.append_header(*header)
        logger.debug("Authenticated user %s with basic credentials", self._user)

    def get_user(self) -> str:
        return self._user

    def __repr__(self) -> str:
        return f"<BasicCredentialAuthMethod user={self._user!r}>"


class BearerTokenAuthMethod(AuthMethod):
    """
    Authentication with a caller-supplied bearer token.

    The token needs no exchange, but one no-op handshake is still made so
    the server rejects a bad token now rather than on the first query.
    """

    def __init__(self, client: flight.FlightClient, token: str):
        self._client = client
        self._token = token

    def authenticate(self, connection: "FlightConnection", call_options: CallOptions) -> None:
        position = len(call_options.headers)
        call_options.append_bearer(self._token)

        try:
            self._client.authenticate(NoOpClientAuthHandler(), call_options.to_flight())
        except FLIGHT_FAILURES as e:
            # Roll back our own header; earlier entries are untouched.
            del call_options.headers[position]
            raise classify_flight_error(
                e, f"Failed to authenticate with token: {self._token} Message"
            ) from e
