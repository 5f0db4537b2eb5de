"""
Base auth method and shared error classification
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Tuple, TYPE_CHECKING

import pyarrow as pa
from pyarrow import flight

from flightconnect.exceptions import (
    AuthenticationError,
    CommunicationError,
    DriverError,
)

if TYPE_CHECKING:
    from flightconnect.call_options import CallOptions
    from flightconnect.connection import FlightConnection

# Failures raised by the Flight client for a non-OK status
FLIGHT_FAILURES: Tuple[type, ...] = (flight.FlightError, pa.ArrowException)


def classify_flight_error(error: BaseException, context: str) -> DriverError:
    """
    Map a Flight handshake failure onto the driver's error model.

    Args:
        error: Exception raised by the Flight client
        context: Prefix naming the auth method, used for authentication failures

    Returns:
        The driver exception to raise (caller raises it ``from`` ``error``)
    """
    if isinstance(error, flight.FlightUnauthenticatedError):
        return AuthenticationError(f"{context}: {error}")
    if isinstance(error, flight.FlightUnavailableError):
        return CommunicationError(str(error))
    return DriverError(str(error))


class AuthMethod(ABC):
    """
    Strategy that authenticates a connection before any SQL RPC is issued.

    Subclasses must implement:
    - authenticate(): append exactly one authorization header to call_options

    The Flight client is borrowed from the connection, never owned.
    """

    @abstractmethod
    def authenticate(self, connection: "FlightConnection", call_options: "CallOptions") -> None:
        """
        Authenticate and decorate ``call_options`` for subsequent RPCs.

        Args:
            connection: Connection being established (attribute store, cancel signal)
            call_options: Options mutated in place on success only
        """
        pass

    def get_user(self) -> str:
        """User name for diagnostics."""
        return ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
