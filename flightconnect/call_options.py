"""
Call options - per-request decorations (headers, timeout) for Flight RPCs
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from pyarrow import flight

# Connection attribute names
LOGIN_TIMEOUT = "login_timeout"
CONNECTION_TIMEOUT = "connection_timeout"

AUTHORIZATION_HEADER = "authorization"


def as_text(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


@dataclass
class CallOptions:
    """
    Ordered header pairs plus an optional timeout in seconds.

    Owned by whoever issues the RPCs. Authentication only ever appends.
    """
    headers: List[Tuple[str, str]] = field(default_factory=list)
    timeout: Optional[float] = None

    def append_header(self, name: Union[str, bytes], value: Union[str, bytes]) -> None:
        self.headers.append((as_text(name), as_text(value)))

    def append_bearer(self, token: str) -> None:
        self.append_header(AUTHORIZATION_HEADER, f"Bearer {token}")

    def to_flight(self) -> flight.FlightCallOptions:
        """Render as pyarrow FlightCallOptions."""
        headers = [(name.encode("utf-8"), value.encode("utf-8")) for name, value in self.headers]
        return flight.FlightCallOptions(timeout=self.timeout, headers=headers)

    def __repr__(self) -> str:
        names = [name for name, _ in self.headers]
        return f"CallOptions(headers={names}, timeout={self.timeout})"


def timeout_from_attribute(value: Any) -> Optional[float]:
    """Convert an unsigned seconds attribute to a transport timeout."""
    if value and value > 0:
        return float(value)
    return None


def login_call_options(connection) -> CallOptions:
    """
    Fresh options for a credential handshake.

    Never derived from the connection's own call options so its ambient
    headers do not leak into the handshake request.
    """
    return CallOptions(timeout=timeout_from_attribute(connection.get_attribute(LOGIN_TIMEOUT)))
