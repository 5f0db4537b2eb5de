"""
Connection properties - normalized key/value configuration for a connection

Keys are case-insensitive: the ODBC driver manager, MSDASQL and hand-written
connection strings all spell them differently (``UID``, ``Uid``, ``User ID``).
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, Mapping, Optional, Sequence

from flightconnect.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Canonical property keys
AUTH_TYPE = "authType"
HOST = "host"
PORT = "port"
USE_ENCRYPTION = "useEncryption"
USER = "user"
USER_ID = "user id"
UID = "uid"
PASSWORD = "password"
PWD = "pwd"
TOKEN = "token"
DISABLE_CERTIFICATE_VERIFICATION = "disableCertificateVerification"
TRUSTED_CERTS = "trustedCerts"

# Alias priority lists, first match wins.
# MSDASQL writes "User ID"/"Password" instead of the ODBC UID/PWD keys.
USER_ALIASES = (USER, USER_ID, UID)
PASSWORD_ALIASES = (PASSWORD, PWD)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def normalize_key(key: str) -> str:
    return key.strip().lower()


def as_bool(value: Optional[str]) -> Optional[bool]:
    """
    Parse a boolean property value.

    Returns:
        True/False for recognised spellings, None when the value is not
        boolean-parseable.
    """
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


class PropertyMap(Mapping[str, str]):
    """
    Read-only, case-insensitive connection property map.

    Built once by the connection string parser (or from keyword arguments)
    and never mutated afterwards.
    """

    def __init__(self, properties: Mapping[str, object] = None, **kwargs):
        self._data: Dict[str, str] = {}
        for source in (properties or {}, kwargs):
            for key, value in source.items():
                if value is None:
                    continue
                self._data[normalize_key(key)] = str(value)

    def __getitem__(self, key: str) -> str:
        return self._data[normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def resolve(self, aliases: Sequence[str]) -> Optional[str]:
        """Return the value of the first alias present, or None."""
        for alias in aliases:
            key = normalize_key(alias)
            if key in self._data:
                return self._data[key]
        return None

    def merged(self, other: Mapping[str, object]) -> "PropertyMap":
        """Return a new map with ``other`` layered on top of this one."""
        combined: Dict[str, object] = dict(self._data)
        combined.update((normalize_key(k), v) for k, v in other.items() if v is not None)
        return PropertyMap(combined)

    def __repr__(self) -> str:
        # Values may hold secrets; only keys are shown.
        return f"<PropertyMap keys={sorted(self._data)}>"


def parse_connection_string(conn_str: str) -> PropertyMap:
    """
    Parse an ODBC-style connection string.

    Supported format:
        Key=Value;Key2={value with ; and }} inside};...

    Args:
        conn_str: Connection string to parse

    Returns:
        PropertyMap with the parsed properties

    Examples:
        >>> parse_connection_string("host=db.local;port=32010;UID=admin;PWD={p;w}")["pwd"]
        'p;w'
    """
    properties: Dict[str, str] = {}
    pos = 0
    length = len(conn_str)

    while pos < length:
        end = conn_str.find("=", pos)
        separator = conn_str.find(";", pos)
        if separator != -1 and (end == -1 or separator < end):
            segment = conn_str[pos:separator].strip()
            if segment:
                raise ConfigurationError(f"Invalid connection string segment: {segment!r}")
            pos = separator + 1
            continue
        if end == -1:
            segment = conn_str[pos:].strip()
            if segment:
                raise ConfigurationError(f"Invalid connection string segment: {segment!r}")
            break

        key = conn_str[pos:end].strip()
        if not key:
            raise ConfigurationError("Connection string contains an empty key")
        pos = end + 1

        if conn_str[pos:pos + 1] == "{":
            value, pos = _read_braced_value(conn_str, pos + 1)
            separator = conn_str.find(";", pos)
            trailing = conn_str[pos:separator if separator != -1 else length].strip()
            if trailing:
                raise ConfigurationError(f"Unexpected text after braced value for {key!r}")
        else:
            separator = conn_str.find(";", pos)
            value = conn_str[pos:separator if separator != -1 else length].strip()

        properties[key] = value
        pos = separator + 1 if separator != -1 else length

    result = PropertyMap(properties)
    logger.debug("Parsed connection string: keys=%s", sorted(result))
    return result


def _read_braced_value(conn_str: str, pos: int):
    """Read a ``{...}`` value starting after the opening brace."""
    chars = []
    length = len(conn_str)
    while pos < length:
        char = conn_str[pos]
        if char == "}":
            if conn_str[pos + 1:pos + 2] == "}":
                chars.append("}")
                pos += 2
                continue
            return "".join(chars), pos + 1
        chars.append(char)
        pos += 1
    raise ConfigurationError("Unterminated '{' in connection string")
