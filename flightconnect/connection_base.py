"""
flightconnect Connection Base - Common functionality for sync and async connections
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from pyarrow import flight

from flightconnect.auth.selector import resolve_endpoint
from flightconnect.exceptions import ConfigurationError
from flightconnect.properties import (
    DISABLE_CERTIFICATE_VERIFICATION,
    TRUSTED_CERTS,
    PropertyMap,
    as_bool,
    parse_connection_string,
)

logger = logging.getLogger(__name__)


class ConnectionMixin:
    """
    Common functionality shared between sync and async connections.

    Provides:
    - Connection string parsing and property merging
    - Flight location and TLS option construction
    """

    @staticmethod
    def build_properties(
        connection_string: str = None,
        properties: Mapping[str, Any] = None,
        **kwargs
    ) -> PropertyMap:
        """
        Merge connection string, property mapping and keyword properties.

        Later sources win: connection string < properties < kwargs.

        Examples:
            >>> ConnectionMixin.build_properties("host=db;port=31337", uid="admin")["uid"]
            'admin'
        """
        merged = parse_connection_string(connection_string) if connection_string else PropertyMap()
        if properties:
            merged = merged.merged(properties)
        if kwargs:
            merged = merged.merged(kwargs)
        return merged

    @staticmethod
    def build_location(properties: PropertyMap) -> flight.Location:
        """Flight location from host/port/useEncryption."""
        host, port, use_encryption = resolve_endpoint(properties)
        if use_encryption:
            return flight.Location.for_grpc_tls(host, port)
        return flight.Location.for_grpc_tcp(host, port)

    @staticmethod
    def build_client_options(properties: PropertyMap) -> Dict[str, Any]:
        """
        Keyword arguments for the FlightClient constructor.

        Returns:
            Dict with 'tls_root_certs' and/or 'disable_server_verification'
        """
        options: Dict[str, Any] = {}

        if as_bool(properties.get(DISABLE_CERTIFICATE_VERIFICATION)):
            options["disable_server_verification"] = True

        certs_path = properties.get(TRUSTED_CERTS)
        if certs_path:
            try:
                options["tls_root_certs"] = Path(certs_path).read_bytes()
            except OSError as e:
                raise ConfigurationError(f"Cannot read trusted certificates {certs_path}: {e}")

        return options
