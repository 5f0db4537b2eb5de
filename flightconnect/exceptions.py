"""flightconnect Exceptions"""


class FlightConnectError(Exception):
    """Base exception for flightconnect"""
    sql_state = "HY000"

    def __init__(self, message: str = "", sql_state: str = None):
        super().__init__(message)
        if sql_state is not None:
            self.sql_state = sql_state


class DriverError(FlightConnectError):
    """Unexpected driver failure"""
    pass


class ConfigurationError(DriverError):
    """Invalid or missing connection configuration"""
    pass


class AuthenticationError(DriverError):
    """Server rejected the credentials or token"""
    sql_state = "28000"


class OAuthDiscoveryError(AuthenticationError):
    """Server did not hand out an OAuth URL"""
    pass


class OAuthTimeoutError(AuthenticationError):
    """Browser login did not complete in time"""
    pass


class AuthenticationCancelledError(AuthenticationError):
    """Authentication was aborted by the connection"""
    pass


class CommunicationError(DriverError):
    """Server could not be reached"""
    sql_state = "08S01"


class ConnectionClosedError(DriverError):
    """Operation on a closed connection"""
    sql_state = "08003"
