"""
Errors raised while talking to the fleet API.
All of them are fatal to a command invocation.
"""


class FleetError(Exception):
    """Base class for errors reported to the user."""


class DeviceNotFoundError(FleetError, LookupError):
    """No device matches the given identifier."""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Device not found: {identifier}")


class AmbiguousDeviceError(FleetError, LookupError):
    """A short uuid matches more than one device."""

    def __init__(self, identifier, count: int):
        self.identifier = identifier
        self.count = count
        super().__init__(
            f"Device is ambiguous: {identifier} matches {count} devices, "
            "use a longer uuid"
        )


class AuthError(FleetError):
    """Missing, expired or insufficient credentials."""


class NetworkError(FleetError):
    """Transport failure or unexpected HTTP status from the API."""
