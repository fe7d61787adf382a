"""Custom exceptions for vcel."""


class VcelError(Exception):
    """Base exception for all vcel errors."""


class ConfigurationError(VcelError):
    """Raised when the endpoint URL or the tuning file is unusable."""


class RemoteError(VcelError):
    """Base exception for failures reported by the management endpoint."""


class SessionError(RemoteError):
    """Raised when connecting or authenticating to the endpoint fails."""

    def __init__(self, host: str, reason: str):
        self.host = host
        self.reason = reason
        super().__init__(f"cannot connect to {host}: {reason}")


class DatacenterNotFoundError(RemoteError):
    """Raised when the target datacenter cannot be resolved."""

    def __init__(self, name: str = None, candidates=None):
        self.name = name
        self.candidates = list(candidates or [])
        if name:
            message = f"datacenter '{name}' not found"
        elif self.candidates:
            message = (
                "path '*' resolves to multiple datacenters: "
                + ", ".join(self.candidates)
            )
        else:
            message = "datacenter '*' not found"
        super().__init__(message)


class CollectorError(RemoteError):
    """Raised when the event collector cannot be created or configured."""


class FetchError(RemoteError):
    """Raised when reading the next batch of events fails."""
