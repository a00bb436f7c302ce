"""
Error taxonomy for FRPulse.

Every error carries a stable ``kind`` string so the caller can tag a
failed operation without matching on exception classes.
"""

from typing import Optional


class FrpulseError(Exception):
    """Base class for all FRPulse errors."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ArtifactIOError(FrpulseError):
    """The configuration artifact could not be read or written."""

    kind = "io_error"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ProxyValidationError(FrpulseError):
    """Base class for proxy mutation failures."""

    kind = "validation_error"


class DuplicateNameError(ProxyValidationError):
    """A proxy with the same name already exists."""

    kind = "duplicate_name"

    def __init__(self, name: str):
        super().__init__(f"Proxy already exists: {name}")
        self.name = name


class InvalidPortError(ProxyValidationError):
    """A port is outside 1-65535."""

    kind = "invalid_port"

    def __init__(self, field: str, value: int):
        super().__init__(f"Invalid {field}: {value}. Must be 1-65535")
        self.field = field
        self.value = value


class NotFoundError(ProxyValidationError):
    """No proxy with the requested name exists."""

    kind = "not_found"

    def __init__(self, name: str):
        super().__init__(f"Proxy not found: {name}")
        self.name = name


class InvalidProxyError(ProxyValidationError):
    """A proxy's fields are inconsistent with its protocol type."""

    kind = "invalid_proxy"


class ProcessError(FrpulseError):
    """The process supervisor failed to act on a unit."""

    kind = "process_error"

    def __init__(self, message: str, unit: Optional[str] = None):
        super().__init__(message)
        self.unit = unit
