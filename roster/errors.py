from __future__ import annotations


class RosterError(Exception):
    """Failure that crosses the bridge as a reply; `code` names it there."""

    code = "internal_error"

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class GatewayError(RosterError):
    """Base failure of a persistence operation."""

    code = "storage_error"


class GatewayUnavailable(GatewayError):
    code = "unavailable"


class RecordNotFound(GatewayError):
    code = "not_found"


class StorageError(GatewayError):
    code = "storage_error"


class ShellError(RosterError):
    """The UI shell could not open a window or show a dialog."""

    code = "shell_error"
