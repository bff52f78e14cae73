"""
Error taxonomy shared by every service.

Each error carries a short machine-readable ``kind`` and a human-readable
message. The HTTP layer maps kinds to status codes in ``main.py``.
"""


class DumpItError(Exception):
    """Base class for all errors surfaced to callers."""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class ValidationError(DumpItError):
    """Malformed input: bad link scheme, missing field, bad username."""

    kind = "validation_error"
    status_code = 400


class NotFoundError(DumpItError):
    kind = "not_found"
    status_code = 404


class ConflictError(DumpItError):
    """Duplicate data or a concurrent modification detected at commit."""

    kind = "conflict"
    status_code = 409


class InternalError(DumpItError):
    kind = "internal"
    status_code = 500
