"""
Error types shared by the repositories, the logic layer and the REST boundary.

Store failures are not wrapped: SQLAlchemy exceptions propagate unchanged.
"""

from typing import Iterable, List


class ValidationError(Exception):
    """A single business-rule violation."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationError({self.code}, {self.message!r})"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationErrors(Exception):
    """Every violation found in one batch. Raised before any persistence call."""

    def __init__(self, errors: Iterable[ValidationError]):
        self.errors: List[ValidationError] = list(errors)
        super().__init__(
            f"{len(self.errors)} validation error(s): "
            + "; ".join(f"{e.code}: {e.message}" for e in self.errors)
        )

    @property
    def codes(self) -> List[int]:
        return [e.code for e in self.errors]

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)


class NotSupportedError(NotImplementedError):
    """Raised by repository operations a backend does not provide."""

    def __init__(self, backend: str, operation: str):
        super().__init__(f"{operation} is not supported by the {backend} backend")
        self.backend = backend
        self.operation = operation


class ConfigurationError(Exception):
    """Settings file missing, unreadable or incomplete."""


class PayloadError(ValueError):
    """A JSON payload value could not be converted to its column type."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
