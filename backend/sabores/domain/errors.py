from typing import Sequence


class DomainError(Exception):
    """Base class for errors surfaced by the workflows."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    def __init__(self, message: str, *, missing_fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing_fields = tuple(missing_fields)


class NotFoundError(DomainError):
    pass


class PersistenceError(DomainError):
    pass


class ConfigurationError(DomainError):
    pass
