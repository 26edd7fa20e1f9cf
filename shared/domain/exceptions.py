"""
Domain Errors

Every failure a core operation can report to its caller:

- DomainValidationError: user-correctable input (field -> messages)
- ActionForbidden: authenticated but lacking capability or ownership
- EntityNotFound: referenced entity missing or not visible to the caller
- ConcurrentConflict: exclusivity lock not acquired in time, retryable

Storage failures are not wrapped: database errors propagate and the
surrounding atomic block rolls back.
"""

from typing import Dict, List, Union


class DomainError(Exception):
    """Base class for all errors raised by domain services"""

    default_message = "Domain error"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class DomainValidationError(DomainError):
    """
    Invalid input that the caller can correct

    Carries the offending fields so the HTTP layer can name them.
    """

    default_message = "Invalid input"

    def __init__(self, errors: Dict[str, Union[str, List[str]]]):
        self.errors = {
            field: [messages] if isinstance(messages, str) else list(messages)
            for field, messages in errors.items()
        }
        super().__init__("; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in self.errors.items()
        ))

    @classmethod
    def for_field(cls, field: str, message: str) -> 'DomainValidationError':
        return cls({field: [message]})


class ActionForbidden(DomainError):
    default_message = "You do not have permission to perform this action."


class EntityNotFound(DomainError):
    default_message = "Not found."


class ConcurrentConflict(DomainError):
    """Raised when an exclusivity lock cannot be acquired within its wait bound"""

    default_message = "The resource is busy, please retry."

    def __init__(self, message: str = "", retry_after: int = 1):
        self.retry_after = retry_after
        super().__init__(message)
