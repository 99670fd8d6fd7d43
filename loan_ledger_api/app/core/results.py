"""
Explicit result values returned by the service layer.

Services never raise for expected outcomes such as a missing loan or a
rejected payload.  Instead every operation returns a ``ServiceResult``
holding either a value or a ``ServiceError`` tagged with an
``ErrorKind``.  The HTTP layer maps the tag to a status code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar


T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    SELF_LOAN_FORBIDDEN = "self_loan_forbidden"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class ServiceError:
    """A rejected operation.

    ``details`` holds the field -> reasons mapping for validation
    failures and is ``None`` for every other kind.
    """

    kind: ErrorKind
    message: str
    details: Optional[Dict[str, List[str]]] = None


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service call: a success ``value`` or an ``error``."""

    message: str
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, message: str, value: Any = None) -> "ServiceResult":
        return cls(message=message, value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, List[str]]] = None,
    ) -> "ServiceResult":
        return cls(message=message, error=ServiceError(kind=kind, message=message, details=details))
