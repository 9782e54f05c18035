"""Error hierarchy for the CI/CD system, with HTTP mapping and API responses."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ClassVar


class CiError(Exception):
    """Base class of every error raised by the system."""

    prefix: ClassVar[str | None] = None
    error_code: ClassVar[str] = "INTERNAL_ERROR"
    http_status: ClassVar[int] = 500
    retryable: ClassVar[bool] = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if self.prefix is None:
            return self.message
        return f"{self.prefix}: {self.message}"

    def context(self, context: str) -> ContextError:
        """Wrap this error in a ContextError carrying ``context``."""
        wrapped = ContextError(context, self)
        wrapped.__cause__ = self
        return wrapped

    def is_retryable(self) -> bool:
        """Whether the failed operation may succeed if tried again."""
        return self.retryable

    def status_code(self) -> int:
        """HTTP status code that represents this error."""
        return self.http_status


class ConfigError(CiError):
    prefix = "Configuration error"


class DatabaseError(CiError):
    prefix = "Database error"


class RepositoryError(CiError):
    prefix = "Repository error"


class DomainError(CiError):
    prefix = "Domain error"


class ValidationError(CiError):
    prefix = "Validation error"
    error_code = "VALIDATION_ERROR"
    http_status = 400


class AuthenticationError(CiError):
    prefix = "Authentication error"
    error_code = "AUTHENTICATION_ERROR"
    http_status = 401


class AuthorizationError(CiError):
    prefix = "Authorization error"
    error_code = "AUTHORIZATION_ERROR"
    http_status = 403


class NotFoundError(CiError):
    prefix = "Not found"
    error_code = "NOT_FOUND"
    http_status = 404


class ConflictError(CiError):
    prefix = "Conflict"
    error_code = "CONFLICT"
    http_status = 409


class BuildError(CiError):
    prefix = "Build error"
    error_code = "BUILD_ERROR"


class PipelineError(CiError):
    prefix = "Pipeline error"
    error_code = "PIPELINE_ERROR"


class AgentError(CiError):
    prefix = "Agent error"
    error_code = "AGENT_ERROR"


class GitError(CiError):
    prefix = "Git error"
    error_code = "GIT_ERROR"


class StorageError(CiError):
    prefix = "Storage error"
    error_code = "STORAGE_ERROR"


class NetworkError(CiError):
    prefix = "Network error"
    error_code = "NETWORK_ERROR"
    http_status = 502
    retryable = True


class ExternalServiceError(CiError):
    prefix = "External service error"
    error_code = "EXTERNAL_SERVICE_ERROR"
    http_status = 502
    retryable = True


class OperationTimeoutError(CiError):
    prefix = "Timeout"
    error_code = "TIMEOUT"
    http_status = 408
    retryable = True


class RateLimitError(CiError):
    prefix = "Rate limit exceeded"
    error_code = "RATE_LIMIT_EXCEEDED"
    http_status = 429


class InternalError(CiError):
    prefix = "Internal error"


class SerializationError(CiError):
    prefix = "Serialization error"


class IoError(CiError):
    prefix = "IO error"


class ContextError(CiError):
    """An error wrapped with a description of what was being done."""

    def __init__(self, context: str, source: BaseException) -> None:
        super().__init__(f"{context}: {source}")
        self.context_text = context
        self.source = source


@contextmanager
def add_context(context: str | Callable[[], str]) -> Iterator[None]:
    """Re-raise any CiError from the block wrapped with ``context``.

    ``context`` may be a string or a callable producing one; the callable
    is only invoked when an error actually occurs.
    """
    try:
        yield
    except CiError as error:
        text = context() if callable(context) else context
        raise error.context(text) from error


@dataclass
class ErrorResponse:
    """Error payload returned by the API."""

    code: str
    message: str
    details: Any = None
    request_id: str | None = None

    @classmethod
    def from_error(cls, error: BaseException) -> ErrorResponse:
        """Build a response from any exception."""
        if isinstance(error, CiError):
            return cls(code=error.error_code, message=str(error))
        return cls(code=InternalError.error_code, message=str(InternalError(str(error))))

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; absent details and request id are omitted."""
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        if self.request_id is not None:
            data["request_id"] = self.request_id
        return data