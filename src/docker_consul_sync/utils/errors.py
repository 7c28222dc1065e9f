from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    TRANSLATION = "translation"
    RUNTIME_QUERY = "runtime_query"
    REGISTRY_QUERY = "registry_query"
    REGISTRATION = "registration"
    DEREGISTRATION = "deregistration"
    STREAM = "stream"
    CONFIGURATION = "configuration"


class SyncError(Exception):
    """
    Base error raised by the sync core.

    Carries a kind and a mapping of structured context so the error reporter
    can log it without parsing the message.
    """

    kind: ErrorKind = ErrorKind.TRANSLATION

    def __init__(
        self,
        message: str,
        fields: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.fields: Dict[str, Any] = dict(fields or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


# Translation
class TranslationError(SyncError):
    """Raised when a container's labels can't be turned into a registry entry."""

    kind = ErrorKind.TRANSLATION


class NoExposedPortError(TranslationError):
    """Raised when a container has neither a port label nor an exposed port."""


class InvalidPortError(TranslationError):
    """Raised when the port label is not a base-10 integer."""


# Docker
class RuntimeQueryError(SyncError):
    """Raised when listing containers from the container runtime fails."""

    kind = ErrorKind.RUNTIME_QUERY


class StreamError(SyncError):
    """Raised when a runtime event subscription breaks or closes."""

    kind = ErrorKind.STREAM


# Registry
class RegistryQueryError(SyncError):
    """Raised when listing services from the registry fails."""

    kind = ErrorKind.REGISTRY_QUERY


class RegistrationError(SyncError):
    kind = ErrorKind.REGISTRATION


class DeregistrationError(SyncError):
    kind = ErrorKind.DEREGISTRATION


# Startup
class ConfigurationError(SyncError):
    """Raised when a client can't be constructed at startup."""

    kind = ErrorKind.CONFIGURATION
