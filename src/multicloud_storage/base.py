"""Abstract base class for cloud storage backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple

from .config import ProviderConfig
from .exceptions import NotInstantiableError
from .paths import ParsedPath, split_uri


class AuthStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class AuthResult:
    """Outcome of a credential check. Failures are values, not exceptions."""

    status: AuthStatus
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, message: str = "Authentication verified") -> "AuthResult":
        return cls(status=AuthStatus.SUCCESS, message=message)

    @classmethod
    def failed(cls, error: str) -> "AuthResult":
        return cls(status=AuthStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is AuthStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"status": self.status.value, "message": self.message}
        return {"status": self.status.value, "error": self.error}


@dataclass(frozen=True)
class ObjectInfo:
    """Listing entry, normalized across providers."""

    name: str
    size: Optional[int] = None
    updated: Optional[datetime] = None
    etag: Optional[str] = None


class CloudStorageClient(ABC):
    """Provider-agnostic interface for reading from object storage.

    Subclasses set ``provider`` and ``schemes`` and implement the four
    operations. ``parse_path`` has a shared implementation driven by
    ``schemes`` but may be overridden.
    """

    provider: ClassVar[str]
    schemes: ClassVar[Tuple[str, ...]] = ()
    label: ClassVar[str] = "storage"

    def __new__(cls, *args, **kwargs):
        if cls is CloudStorageClient:
            raise NotInstantiableError(
                "CloudStorageClient is an abstract class and cannot be instantiated"
            )
        return super().__new__(cls)

    def __init__(self, config: "ProviderConfig | Dict[str, Any] | None" = None):
        self.config = ProviderConfig.coerce(config)

    @classmethod
    def parse_path(cls, path: str) -> ParsedPath:
        """Split a provider URI into container name and object path."""
        if not cls.schemes:
            raise NotImplementedError("parse_path method must be implemented")
        return split_uri(path, cls.schemes, cls.label)

    @abstractmethod
    def validate_authentication(self) -> AuthResult:
        """Check credentials with one lightweight call. Never raises."""
        raise NotImplementedError("validate_authentication method must be implemented")

    @abstractmethod
    def get_object(self, file_path: str) -> str:
        """Return the full object content as text.

        Raises ObjectNotFoundError if missing, ProviderError on other failures.
        """
        raise NotImplementedError("get_object method must be implemented")

    @abstractmethod
    def list_objects(self, path: str) -> list[ObjectInfo]:
        """List every object under the URI prefix, draining all pages."""
        raise NotImplementedError("list_objects method must be implemented")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(instance={self.config.instance_key!r})"
