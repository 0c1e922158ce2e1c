"""Common exception hierarchy for cloud storage clients."""


class CloudStorageError(Exception):
    """Base exception for all cloud storage operations."""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(message)


class InvalidPathError(CloudStorageError, ValueError):
    """Raised when a storage URI cannot be split into container and path."""


class MissingCredentialsError(CloudStorageError, ValueError):
    """Raised when a client is constructed without the credentials it requires."""


class UnsupportedProviderError(CloudStorageError, ValueError):
    """Raised when a provider alias is not recognized."""


class NotInstantiableError(CloudStorageError, TypeError):
    """Raised when the abstract storage client is instantiated directly."""


class ProviderError(CloudStorageError):
    """Raised when the underlying provider SDK fails during get or list."""


class ObjectNotFoundError(ProviderError):
    """Raised when a requested object or container does not exist."""
