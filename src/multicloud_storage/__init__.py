"""Unified read access to S3, Azure Blob Storage and Google Cloud Storage."""

from .base import AuthResult, AuthStatus, CloudStorageClient, ObjectInfo
from .config import AWSCredentials, AzureCredentials, GCPCredentials, ProviderConfig
from .exceptions import (
    CloudStorageError,
    InvalidPathError,
    MissingCredentialsError,
    NotInstantiableError,
    ObjectNotFoundError,
    ProviderError,
    UnsupportedProviderError,
)
from .factory import StorageRegistry, resolve_provider
from .paths import ParsedPath, get_provider_from_path

__all__ = [
    "CloudStorageClient",
    "AuthResult",
    "AuthStatus",
    "ObjectInfo",
    "ParsedPath",
    "ProviderConfig",
    "AWSCredentials",
    "AzureCredentials",
    "GCPCredentials",
    "CloudStorageError",
    "InvalidPathError",
    "MissingCredentialsError",
    "NotInstantiableError",
    "ObjectNotFoundError",
    "ProviderError",
    "UnsupportedProviderError",
    "StorageRegistry",
    "resolve_provider",
    "get_provider_from_path",
]
