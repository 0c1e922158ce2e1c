"""Registry that creates and reuses storage clients by provider and instance id."""

import logging
from typing import Any, Dict, Optional

from .base import CloudStorageClient
from .config import ProviderConfig
from .exceptions import UnsupportedProviderError

log = logging.getLogger(__name__)

PROVIDER_ALIASES: Dict[str, str] = {
    "s3": "aws",
    "aws": "aws",
    "azure": "azure",
    "azurite": "azure",
    "gcp": "gcp",
    "gcs": "gcp",
    "google": "gcp",
}


def resolve_provider(provider: Optional[str]) -> str:
    """Map a provider alias to its canonical name: "aws", "azure" or "gcp"."""
    canonical = PROVIDER_ALIASES.get((provider or "").lower())
    if canonical is None:
        log.error("Unsupported storage provider requested: %r", provider)
        raise UnsupportedProviderError(
            f"Unsupported storage provider: {provider}. Supported: {', '.join(PROVIDER_ALIASES)}"
        )
    return canonical


def _client_class(canonical: str) -> type[CloudStorageClient]:
    if canonical == "aws":
        from .s3_client import S3StorageClient

        return S3StorageClient
    if canonical == "azure":
        from .azure_client import AzureBlobStorageClient

        return AzureBlobStorageClient

    from .gcs_client import GcsStorageClient

    return GcsStorageClient


class StorageRegistry:
    """Creates storage clients and keeps one per (provider alias, instance id).

    Owned by the hosting application and passed to call sites. There is no
    eviction; the number of entries is bounded by the distinct accounts the
    process talks to. Concurrent creation of the same key may build two
    clients; the last one stored wins.
    """

    def __init__(self):
        self._instances: Dict[str, CloudStorageClient] = {}

    def create_storage_service(
        self,
        provider: str,
        config: "ProviderConfig | Dict[str, Any] | None" = None,
    ) -> CloudStorageClient:
        """Return the cached client for this provider/instance, creating it on first use.

        Args:
            provider: Provider alias, case-insensitive (s3, aws, azure, azurite, gcp, gcs, google).
            config: ProviderConfig or an equivalent mapping.

        Raises:
            UnsupportedProviderError: If the alias is not recognized.
            MissingCredentialsError: If the client rejects the credentials.
        """
        alias = (provider or "").lower()
        canonical = resolve_provider(alias)
        config = ProviderConfig.coerce(config)
        key = f"{alias}-{config.instance_key}"

        client = self._instances.get(key)
        if client is not None:
            log.debug("Reusing storage client %s", key)
            return client

        client = _client_class(canonical)(config)
        self._instances[key] = client
        log.info("Created %s storage client %s", canonical, key)
        return client

    def create_from_env(self, provider: str, instance_id: Optional[str] = None) -> CloudStorageClient:
        """Create (or reuse) a client configured from environment variables."""
        canonical = resolve_provider(provider)
        return self.create_storage_service(provider, ProviderConfig.from_env(canonical, instance_id))

    def get(self, key: str) -> Optional[CloudStorageClient]:
        return self._instances.get(key)

    def clear(self) -> None:
        self._instances.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)
