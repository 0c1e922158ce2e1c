"""Azure Blob Storage client."""

import logging

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import BlobServiceClient

from .base import AuthResult, CloudStorageClient, ObjectInfo
from .exceptions import MissingCredentialsError, ObjectNotFoundError, ProviderError
from .paths import AZURE_SCHEMES

log = logging.getLogger(__name__)


class AzureBlobStorageClient(CloudStorageClient):
    """Azure Blob Storage client. One instance serves every container in the account."""

    provider = "azure"
    schemes = AZURE_SCHEMES
    label = "Azure"

    def __init__(self, config=None):
        super().__init__(config)
        credentials = self.config.azure_credentials()

        if credentials.connection_string:
            self._service_client = BlobServiceClient.from_connection_string(
                credentials.connection_string
            )
        elif credentials.account_name and credentials.account_key:
            account_url = (
                credentials.account_url
                or f"https://{credentials.account_name}.blob.core.windows.net"
            )
            self._service_client = BlobServiceClient(
                account_url=account_url,
                credential={
                    "account_name": credentials.account_name,
                    "account_key": credentials.account_key,
                },
            )
        else:
            log.error("Azure client created without usable credentials")
            raise MissingCredentialsError(
                "Azure credentials must include either connectionString or (accountName and accountKey)"
            )

    def validate_authentication(self) -> AuthResult:
        try:
            for _ in self._service_client.list_containers(results_per_page=1):
                break
            return AuthResult.success()
        except Exception as e:
            log.warning("Azure authentication check failed: %s", e)
            return AuthResult.failed(str(e))

    def get_object(self, file_path: str) -> str:
        parsed = self.parse_path(file_path)
        try:
            container_client = self._service_client.get_container_client(parsed.container_name)
            download = container_client.get_blob_client(parsed.path).download_blob()
            return download.readall().decode("utf-8")
        except Exception as e:
            log.error("Error while getting Azure blob %s: %s", file_path, e)
            raise self._translate_error(e, file_path) from e

    def list_objects(self, path: str) -> list[ObjectInfo]:
        parsed = self.parse_path(path)
        result: list[ObjectInfo] = []
        try:
            container_client = self._service_client.get_container_client(parsed.container_name)
            for blob in container_client.list_blobs(name_starts_with=parsed.path or None):
                etag = blob.etag
                result.append(
                    ObjectInfo(
                        name=blob.name,
                        size=blob.size,
                        updated=blob.last_modified,
                        etag=etag.strip('"') if etag else None,
                    )
                )
            return result
        except Exception as e:
            log.error("Error while listing Azure blobs under %s: %s", path, e)
            raise self._translate_error(e, path) from e

    def _translate_error(self, error: Exception, key: str | None = None) -> ProviderError:
        if isinstance(error, ResourceNotFoundError):
            return ObjectNotFoundError(str(error), key=key, cause=error)
        return ProviderError(str(error), key=key, cause=error)
