"""Google Cloud Storage client."""

import logging

from google.api_core.exceptions import NotFound
from google.cloud import storage as gcs
from google.oauth2 import service_account

from .base import AuthResult, CloudStorageClient, ObjectInfo
from .exceptions import ObjectNotFoundError, ProviderError
from .paths import GCP_SCHEMES

log = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"


class GcsStorageClient(CloudStorageClient):
    """Google Cloud Storage client.

    Credentials are resolved in order: a service account key file, an
    explicit (project id, client email, private key) triple, and finally the
    ambient application default credentials.
    """

    provider = "gcp"
    schemes = GCP_SCHEMES
    label = "GCP"

    def __init__(self, config=None):
        super().__init__(config)
        credentials = self.config.gcp_credentials()

        kwargs: dict = {}
        try:
            if credentials.key_filename:
                kwargs["credentials"] = service_account.Credentials.from_service_account_file(
                    credentials.key_filename
                )
                if credentials.project_id:
                    kwargs["project"] = credentials.project_id
            elif credentials.project_id and credentials.client_email and credentials.private_key:
                kwargs["project"] = credentials.project_id
                kwargs["credentials"] = service_account.Credentials.from_service_account_info(
                    {
                        "type": "service_account",
                        "project_id": credentials.project_id,
                        "client_email": credentials.client_email,
                        "private_key": credentials.private_key,
                        "token_uri": _TOKEN_URI,
                    }
                )
            elif credentials.project_id:
                kwargs["project"] = credentials.project_id
        except Exception as e:
            log.error("Failed to load GCP service account credentials: %s", e)
            raise

        self._client_kwargs = kwargs
        self._client: gcs.Client | None = None

    @property
    def _gcs_client(self) -> gcs.Client:
        # Built on first use; ambient credential errors surface from the calling operation.
        if self._client is None:
            self._client = gcs.Client(**self._client_kwargs)
        return self._client

    def validate_authentication(self) -> AuthResult:
        try:
            for _ in self._gcs_client.list_buckets(max_results=1):
                break
            return AuthResult.success()
        except Exception as e:
            log.warning("GCS authentication check failed: %s", e)
            return AuthResult.failed(str(e))

    def get_object(self, file_path: str) -> str:
        parsed = self.parse_path(file_path)
        try:
            blob = self._gcs_client.bucket(parsed.bucket_name).blob(parsed.path)
            return blob.download_as_bytes().decode("utf-8")
        except Exception as e:
            log.error("Error while getting GCP object %s: %s", file_path, e)
            raise self._translate_error(e, file_path) from e

    def list_objects(self, path: str) -> list[ObjectInfo]:
        parsed = self.parse_path(path)
        try:
            return [
                ObjectInfo(
                    name=blob.name,
                    size=blob.size,
                    updated=blob.updated,
                    etag=blob.etag,
                )
                for blob in self._gcs_client.list_blobs(parsed.bucket_name, prefix=parsed.path)
            ]
        except Exception as e:
            log.error("Error while listing GCP objects under %s: %s", path, e)
            raise self._translate_error(e, path) from e

    def _translate_error(self, error: Exception, key: str | None = None) -> ProviderError:
        if isinstance(error, NotFound):
            return ObjectNotFoundError(str(error), key=key, cause=error)
        return ProviderError(str(error), key=key, cause=error)
