"""S3-compatible storage client (AWS S3, MinIO, SeaweedFS)."""

import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .base import AuthResult, CloudStorageClient, ObjectInfo
from .exceptions import ObjectNotFoundError, ProviderError
from .paths import S3_SCHEMES

log = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "404"}


class S3StorageClient(CloudStorageClient):
    """S3-compatible object storage client."""

    provider = "aws"
    schemes = S3_SCHEMES
    label = "S3"

    def __init__(self, config=None):
        super().__init__(config)
        credentials = self.config.aws_credentials()
        self._region = (
            self.config.region
            or os.getenv("AWS_REGION")
            or os.getenv("AWS_DEFAULT_REGION")
            or "us-east-1"
        )
        self._endpoint_url = self.config.endpoint_url

        kwargs: dict = {
            "config": Config(
                region_name=self._region,
                signature_version="s3v4",
            ),
        }
        if credentials.access_key and credentials.secret_key:
            kwargs["aws_access_key_id"] = credentials.access_key
            kwargs["aws_secret_access_key"] = credentials.secret_key
        if credentials.session_token:
            kwargs["aws_session_token"] = credentials.session_token
        if self._endpoint_url:
            kwargs["endpoint_url"] = self._endpoint_url

        try:
            self._client = boto3.client("s3", **kwargs)
        except Exception as e:
            log.error("Failed to create S3 client: %s", e)
            raise

    def validate_authentication(self) -> AuthResult:
        try:
            self._client.list_buckets()
            return AuthResult.success()
        except Exception as e:
            log.warning("S3 authentication check failed: %s", e)
            return AuthResult.failed(str(e))

    def get_object(self, file_path: str) -> str:
        parsed = self.parse_path(file_path)
        try:
            response = self._client.get_object(Bucket=parsed.bucket_name, Key=parsed.path)
            return response["Body"].read().decode("utf-8")
        except (ClientError, BotoCoreError, UnicodeDecodeError) as e:
            log.error("Error while getting S3 object %s: %s", file_path, e)
            raise self._translate_error(e, file_path) from e

    def list_objects(self, path: str) -> list[ObjectInfo]:
        parsed = self.parse_path(path)
        result: list[ObjectInfo] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=parsed.bucket_name, Prefix=parsed.path):
                for obj in page.get("Contents", []):
                    etag = obj.get("ETag")
                    result.append(
                        ObjectInfo(
                            name=obj["Key"],
                            size=obj.get("Size"),
                            updated=obj.get("LastModified"),
                            etag=etag.strip('"') if etag else None,
                        )
                    )
            return result
        except (ClientError, BotoCoreError) as e:
            log.error("Error while listing S3 objects under %s: %s", path, e)
            raise self._translate_error(e, path) from e

    def _translate_error(self, error: Exception, key: str | None = None) -> ProviderError:
        if isinstance(error, ClientError):
            code = error.response.get("Error", {}).get("Code", "")
            if code in _NOT_FOUND_CODES:
                return ObjectNotFoundError(str(error), key=key, cause=error)
        return ProviderError(str(error), key=key, cause=error)
