"""Tests for AzureBlobStorageClient."""

import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from multicloud_storage.azure_client import AzureBlobStorageClient
from multicloud_storage.base import ObjectInfo
from multicloud_storage.exceptions import MissingCredentialsError, ObjectNotFoundError, ProviderError

_CONNECTION_STRING = "DefaultEndpointsProtocol=https;AccountName=test;AccountKey=a2V5"


@pytest.fixture()
def mock_blob_service():
    with patch("multicloud_storage.azure_client.BlobServiceClient") as mock:
        yield mock


@pytest.fixture()
def azure_client(mock_blob_service) -> AzureBlobStorageClient:
    return AzureBlobStorageClient({"credentials": {"connectionString": _CONNECTION_STRING}})


@pytest.fixture()
def container_client(azure_client) -> MagicMock:
    container = MagicMock()
    azure_client._service_client.get_container_client.return_value = container
    return container


def _blob(name: str, size: int, etag: str | None = None, last_modified=None) -> MagicMock:
    blob = MagicMock()
    blob.name = name
    blob.size = size
    blob.etag = etag
    blob.last_modified = last_modified
    return blob


class TestConstruction:
    def test_connection_string(self, mock_blob_service):
        AzureBlobStorageClient({"credentials": {"connectionString": _CONNECTION_STRING}})
        mock_blob_service.from_connection_string.assert_called_once_with(_CONNECTION_STRING)

    def test_account_name_and_key(self, mock_blob_service):
        AzureBlobStorageClient({"credentials": {"accountName": "acct", "accountKey": "key"}})

        call_kwargs = mock_blob_service.call_args.kwargs
        assert call_kwargs["account_url"] == "https://acct.blob.core.windows.net"
        assert call_kwargs["credential"] == {"account_name": "acct", "account_key": "key"}

    def test_account_url_override(self, mock_blob_service):
        AzureBlobStorageClient(
            {
                "credentials": {
                    "accountName": "devstoreaccount1",
                    "accountKey": "key",
                    "accountUrl": "http://127.0.0.1:10000/devstoreaccount1",
                }
            }
        )
        assert mock_blob_service.call_args.kwargs["account_url"] == "http://127.0.0.1:10000/devstoreaccount1"

    @pytest.mark.parametrize(
        "credentials",
        [{}, {"accountName": "acct"}, {"accountKey": "key"}],
    )
    def test_missing_credentials_raises(self, mock_blob_service, credentials):
        with pytest.raises(MissingCredentialsError, match="connectionString"):
            AzureBlobStorageClient({"credentials": credentials})

    def test_missing_credentials_is_value_error(self, mock_blob_service):
        with pytest.raises(ValueError):
            AzureBlobStorageClient({"credentials": {}})


class TestValidateAuthentication:
    def test_success(self, azure_client):
        azure_client._service_client.list_containers.return_value = iter([MagicMock()])
        assert azure_client.validate_authentication().to_dict() == {
            "status": "success",
            "message": "Authentication verified",
        }

    def test_empty_account_still_succeeds(self, azure_client):
        azure_client._service_client.list_containers.return_value = iter([])
        assert azure_client.validate_authentication().ok

    def test_failure_is_returned_not_raised(self, azure_client):
        azure_client._service_client.list_containers.side_effect = HttpResponseError(message="AuthenticationFailed")

        result = azure_client.validate_authentication()

        assert result.to_dict()["status"] == "failed"
        assert "AuthenticationFailed" in result.error


class TestGetObject:
    def test_returns_decoded_text(self, azure_client, container_client):
        download = MagicMock()
        download.readall.return_value = b"blob-content"
        container_client.get_blob_client.return_value.download_blob.return_value = download

        assert azure_client.get_object("az://mycontainer/folder/file.txt") == "blob-content"
        azure_client._service_client.get_container_client.assert_called_once_with("mycontainer")
        container_client.get_blob_client.assert_called_once_with("folder/file.txt")

    def test_missing_blob_raises_not_found(self, azure_client, container_client):
        container_client.get_blob_client.return_value.download_blob.side_effect = ResourceNotFoundError(
            message="BlobNotFound"
        )

        with pytest.raises(ObjectNotFoundError, match="BlobNotFound"):
            azure_client.get_object("azure://c/missing")

    def test_other_error_raises_provider_error(self, azure_client, container_client):
        container_client.get_blob_client.return_value.download_blob.side_effect = HttpResponseError(
            message="ServerBusy"
        )

        with pytest.raises(ProviderError) as exc_info:
            azure_client.get_object("azure://c/k")

        assert type(exc_info.value) is ProviderError
        assert isinstance(exc_info.value.cause, HttpResponseError)


class TestListObjects:
    def test_normalizes_blobs(self, azure_client, container_client):
        modified = datetime(2024, 5, 1, tzinfo=timezone.utc)
        container_client.list_blobs.return_value = iter(
            [
                _blob("folder/a.json", 10, '"0x8D"', modified),
                _blob("folder/b.json", 20),
            ]
        )

        result = azure_client.list_objects("azure://mycontainer/folder/")

        assert result == [
            ObjectInfo(name="folder/a.json", size=10, updated=modified, etag="0x8D"),
            ObjectInfo(name="folder/b.json", size=20),
        ]
        container_client.list_blobs.assert_called_once_with(name_starts_with="folder/")

    def test_container_root_lists_without_prefix(self, azure_client, container_client):
        container_client.list_blobs.return_value = iter([])

        assert azure_client.list_objects("az://mycontainer") == []
        container_client.list_blobs.assert_called_once_with(name_starts_with=None)

    def test_missing_container_raises_not_found(self, azure_client, container_client):
        container_client.list_blobs.side_effect = ResourceNotFoundError(message="ContainerNotFound")

        with pytest.raises(ObjectNotFoundError):
            azure_client.list_objects("az://nope/")


class TestLogging:
    def test_failed_get_is_logged_as_error(self, azure_client, container_client, caplog):
        container_client.get_blob_client.return_value.download_blob.side_effect = ResourceNotFoundError(
            message="BlobNotFound"
        )

        with caplog.at_level(logging.ERROR, logger="multicloud_storage.azure_client"):
            with pytest.raises(ObjectNotFoundError):
                azure_client.get_object("az://c/missing")

        assert [r.levelno for r in caplog.records] == [logging.ERROR]
        assert "az://c/missing" in caplog.text

    def test_failed_list_is_logged_as_error(self, azure_client, container_client, caplog):
        container_client.list_blobs.side_effect = HttpResponseError(message="ServerBusy")

        with caplog.at_level(logging.ERROR, logger="multicloud_storage.azure_client"):
            with pytest.raises(ProviderError):
                azure_client.list_objects("az://c/")

        assert "Error while listing Azure blobs" in caplog.text

    def test_failed_auth_is_logged_as_warning(self, azure_client, caplog):
        azure_client._service_client.list_containers.side_effect = HttpResponseError(message="AuthenticationFailed")

        with caplog.at_level(logging.WARNING, logger="multicloud_storage.azure_client"):
            azure_client.validate_authentication()

        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "Azure authentication check failed" in caplog.text

    def test_missing_credentials_is_logged(self, mock_blob_service, caplog):
        with caplog.at_level(logging.ERROR, logger="multicloud_storage.azure_client"):
            with pytest.raises(MissingCredentialsError):
                AzureBlobStorageClient({"credentials": {}})

        assert "without usable credentials" in caplog.text
