"""
Configuration models for cloud storage clients.

Configuration arrives either as keyword data from the caller (camelCase, as
stored in connection records) or from environment variables. Both shapes are
normalized into the models below:
- ProviderConfig: the per-client configuration bag
- AWSCredentials / AzureCredentials / GCPCredentials: provider credential shapes
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import UnsupportedProviderError


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class AWSCredentials(_CamelModel):
    """S3 access key pair."""

    access_key: Optional[str] = Field(
        default=None,
        description="AWS access key id"
    )
    secret_key: Optional[str] = Field(
        default=None,
        description="AWS secret access key"
    )
    session_token: Optional[str] = Field(
        default=None,
        description="Session token for temporary credentials"
    )


class AzureCredentials(_CamelModel):
    """Azure Blob Storage credentials: a connection string or an account key pair."""

    connection_string: Optional[str] = Field(
        default=None,
        description="Full storage account connection string"
    )
    account_name: Optional[str] = Field(
        default=None,
        description="Storage account name"
    )
    account_key: Optional[str] = Field(
        default=None,
        description="Storage account shared key"
    )
    account_url: Optional[str] = Field(
        default=None,
        description="Blob endpoint override (e.g. Azurite); derived from account_name if unset"
    )


class GCPCredentials(_CamelModel):
    """Google Cloud Storage credentials: a key file, an explicit service account, or nothing."""

    key_filename: Optional[str] = Field(
        default=None,
        description="Path to a service account JSON key file"
    )
    project_id: Optional[str] = Field(
        default=None,
        description="GCP project id"
    )
    client_email: Optional[str] = Field(
        default=None,
        description="Service account email"
    )
    private_key: Optional[str] = Field(
        default=None,
        description="Service account PEM private key"
    )


class ProviderConfig(_CamelModel):
    """Configuration for a single storage client instance."""

    credentials: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific credential fields"
    )
    region: Optional[str] = Field(
        default=None,
        description="Region for providers that need one (AWS)"
    )
    instance_id: Optional[str] = Field(
        default=None,
        description="Distinguishes several clients for the same provider"
    )
    id: Optional[str] = Field(
        default=None,
        description="Fallback instance identifier"
    )
    endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores"
    )

    @field_validator("instance_id", "id", mode="before")
    @classmethod
    def _stringify_identifier(cls, value: Any) -> Optional[str]:
        # Numeric ids are keyed by their string form.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def instance_key(self) -> str:
        return self.instance_id or self.id or "default"

    def aws_credentials(self) -> AWSCredentials:
        return AWSCredentials.model_validate(self.credentials)

    def azure_credentials(self) -> AzureCredentials:
        return AzureCredentials.model_validate(self.credentials)

    def gcp_credentials(self) -> GCPCredentials:
        return GCPCredentials.model_validate(self.credentials)

    @classmethod
    def coerce(cls, config: "ProviderConfig | Dict[str, Any] | None") -> "ProviderConfig":
        """Accept an existing ProviderConfig, a plain mapping, or None."""
        if isinstance(config, ProviderConfig):
            return config
        return cls.model_validate(config or {})

    @classmethod
    def from_env(cls, provider: str, instance_id: Optional[str] = None) -> "ProviderConfig":
        """Build a config from the standard object storage environment variables.

        ``provider`` must already be a canonical name: "aws", "azure" or "gcp".
        """
        if provider == "aws":
            credentials = {
                "access_key": os.getenv("AWS_ACCESS_KEY_ID"),
                "secret_key": os.getenv("AWS_SECRET_ACCESS_KEY"),
                "session_token": os.getenv("AWS_SESSION_TOKEN"),
            }
            return cls(
                credentials=_drop_empty(credentials),
                region=os.getenv("S3_REGION"),
                endpoint_url=os.getenv("S3_ENDPOINT_URL"),
                instance_id=instance_id,
            )
        if provider == "azure":
            credentials = {
                "connection_string": os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
                "account_name": os.getenv("AZURE_STORAGE_ACCOUNT_NAME"),
                "account_key": os.getenv("AZURE_STORAGE_ACCOUNT_KEY"),
            }
            return cls(credentials=_drop_empty(credentials), instance_id=instance_id)
        if provider == "gcp":
            credentials = {
                "key_filename": os.getenv("GOOGLE_APPLICATION_CREDENTIALS"),
                "project_id": os.getenv("GCS_PROJECT"),
            }
            return cls(credentials=_drop_empty(credentials), instance_id=instance_id)

        raise UnsupportedProviderError(f"Unknown provider {provider!r}. Expected one of: aws, azure, gcp")


def _drop_empty(values: Dict[str, Optional[str]]) -> Dict[str, str]:
    return {k: v for k, v in values.items() if v}
