"""Storage URI helpers shared by all providers."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .exceptions import InvalidPathError

log = logging.getLogger(__name__)

S3_SCHEMES = ("s3://",)
AZURE_SCHEMES = ("azure://", "az://")
GCP_SCHEMES = ("gs://", "gcp://")


@dataclass(frozen=True)
class ParsedPath:
    """A storage URI split into its container (bucket) and object path."""

    container_name: str
    path: str = ""

    @property
    def bucket_name(self) -> str:
        return self.container_name


def split_uri(uri: str, schemes: Sequence[str], label: str) -> ParsedPath:
    """Strip the first matching scheme from ``uri`` and split off the container.

    Input without a recognized scheme is split as-is. Bucket and key names are
    passed through untouched; the provider decides whether they are valid.
    """
    if not isinstance(uri, str):
        log.error("Error while parsing %s path: expected a string, got %r", label, uri)
        raise InvalidPathError(f"Invalid {label} path format: {uri!r}")

    remainder = uri
    for scheme in schemes:
        if remainder.startswith(scheme):
            remainder = remainder[len(scheme):]
            break

    container_name, _, path = remainder.partition("/")
    if not container_name:
        log.error("Error while parsing %s path: empty container in %r", label, uri)
        raise InvalidPathError(f"Invalid {label} path format: {uri}", key=uri)

    return ParsedPath(container_name=container_name, path=path)


def get_provider_from_path(path: Optional[str]) -> Optional[str]:
    """Classify a URI by scheme.

    Returns "s3", "azure" or "gcp". Anything without a recognized scheme is
    treated as S3; empty input yields None.
    """
    if not path:
        return None

    if path.startswith(S3_SCHEMES):
        return "s3"
    if path.startswith(AZURE_SCHEMES):
        return "azure"
    if path.startswith(GCP_SCHEMES):
        return "gcp"

    return "s3"
