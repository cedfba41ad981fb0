"""Download request and result records exchanged with the downloader."""

from pydantic import BaseModel
from pydantic import ConfigDict

from .schema import SourceOptions
from .schema import Specification


class DownloadRequest(BaseModel):
    """Parameters for fetching a pod's source (immutable).

    ``released`` lets the downloader trust cached archives for published
    versions and always fetch fresh for development checkouts.
    """

    model_config = ConfigDict(frozen=True)

    spec: Specification
    released: bool


class DownloadResult(BaseModel):
    """Outcome of a successful download."""

    model_config = ConfigDict(frozen=True)

    # Exact coordinates fetched, e.g. {"git": url, "commit": sha} for a floating branch
    checkout_options: SourceOptions | None = None
