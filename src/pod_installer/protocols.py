"""Protocols for the installer's external collaborators.

The installer owns the decisions; apps provide the mechanisms (git/http/svn
downloaders, local pod preparation, pod directory pruning, file enumeration).
"""

from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from .request import DownloadRequest
from .request import DownloadResult
from .schema import Specification


@runtime_checkable
class DownloaderProtocol(Protocol):
    """Fetches a pod's source into a target directory.

    Example implementations:
    - GitDownloader: clones and checks out the tag/branch/commit
    - HttpDownloader: downloads and extracts an archive
    - CachedDownloader: wraps another downloader with an on-disk cache
    """

    async def download(
        self,
        request: DownloadRequest,
        target: Path,
        *,
        can_cache: bool = True,
    ) -> DownloadResult:
        """Download the requested pod into target.

        Args:
            request: What to fetch and whether it is a released version
            target: Pod directory inside the sandbox
            can_cache: Whether the cache may be read or populated

        Returns:
            DownloadResult with the exact checkout coordinates, if known

        Raises:
            Exception: If the download fails
        """
        ...


@runtime_checkable
class SourcePreparerProtocol(Protocol):
    """Prepares a local (development) pod in place. Must not touch the network."""

    def prepare(self, spec: Specification, path: Path) -> None: ...


@runtime_checkable
class PodDirCleanerProtocol(Protocol):
    """Removes files not referenced by any active variant of the pod."""

    def clean(self, path: Path, specs_by_platform: dict[str, list[Specification]]) -> None: ...


@runtime_checkable
class FileAccessorProtocol(Protocol):
    """Enumerates the files of one specification variant."""

    @property
    def source_files(self) -> list[Path]: ...
