"""Pod source installation controller.

Decides, for one pod, whether its source has to be downloaded, prepared in
place, pruned, and write-protected. The mechanisms (downloading, preparing,
pruning, enumerating files) are injected; this module only owns the decisions.

Every mutating step first consults the state predicates:
- is_predownloaded: source was fetched during resolution
- is_local: the user owns the pod directory (never written, pruned or locked)
- is_external: declared through a direct reference (podspec/path/git)
- is_released: a published version not matching the stored specification
"""

import logging
import stat
from collections.abc import Callable
from collections.abc import Iterable
from pathlib import Path

from .exceptions import DownloadError
from .exceptions import FetchError
from .exceptions import InvalidSpecificationsError
from .exceptions import SourcePreparationError
from .podfile import Podfile
from .protocols import DownloaderProtocol
from .protocols import FileAccessorProtocol
from .protocols import PodDirCleanerProtocol
from .protocols import SourcePreparerProtocol
from .request import DownloadRequest
from .sandbox import Sandbox
from .schema import InstallerOptions
from .schema import Specification
from .security import verify_source_is_secure

logger = logging.getLogger(__name__)


def _validate_specs_by_platform(specs_by_platform: dict[str, list[Specification]]) -> Specification:
    """Return the root shared by every variant, or raise if there is none."""
    specs = [spec for platform_specs in specs_by_platform.values() for spec in platform_specs]
    if not specs:
        raise InvalidSpecificationsError(
            "No specifications to install",
            context={"platforms": list(specs_by_platform)},
        )

    root_spec = specs[0].root
    for spec in specs[1:]:
        root = spec.root
        if root.name != root_spec.name or root.source != root_spec.source:
            raise InvalidSpecificationsError(
                f"Specifications do not share one root: '{root.name}' and '{root_spec.name}'",
                context={"expected": root_spec.name, "found": spec.name},
            )
    return root_spec


def _set_owner_write(path: Path, writable: bool) -> None:
    mode = stat.S_IMODE(path.stat().st_mode)
    new_mode = mode | stat.S_IWUSR if writable else mode & ~stat.S_IWUSR
    if new_mode != mode:
        path.chmod(new_mode)


class PodSourceInstaller:
    """
    Installs the activated specifications of a single pod.

    Consider all activated variants of the pod: cleaning keeps every file used
    by at least one platform, and locking covers the files of every variant.
    """

    def __init__(
        self,
        sandbox: Sandbox,
        podfile: Podfile,
        specs_by_platform: dict[str, list[Specification]],
        downloader: DownloaderProtocol,
        *,
        preparer: SourcePreparerProtocol | None = None,
        cleaner: PodDirCleanerProtocol | None = None,
        options: InstallerOptions | None = None,
        can_cache: bool | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        """Initialize installer with app-provided collaborators.

        Args:
            sandbox: Installation target (shared across pods)
            podfile: User's dependency declarations
            specs_by_platform: Activated variants keyed by platform (e.g. "ios", "osx")
            downloader: Fetches sources of non-local pods
            preparer: Prepares local pods in place; skipped if None
            cleaner: Prunes unused files; clean() is a no-op if None
            options: Installer policy (cache use, security check knobs)
            can_cache: Shortcut overriding options.can_cache
            warn: Sink for security warnings; defaults to logging

        Raises:
            InvalidSpecificationsError: If specs_by_platform is empty or mixes pods
        """
        self.sandbox = sandbox
        self.podfile = podfile
        self.specs_by_platform = specs_by_platform
        self.downloader = downloader
        self.preparer = preparer
        self.cleaner = cleaner
        self.options = options or InstallerOptions()
        if can_cache is not None:
            self.options = self.options.model_copy(update={"can_cache": can_cache})
        self.warn = warn
        self._root_spec = _validate_specs_by_platform(specs_by_platform)
        self._external_names: set[str] | None = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} sandbox={self.sandbox.root} pod={self.name}>"

    @property
    def name(self) -> str:
        """Name of the pod this installer is installing."""
        return self.root_spec.name

    @property
    def can_cache(self) -> bool:
        return self.options.can_cache

    @property
    def specs(self) -> list[Specification]:
        """All activated variants, across platforms."""
        return [spec for platform_specs in self.specs_by_platform.values() for spec in platform_specs]

    @property
    def root_spec(self) -> Specification:
        return self._root_spec

    @property
    def root(self) -> Path:
        """Folder where the source of the pod is located."""
        return self.sandbox.pod_dir(self.name)

    # State predicates

    @property
    def is_predownloaded(self) -> bool:
        return self.name in self.sandbox.predownloaded_pods

    @property
    def is_local(self) -> bool:
        return self.sandbox.is_local(self.name)

    @property
    def is_external(self) -> bool:
        if self._external_names is None:
            self._external_names = self.podfile.external_dependency_names()
        return self.name in self._external_names

    @property
    def is_released(self) -> bool:
        if self.is_local or self.is_predownloaded:
            return False
        return self.sandbox.specification(self.name) != self.root_spec

    # Installation

    async def install(self) -> None:
        """
        Bring the pod's source into the sandbox.

        Process:
        1. Download the source unless it was pre-downloaded or is local
        2. Prepare the source in place if it is local
        3. Discard the stored podspec unless pre-downloaded, local or external

        Raises:
            FetchError: If downloading fails (finalization is skipped)
            SourcePreparationError: If preparing a local pod fails
        """
        logger.info(f"Installing {self.name} ({self.root_spec.version})")

        if self.is_predownloaded or self.is_local:
            logger.debug(
                f"Skipping download of {self.name} (predownloaded={self.is_predownloaded}, local={self.is_local})"
            )
        else:
            await self._download_source()

        if self.is_local:
            self._prepare_local_source()

        if not (self.is_predownloaded or self.is_local or self.is_external):
            self.sandbox.remove_local_podspec(self.name)
        else:
            logger.debug(f"Keeping stored podspec of {self.name}")

    def download_request(self) -> DownloadRequest:
        return DownloadRequest(spec=self.root_spec, released=self.is_released)

    async def _download_source(self) -> None:
        verify_source_is_secure(
            self.root_spec,
            warn=self.warn,
            unencrypted_schemes=self.options.unencrypted_schemes,
            trusted_hosts=self.options.trusted_hosts,
        )

        request = self.download_request()
        try:
            result = await self.downloader.download(request, self.root, can_cache=self.can_cache)
        except FetchError:
            raise
        except Exception as e:
            raise DownloadError(
                f"Failed to download '{self.name}': {e}",
                context={"name": self.name, "target": str(self.root)},
            ) from e

        checkout_options = result.checkout_options
        if checkout_options and checkout_options != self.root_spec.source:
            self.sandbox.store_checkout_source(self.name, checkout_options)
        else:
            # The declared source is exact; drop any pin left by an earlier run
            self.sandbox.remove_checkout_source(self.name)

        logger.info(f"Downloaded {self.name} to {self.root}")

    def _prepare_local_source(self) -> None:
        if self.preparer is None:
            logger.debug(f"No preparer configured, leaving local pod {self.name} as is")
            return

        try:
            self.preparer.prepare(self.root_spec, self.root)
        except SourcePreparationError:
            raise
        except Exception as e:
            raise SourcePreparationError(
                f"Failed to prepare local pod '{self.name}': {e}",
                context={"name": self.name, "path": str(self.root)},
            ) from e

    # Cleaning

    def clean(self) -> None:
        """Remove files not used by any platform variant, unless the pod is local."""
        if self.is_local:
            logger.debug(f"Not cleaning local pod {self.name}")
            return
        if self.cleaner is None:
            logger.debug(f"No cleaner configured, not cleaning {self.name}")
            return

        self.cleaner.clean(self.root, self.specs_by_platform)

    # File locking

    def lock_files(self, file_accessors: Iterable[FileAccessorProtocol]) -> None:
        """
        Remove owner write permission from the pod's source files.

        Args:
            file_accessors: One accessor per activated variant

        Raises:
            PermissionError: If a file mode cannot be changed
        """
        self._set_source_files_writable(file_accessors, writable=False)

    def unlock_files(self, file_accessors: Iterable[FileAccessorProtocol]) -> None:
        """Restore owner write permission on the pod's source files."""
        self._set_source_files_writable(file_accessors, writable=True)

    def _set_source_files_writable(self, file_accessors: Iterable[FileAccessorProtocol], writable: bool) -> None:
        if self.is_local:
            return

        paths = self._source_files(file_accessors)
        for path in paths:
            _set_owner_write(path, writable)
        logger.debug(f"{'Unlocked' if writable else 'Locked'} {len(paths)} source files of {self.name}")

    @staticmethod
    def _source_files(file_accessors: Iterable[FileAccessorProtocol]) -> list[Path]:
        return [path for accessor in file_accessors for path in accessor.source_files]
