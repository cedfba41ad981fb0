"""Sandbox - the on-disk workspace holding installed pods and their metadata.

Layout:
    <root>/<PodName>/                       installed pod sources
    <root>/Local Podspecs/<PodName>.podspec.json   specifications stored during resolution

Local (development) pods live outside the sandbox; ``pod_dir`` points at the
user's directory for them.
"""

import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from .exceptions import SandboxError
from .manifest import CheckoutManifest
from .schema import SourceOptions
from .schema import Specification

logger = logging.getLogger(__name__)


class Sandbox:
    """
    Installation target shared by all pod installers of one run.

    Per-pod records are keyed by pod name and guarded by a lock, so installers
    of different pods may update the sandbox concurrently.
    """

    SPECIFICATIONS_DIR = "Local Podspecs"

    def __init__(self, root: Path, manifest: CheckoutManifest | None = None):
        """Initialize sandbox with app-provided root.

        Args:
            root: Sandbox root directory (e.g. <project>/Pods)
            manifest: Optional checkout manifest; checkout options stored during this
                      run are written through to it

        Example:
            >>> sandbox = Sandbox(Path.cwd() / "Pods")
        """
        self.root = root
        self.manifest = manifest
        self._lock = threading.Lock()
        self._predownloaded_pods: set[str] = set()
        self._local_paths: dict[str, Path] = {}
        # Coordinates fetched during this run; the manifest keeps those of earlier runs
        self._checkout_sources: dict[str, SourceOptions] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} root={self.root}>"

    @property
    def installation_root(self) -> Path:
        """Directory relative local paths are resolved against."""
        return self.root.parent

    @property
    def specifications_root(self) -> Path:
        return self.root / self.SPECIFICATIONS_DIR

    def pod_dir(self, name: str) -> Path:
        """
        Directory holding the source of a pod.

        Args:
            name: Pod name

        Returns:
            The user's directory for local pods, <root>/<name> otherwise
        """
        local_path = self.local_path(name)
        if local_path is not None:
            return local_path
        return self.root / name

    # Pre-downloaded pods

    @property
    def predownloaded_pods(self) -> frozenset[str]:
        """Pods whose source was fetched during resolution to read their specification."""
        with self._lock:
            return frozenset(self._predownloaded_pods)

    def store_pre_downloaded_pod(self, name: str) -> None:
        with self._lock:
            self._predownloaded_pods.add(name)

    # Local overrides

    def store_local_path(self, name: str, path: Path) -> None:
        """
        Mark a pod as local (development pod) living at path.

        Args:
            name: Pod name
            path: Directory of the pod; relative paths are resolved from installation_root
        """
        path = Path(path).expanduser()
        if not path.is_absolute():
            path = self.installation_root / path

        with self._lock:
            self._local_paths[name] = path
        logger.debug(f"Stored local path for {name}: {path}")

    def local_path(self, name: str) -> Path | None:
        with self._lock:
            return self._local_paths.get(name)

    def is_local(self, name: str) -> bool:
        """Whether the user owns the files of this pod."""
        with self._lock:
            return name in self._local_paths

    # Stored specifications

    def specification_path(self, name: str) -> Path:
        return self.specifications_root / f"{name}.podspec.json"

    def store_podspec(self, name: str, spec: Specification) -> Path:
        """
        Store the specification resolved for a pod.

        Args:
            name: Pod name
            spec: Root specification to store

        Returns:
            Path of the written podspec.json
        """
        spec_path = self.specification_path(name)
        spec_path.parent.mkdir(parents=True, exist_ok=True)
        spec_path.write_text(spec.to_json())
        logger.debug(f"Stored podspec for {name} at {spec_path}")
        return spec_path

    def specification(self, name: str) -> Specification | None:
        """
        Specification previously stored for a pod.

        Args:
            name: Pod name

        Returns:
            Stored Specification, or None if nothing is stored

        Raises:
            SandboxError: If the stored file cannot be read
        """
        spec_path = self.specification_path(name)
        if not spec_path.exists():
            return None

        try:
            return Specification.from_json_file(spec_path)
        except (OSError, ValueError, ValidationError) as e:
            raise SandboxError(
                f"Could not read stored specification for '{name}': {e}",
                context={"name": name, "path": str(spec_path)},
            ) from e

    def remove_local_podspec(self, name: str) -> None:
        """Discard the stored specification of a pod, if any."""
        spec_path = self.specification_path(name)
        spec_path.unlink(missing_ok=True)
        logger.debug(f"Removed stored podspec for {name}")

    # Checkout sources

    @property
    def checkout_sources(self) -> dict[str, SourceOptions]:
        """Exact checkout options recorded per pod."""
        with self._lock:
            return {name: dict(options) for name, options in self._checkout_sources.items()}

    def store_checkout_source(self, name: str, checkout_options: SourceOptions) -> None:
        """
        Record the exact coordinates a pod was fetched with.

        Args:
            name: Pod name
            checkout_options: e.g. {"git": url, "commit": sha}
        """
        with self._lock:
            self._checkout_sources[name] = dict(checkout_options)
            if self.manifest is not None:
                self.manifest.record(name, checkout_options)
        logger.debug(f"Stored checkout options for {name}: {checkout_options}")

    def remove_checkout_source(self, name: str) -> None:
        """Forget the checkout options of a pod, including any recorded in the manifest."""
        with self._lock:
            self._checkout_sources.pop(name, None)
            if self.manifest is not None:
                self.manifest.remove(name)
        logger.debug(f"Removed checkout options for {name}")
