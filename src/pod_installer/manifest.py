"""Checkout manifest - exact checkout coordinates per pod.

Records what the downloader actually fetched (e.g. the commit a floating branch
resolved to) so later installs reproduce it. Apps inject the manifest path.
"""

import json
import logging
from dataclasses import asdict
from dataclasses import dataclass
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .exceptions import SandboxError
from .schema import SourceOptions

logger = logging.getLogger(__name__)


@dataclass
class CheckoutEntry:
    """Entry in the checkout manifest."""

    name: str
    checkout_options: SourceOptions
    recorded_at: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "CheckoutEntry":
        """Create from dictionary."""
        return cls(**data)


class CheckoutManifest:
    """
    Checkout manifest manager (with injected path).

    Manifest format (JSON):
    {
      "version": "1.0",
      "pods": {
        "AFNetworking": {
          "name": "AFNetworking",
          "checkout_options": {"git": "https://github.com/AFNetworking/AFNetworking.git", "commit": "abc123..."},
          "recorded_at": "2026-10-17T12:00:00+00:00"
        }
      }
    }
    """

    VERSION = "1.0"

    def __init__(self, manifest_path: Path):
        """Initialize manifest manager with app-provided path.

        Args:
            manifest_path: Path to manifest file (app determines location)
        """
        self.manifest_path = manifest_path
        self._data: dict[str, CheckoutEntry] = {}
        self._load()

    def _load(self) -> None:
        """Load manifest file if it exists.

        Raises:
            SandboxError: If the file exists but cannot be read
        """
        if not self.manifest_path.exists():
            self._data = {}
            return

        try:
            with open(self.manifest_path) as f:
                data = json.load(f)

            if data.get("version") != self.VERSION:
                logger.warning(
                    f"Checkout manifest version mismatch: expected {self.VERSION}, got {data.get('version')}"
                )

            pods = data.get("pods", {})
            self._data = {name: CheckoutEntry.from_dict(entry) for name, entry in pods.items()}

            logger.debug(f"Loaded checkout options for {len(self._data)} pods")

        except (OSError, ValueError, TypeError, AttributeError) as e:
            # Leave the file alone; saving now would drop every recorded pod
            raise SandboxError(
                f"Failed to load checkout manifest {self.manifest_path}: {e}",
                context={"path": str(self.manifest_path)},
            ) from e

    def _save(self) -> None:
        """Save manifest file."""
        self.manifest_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": self.VERSION,
            "pods": {name: entry.to_dict() for name, entry in self._data.items()},
        }

        with open(self.manifest_path, "w") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        logger.debug(f"Saved checkout manifest with {len(self._data)} pods")

    def record(self, name: str, checkout_options: SourceOptions) -> None:
        """
        Add or update the checkout options of a pod.

        Args:
            name: Pod name
            checkout_options: Exact coordinates fetched
        """
        self._data[name] = CheckoutEntry(
            name=name,
            checkout_options=dict(checkout_options),
            recorded_at=datetime.now(UTC).isoformat(),
        )
        self._save()

    def remove(self, name: str) -> None:
        """Remove a pod from the manifest."""
        if name in self._data:
            del self._data[name]
            self._save()

    def get_entry(self, name: str) -> CheckoutEntry | None:
        return self._data.get(name)

    def checkout_options(self) -> dict[str, SourceOptions]:
        """Checkout options of every recorded pod, keyed by name."""
        return {name: dict(entry.checkout_options) for name, entry in self._data.items()}
