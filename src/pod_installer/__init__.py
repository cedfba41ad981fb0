"""pod-installer - Source installation controller for a single pod.

Public API exports.

Library mechanism only: apps inject the sandbox, the downloader and the other
collaborators (see protocols).
"""

from .exceptions import DownloadError
from .exceptions import FetchError
from .exceptions import InvalidSpecificationsError
from .exceptions import PodInstallerError
from .exceptions import SandboxError
from .exceptions import SourcePreparationError
from .file_accessor import GlobFileAccessor
from .installer import PodSourceInstaller
from .manifest import CheckoutEntry
from .manifest import CheckoutManifest
from .podfile import Dependency
from .podfile import Podfile
from .protocols import DownloaderProtocol
from .protocols import FileAccessorProtocol
from .protocols import PodDirCleanerProtocol
from .protocols import SourcePreparerProtocol
from .request import DownloadRequest
from .request import DownloadResult
from .sandbox import Sandbox
from .schema import InstallerOptions
from .schema import Specification
from .security import verify_source_is_secure

__all__ = [
    # Installation
    "PodSourceInstaller",
    "InstallerOptions",
    # Inputs
    "Specification",
    "Dependency",
    "Podfile",
    # Sandbox
    "Sandbox",
    "CheckoutManifest",
    "CheckoutEntry",
    # Downloading
    "DownloadRequest",
    "DownloadResult",
    "verify_source_is_secure",
    # Collaborator protocols
    "DownloaderProtocol",
    "SourcePreparerProtocol",
    "PodDirCleanerProtocol",
    "FileAccessorProtocol",
    "GlobFileAccessor",
    # Exceptions
    "PodInstallerError",
    "FetchError",
    "DownloadError",
    "SourcePreparationError",
    "InvalidSpecificationsError",
    "SandboxError",
]

__version__ = "0.1.0"
