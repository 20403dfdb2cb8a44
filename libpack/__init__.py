"""libpack - entry point paths and module identifiers for multi-entry-point libraries."""

from .discovery import LibraryPackage
from .discovery import PackageDiscoveryError
from .discovery import discover_package
from .entry_point import CssUrl
from .entry_point import DestinationFiles
from .entry_point import EntryPoint
from .entry_point import NgPackageConfig
from .validation import EntryPointConfigError
from .validation import check_entry_point
from .validation import check_package

__version__ = "0.1.0"

__all__ = [
    "CssUrl",
    "DestinationFiles",
    "EntryPoint",
    "EntryPointConfigError",
    "LibraryPackage",
    "NgPackageConfig",
    "PackageDiscoveryError",
    "check_entry_point",
    "check_package",
    "discover_package",
]
