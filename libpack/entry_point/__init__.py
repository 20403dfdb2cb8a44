"""Entry point resolution: paths and module identifiers for one publishable entry point."""

from .entry_point import DestinationFiles
from .entry_point import EntryPoint
from .schema import CssUrl
from .schema import LibOptions
from .schema import NgPackageConfig

__all__ = [
    "CssUrl",
    "DestinationFiles",
    "EntryPoint",
    "LibOptions",
    "NgPackageConfig",
]
