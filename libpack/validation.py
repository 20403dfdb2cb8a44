"""Build-readiness checks for resolved entry points.

The resolver reports missing configuration as None. Before anything is compiled,
the options every build needs are checked here and reported as errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .discovery import LibraryPackage
    from .entry_point import EntryPoint

logger = logging.getLogger(__name__)


class EntryPointConfigError(Exception):
    """Raised when an entry point lacks an option the build cannot do without."""

    def __init__(self, entry_point: EntryPoint, option: str, message: str):
        self.entry_point = entry_point
        self.option = option
        self.message = message
        super().__init__(message)


def _describe(entry_point: EntryPoint) -> str:
    return entry_point.module_id or entry_point.base_path


def check_entry_point(entry_point: EntryPoint) -> EntryPoint:
    """Ensure the entry point can be built.

    Args:
        entry_point: Entry point to check

    Returns:
        The same entry point, for chaining

    Raises:
        EntryPointConfigError: If ``lib.entryFile`` is missing, or the primary
            entry point has no package ``name`` or no ``dest``
    """
    if not entry_point.is_secondary_entry_point:
        if not entry_point.package_json.get("name"):
            raise EntryPointConfigError(
                entry_point,
                "name",
                f"Primary entry point in {entry_point.base_path} has no 'name' in package.json",
            )
        if entry_point.library_destination_path is None:
            raise EntryPointConfigError(
                entry_point,
                "dest",
                f"Primary entry point {_describe(entry_point)} has no 'dest' output directory",
            )

    if not entry_point.entry_file:
        raise EntryPointConfigError(
            entry_point,
            "lib.entryFile",
            f"Entry point {_describe(entry_point)} has no 'lib.entryFile' configured",
        )

    logger.debug(f"Entry point {entry_point.module_id} is ready to build ({entry_point.entry_file_path})")
    return entry_point


def check_package(package: LibraryPackage) -> list[EntryPoint]:
    """Check every entry point of a library, primary first."""
    return [check_entry_point(entry_point) for entry_point in package.entry_points]
