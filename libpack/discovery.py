"""Library discovery - builds the entry point tree from files on disk.

A library is a directory with a ``package.json``. Its packaging configuration is
read from ``ng-package.json`` next to it or, failing that, from the ``ngPackage``
key of ``package.json``. Every subdirectory carrying its own configuration in the
same way is a secondary entry point of that library.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .entry_point import EntryPoint
from .entry_point import NgPackageConfig

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
NG_PACKAGE_JSON = "ng-package.json"

# Applied by the loader for absent keys only; the resolver itself has no defaults
DEFAULT_CONFIG: dict[str, Any] = {
    "dest": "dist",
    "lib": {
        "entryFile": "src/public_api.ts",
        "cssUrl": "inline",
    },
}

SKIPPED_DIRECTORIES = frozenset({"node_modules"})


class PackageDiscoveryError(Exception):
    """Raised when a library's manifest or packaging configuration cannot be read."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


@dataclass
class LibraryPackage:
    """A library with its primary and secondary entry points.

    Attributes:
        base_path: Directory of the primary ``package.json``
        primary: The primary entry point
        secondaries: Secondary entry points in discovery order
    """

    base_path: Path
    primary: EntryPoint
    secondaries: list[EntryPoint] = field(default_factory=list)

    @property
    def dest(self) -> str | None:
        return self.primary.library_destination_path

    @property
    def entry_points(self) -> list[EntryPoint]:
        return [self.primary, *self.secondaries]

    def find(self, module_id: str) -> EntryPoint | None:
        """Return the entry point published under ``module_id``, if any."""
        return next((ep for ep in self.entry_points if ep.module_id == module_id), None)


def apply_defaults(config: dict[str, Any], defaults: dict[str, Any] | None = None) -> dict[str, Any]:
    """Fill keys missing from ``config`` with ``defaults``, recursing into sections."""
    result = copy.deepcopy(defaults if defaults is not None else DEFAULT_CONFIG)
    for key, value in config.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = apply_defaults(value, result[key])
        else:
            result[key] = value
    return result


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PackageDiscoveryError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    except OSError as e:
        raise PackageDiscoveryError(path, f"cannot read file ({e.strerror or e})") from e

    if not isinstance(data, dict):
        raise PackageDiscoveryError(path, "expected a JSON object")
    return data


def _read_config(directory: Path, package_json: dict[str, Any]) -> tuple[dict[str, Any], Path] | None:
    """Return the raw packaging configuration of ``directory`` and the file it came from."""
    ng_package_file = directory / NG_PACKAGE_JSON
    if ng_package_file.is_file():
        config = _read_json(ng_package_file)
        config.pop("$schema", None)
        return config, ng_package_file

    config = package_json.get("ngPackage")
    if config is None:
        return None
    if not isinstance(config, dict):
        raise PackageDiscoveryError(directory / PACKAGE_JSON, "'ngPackage' must be an object")
    return config, directory / PACKAGE_JSON


def _validate_config(config: dict[str, Any], source: Path) -> NgPackageConfig:
    try:
        return NgPackageConfig.model_validate(apply_defaults(config))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise PackageDiscoveryError(source, f"invalid packaging configuration ({problems})") from e


def _load_entry_point(directory: Path, parent: EntryPoint | None = None) -> EntryPoint | None:
    package_file = directory / PACKAGE_JSON
    package_json = _read_json(package_file) if package_file.is_file() else {}

    found = _read_config(directory, package_json)
    if found is None:
        return None
    config, source = found

    entry_point = EntryPoint(package_json, _validate_config(config, source), str(directory), parent)
    logger.debug(f"Found {'secondary' if parent else 'primary'} entry point in {directory} (config: {source.name})")
    return entry_point


def _iter_candidate_directories(root: Path, excluded: set[Path]) -> Iterator[Path]:
    try:
        children = sorted(root.iterdir())
    except OSError as e:
        raise PackageDiscoveryError(root, f"cannot read directory ({e.strerror or e})") from e

    for child in children:
        if not child.is_dir() or child.is_symlink():
            continue
        if child.name in SKIPPED_DIRECTORIES or child.name.startswith("."):
            continue
        if child.resolve() in excluded:
            continue
        yield child
        yield from _iter_candidate_directories(child, excluded)


def discover_secondaries(primary: EntryPoint) -> list[EntryPoint]:
    """Find every secondary entry point below the primary entry point's directory.

    All secondary entry points take the primary as their parent, so their module
    IDs and output directories follow their location relative to the library root.
    """
    root = Path(primary.base_path)
    excluded: set[Path] = set()
    if primary.library_destination_path is not None:
        excluded.add(Path(primary.library_destination_path).resolve())

    secondaries = []
    for directory in _iter_candidate_directories(root, excluded):
        has_config = (directory / NG_PACKAGE_JSON).is_file() or (directory / PACKAGE_JSON).is_file()
        if not has_config:
            continue
        entry_point = _load_entry_point(directory, parent=primary)
        if entry_point is not None:
            secondaries.append(entry_point)
    return secondaries


def discover_package(project: Path | str) -> LibraryPackage:
    """Load a library and its entry points.

    Args:
        project: Library directory, or the path of its ``package.json`` or ``ng-package.json``

    Returns:
        LibraryPackage with primary and secondary entry points

    Raises:
        PackageDiscoveryError: If the directory is not a library or a config file is invalid
    """
    project_path = Path(project).expanduser().resolve()
    base_path = project_path.parent if project_path.is_file() else project_path

    if not base_path.is_dir():
        raise PackageDiscoveryError(base_path, "library directory does not exist")

    primary = _load_entry_point(base_path)
    if primary is None:
        raise PackageDiscoveryError(
            base_path, f"no packaging configuration found (expected {NG_PACKAGE_JSON} or 'ngPackage' in {PACKAGE_JSON})"
        )

    secondaries = discover_secondaries(primary)
    logger.info(f"Discovered library {primary.module_id} with {len(secondaries)} secondary entry point(s)")
    return LibraryPackage(base_path=base_path, primary=primary, secondaries=secondaries)
