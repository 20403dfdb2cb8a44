"""Entry point resolver - paths and module identifiers of one entry point.

An entry point is a module intended to be imported by consumers of the library.
It is referenced by a unique module ID (e.g. ``@acme/widgets`` or
``@acme/widgets/testing``) and exports the public API behind that ID. A library
has exactly one primary entry point and any number of secondary entry points
living in subdirectories of it.

Everything here is derived on demand from the manifest, the library
configuration, the base path and the parent entry point. Nothing is cached, so
repeated reads always agree with the current inputs. Missing configuration is
never an error at this layer: lookups that cannot be satisfied return ``None``
and it is up to the build pipeline (see ``libpack.validation``) to decide which
absent values are fatal.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import asdict
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ..utils.path import ensure_unix_path
from .schema import CssUrl
from .schema import NgPackageConfig

_MISSING = object()


@dataclass(frozen=True)
class DestinationFiles:
    """Absolute output paths of one entry point's build artifacts.

    Attributes:
        declarations: Type declarations (``.d.ts``)
        metadata: Compiler metadata (``.metadata.json``)
        fesm2015: Flat ES2015 module bundle
        esm2015: Per-module ES2015 output entry
        umd: UMD bundle
        umd_minified: Minified UMD bundle
    """

    declarations: str
    metadata: str
    fesm2015: str
    esm2015: str
    umd: str
    umd_minified: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _lookup_segment(value: Any, segment: str) -> Any:
    """Descend one segment into a config model or mapping."""
    if isinstance(value, BaseModel):
        for name, field in type(value).model_fields.items():
            if segment == name or segment == field.alias:
                return getattr(value, name)
        extra = value.model_extra or {}
        return extra.get(segment, _MISSING)
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)
    return _MISSING


class EntryPoint:
    """Resolves the location and identifiers of a primary or secondary entry point."""

    def __init__(
        self,
        package_json: Mapping[str, Any],
        ng_package_json: NgPackageConfig | Mapping[str, Any],
        base_path: str,
        parent: EntryPoint | None = None,
    ):
        """
        Args:
            package_json: Values from the ``package.json`` of this entry point.
            ng_package_json: Library configuration, either validated or as a raw mapping.
            base_path: Absolute directory of this entry point's ``package.json``.
            parent: The parent entry point, if this is a secondary entry point.
        """
        self._package_json = package_json
        self._ng_package_json = ng_package_json
        self._base_path = base_path
        self._parent = parent

    def __repr__(self) -> str:
        return f"EntryPoint(module_id={self.module_id!r}, base_path={self._base_path!r})"

    @property
    def package_json(self) -> Mapping[str, Any]:
        return self._package_json

    @property
    def ng_package_json(self) -> NgPackageConfig | Mapping[str, Any]:
        return self._ng_package_json

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def parent(self) -> EntryPoint | None:
        return self._parent

    # ===== CONFIGURATION LOOKUP =====

    def get(self, key: str) -> Any:
        """Look up a dotted option such as ``lib.entryFile``.

        Segments match either the configuration key or the Python field name.
        Returns None as soon as a segment is absent or the value reached so far
        is not a mapping.
        """
        value: Any = self._ng_package_json
        for segment in key.split("."):
            if value is None:
                return None
            value = _lookup_segment(value, segment)
            if value is _MISSING:
                return None
        return value

    def _get_or_default(self, key: str, default: Callable[[], Any]) -> Any:
        # Empty overrides count as unset
        return self.get(key) or default()

    # ===== PATHS =====

    @property
    def entry_file(self) -> str | None:
        return self.get("lib.entryFile")

    @property
    def entry_file_path(self) -> str | None:
        """Absolute file path of the entry point's source entry file."""
        entry_file = self.entry_file
        if entry_file is None:
            return None
        return os.path.abspath(os.path.join(self._base_path, entry_file))

    @property
    def is_secondary_entry_point(self) -> bool:
        return self._parent is not None

    @property
    def source_relative_path(self) -> str:
        """Source directory of this entry point relative to its parent's."""
        if self._parent is None:
            return ""
        relative = os.path.relpath(self._base_path, self._parent.base_path)
        return "" if relative == os.curdir else relative

    @property
    def library_destination_path(self) -> str | None:
        """Absolute library output directory, shared by every entry point of the tree.

        Only the primary entry point's ``dest`` is honored.
        """
        if self._parent is not None:
            return self._parent.library_destination_path
        dest = self.get("dest")
        if dest is None:
            return None
        return os.path.abspath(os.path.join(self._base_path, dest))

    @property
    def destination_path(self) -> str | None:
        """Absolute output directory of this entry point's ``package.json``, declarations and metadata."""
        library_dest = self.library_destination_path
        if self._parent is None or library_dest is None:
            return library_dest
        return os.path.normpath(os.path.join(library_dest, self.source_relative_path))

    @property
    def destination_files(self) -> DestinationFiles | None:
        library_dest = self.library_destination_path
        entry_point_dest = self.destination_path
        module_file_name = self.flat_module_file
        if library_dest is None or entry_point_dest is None or module_file_name is None:
            return None

        def _join(*parts: str) -> str:
            return os.path.normpath(os.path.join(*parts))

        return DestinationFiles(
            metadata=_join(entry_point_dest, f"{module_file_name}.metadata.json"),
            declarations=_join(entry_point_dest, f"{module_file_name}.d.ts"),
            esm2015=_join(library_dest, "esm2015", self.source_relative_path, f"{module_file_name}.js"),
            fesm2015=_join(library_dest, "fesm2015", f"{module_file_name}.js"),
            umd=_join(library_dest, "bundles", f"{module_file_name}.umd.js"),
            umd_minified=_join(library_dest, "bundles", f"{module_file_name}.umd.min.js"),
        )

    # ===== IDENTIFIERS =====

    @property
    def module_id(self) -> str | None:
        """Identifier used in import statements, e.g. ``@acme/widgets/testing``.

        Secondary entry points compose their ID from the parent's, so the ID of a
        nested entry point follows its directory relative to the primary.
        """
        if self._parent is None:
            return self._package_json.get("name")
        parent_id = self._parent.module_id
        if parent_id is None:
            return None
        return ensure_unix_path(f"{parent_id}/{self.source_relative_path}")

    def flatten_module_id(self, separator: str = ".") -> str | None:
        """Module ID without scope marker, segments joined by ``separator``.

        Example: ``@acme/widgets/testing`` flattens to ``acme.widgets.testing``.
        """
        module_id = self.module_id
        if module_id is None:
            return None
        if module_id.startswith("@"):
            module_id = module_id[1:]
        return separator.join(module_id.split("/"))

    @property
    def flat_module_file(self) -> str | None:
        return self._get_or_default("lib.flatModuleFile", lambda: self.flatten_module_id("-"))

    @property
    def umd_id(self) -> str | None:
        """Global scope path a UMD bundle registers under.

        ``@acme/widgets/testing`` registers as ``global['acme']['widgets']['testing']``.
        """
        return self._get_or_default("lib.umdId", self.flatten_module_id)

    @property
    def amd_id(self) -> str | None:
        """Named module ID for AMD loaders, distributed in the UMD bundles."""
        return self._get_or_default("lib.amdId", lambda: self.module_id)

    # ===== BUILD DIRECTIVES =====

    @property
    def css_url(self) -> CssUrl | str | None:
        return self.get("lib.cssUrl")

    @property
    def umd_module_ids(self) -> dict[str, str] | None:
        return self.get("lib.umdModuleIds")

    @property
    def style_include_paths(self) -> list[str]:
        include_paths = self.get("lib.styleIncludePaths") or []
        return [
            path if os.path.isabs(path) else os.path.abspath(os.path.join(self._base_path, path))
            for path in include_paths
        ]

    @property
    def side_effects(self) -> bool | list[str]:
        """Value of the ``sideEffects`` flag published in ``package.json``.

        Defaults to False so consuming bundlers can tree-shake the library. An
        explicit value from the manifest, including an empty list, is kept as-is.
        """
        side_effects = self._package_json.get("sideEffects")
        if side_effects is None:
            return False
        return side_effects
