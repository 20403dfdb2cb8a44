"""Path helpers shared by the resolver and discovery."""

from __future__ import annotations


def ensure_unix_path(path: str | None) -> str | None:
    """Normalize every path separator to a forward slash.

    Module identifiers are derived from filesystem paths, so they must not
    depend on the separator convention of the host platform.

    Examples:
        >>> ensure_unix_path("@acme/widgets\\\\testing")
        '@acme/widgets/testing'

        >>> ensure_unix_path(None) is None
        True
    """
    if not path:
        return None
    return path.replace("\\", "/")
