"""Pydantic schemas for library packaging configuration (``ng-package.json``)."""

from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class CssUrl(str, Enum):
    """How ``url()`` references in component stylesheets are handled."""

    INLINE = "inline"
    NONE = "none"


class LibOptions(BaseModel):
    """Options of the ``lib`` section."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    entry_file: str | None = Field(None, alias="entryFile", description="Entry source file, relative to the base path")
    flat_module_file: str | None = Field(
        None, alias="flatModuleFile", description="File name stem for bundles and declarations"
    )
    umd_id: str | None = Field(None, alias="umdId", description="Global scope path registered by UMD bundles")
    amd_id: str | None = Field(None, alias="amdId", description="Named AMD module ID")
    umd_module_ids: dict[str, str] | None = Field(
        None, alias="umdModuleIds", description="External module name to UMD global name"
    )
    css_url: CssUrl | None = Field(None, alias="cssUrl", description="Stylesheet url() handling mode")
    style_include_paths: list[str] | None = Field(
        None, alias="styleIncludePaths", description="Additional stylesheet include paths"
    )


class NgPackageConfig(BaseModel):
    """Complete library configuration of one entry point."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    dest: str | None = Field(None, description="Library output directory, relative to the primary base path")
    lib: LibOptions | None = Field(None, description="Entry point options")
