"""Vendoring manifest: external repositories copied into the native build.

The manifest is plain data. Tools that assemble a self-contained build
read it to decide which source trees to copy alongside the embedded
sources; this package never fetches them itself.
"""

import tomllib
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bldr_saucer.exceptions import ManifestError
from bldr_saucer.utils.resources import deps_manifest


class VendorDependency(BaseModel):
    """One repository whose source tree is vendored."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    module: str = Field(min_length=1, description="Repository module path")
    description: str = Field(default="", description="Why the repository is needed")
    vendor_sources: bool = Field(
        default=False,
        description="Whether its C++ sources are compiled into bldr-saucer",
    )


class VendorManifest(BaseModel):
    """Ordered list of vendored repositories."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    dependencies: tuple[VendorDependency, ...] = Field(
        default=(), alias="dependency"
    )

    @field_validator("dependencies")
    @classmethod
    def _unique_modules(
        cls, value: tuple[VendorDependency, ...]
    ) -> tuple[VendorDependency, ...]:
        seen: set[str] = set()
        for dep in value:
            if dep.module in seen:
                raise ValueError(f"duplicate module {dep.module!r}")
            seen.add(dep.module)
        return value

    def modules(self) -> list[str]:
        """Module paths in manifest order."""
        return [dep.module for dep in self.dependencies]

    def vendored_sources(self) -> list[VendorDependency]:
        """Dependencies whose C++ sources are part of the native build."""
        return [dep for dep in self.dependencies if dep.vendor_sources]


def load_manifest(path: Optional[Union[str, Path]] = None) -> VendorManifest:
    """Load and validate a vendoring manifest.

    Args:
        path: TOML file to read. Defaults to the manifest shipped with
            the package.

    Returns:
        The validated manifest.

    Raises:
        ManifestError: If the file is missing, is not valid TOML, or does
            not match the manifest schema.
    """
    if path is None:
        resource = deps_manifest()
        source = str(resource)
        reader = resource.read_bytes
    else:
        source = str(path)
        reader = Path(path).read_bytes

    try:
        data = tomllib.loads(reader().decode("utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read manifest: {e}", source=source) from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(f"Invalid manifest TOML: {e}", source=source) from e

    try:
        return VendorManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest: {e}", source=source) from e
