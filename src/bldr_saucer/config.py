"""Configuration system for locating and building the bldr-saucer binary.

This module provides hierarchical configuration management with the following
priority order (highest to lowest):
1. Runtime Parameters (passed directly to functions)
2. Environment Variables (prefixed with BLDR_SAUCER_)
3. Project Config ([tool.bldr-saucer] in pyproject.toml)
4. Defaults (hardcoded fallbacks)
"""

import os
import shlex
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from bldr_saucer.exceptions import ConfigError

DEFAULT_WORK_DIR = Path.home() / ".bldr-saucer"

_TRUE_VALUES = ("true", "1", "yes", "on")


class BuilderConfig(BaseModel):
    """Configuration model for binary resolution and source builds."""

    from_source: bool = Field(
        default=False,
        description="Always use (and, on install, build) the source-built binary",
    )

    skip_binary: bool = Field(
        default=False,
        description="Skip binary installation entirely",
    )

    work_dir: Path = Field(
        default=DEFAULT_WORK_DIR,
        description="Directory receiving the extracted sources and the CMake build tree",
    )

    generator: str = Field(
        default="Ninja",
        min_length=1,
        description="CMake generator used for source builds",
    )

    vendor_dir: Optional[Path] = Field(
        default=None,
        description=(
            "Directory holding the vendored saucer and cpp-yamux trees "
            "(default: <work_dir>/vendor)"
        ),
    )

    cmake_args: list[str] = Field(
        default_factory=list,
        description="Extra arguments appended to the CMake configure step",
    )

    verbose: bool = Field(
        default=False,
        description="Enable detailed logging of build steps",
    )

    model_config = {
        "extra": "forbid",
    }

    @property
    def source_dir(self) -> Path:
        """Where the embedded sources are extracted for a build."""
        return self.work_dir / "source"

    @property
    def build_dir(self) -> Path:
        """CMake binary directory."""
        return self.work_dir / "build"

    @property
    def vendor_root(self) -> Path:
        """Vendored dependency trees; kept outside :attr:`source_dir`."""
        if self.vendor_dir is not None:
            return self.vendor_dir
        return self.work_dir / "vendor"


def _load_from_pyproject_toml() -> dict[str, Any]:
    """Load configuration from [tool.bldr-saucer] section in pyproject.toml.

    Returns:
        Dictionary with config values, or empty dict if not found.
    """
    current_dir = Path.cwd()
    for path in [current_dir] + list(current_dir.parents):
        pyproject_path = path / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            section = data.get("tool", {}).get("bldr-saucer")
            if section is not None:
                result: dict[str, Any] = {
                    key.replace("-", "_"): value for key, value in section.items()
                }
                for key in ("work_dir", "vendor_dir"):
                    if isinstance(result.get(key), str):
                        result[key] = Path(result[key]).expanduser()
                return result

    return {}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables (prefixed with BLDR_SAUCER_).

    Returns:
        Dictionary with config values from environment.
    """
    config: dict[str, Any] = {}

    env_mapping = {
        "BLDR_SAUCER_FROM_SOURCE": "from_source",
        "BLDR_SAUCER_SKIP_BINARY": "skip_binary",
        "BLDR_SAUCER_WORK_DIR": "work_dir",
        "BLDR_SAUCER_GENERATOR": "generator",
        "BLDR_SAUCER_VENDOR_DIR": "vendor_dir",
        "BLDR_SAUCER_CMAKE_ARGS": "cmake_args",
        "BLDR_SAUCER_VERBOSE": "verbose",
    }

    for env_var, config_key in env_mapping.items():
        value = os.getenv(env_var)
        if value is None:
            continue
        if config_key in ("from_source", "skip_binary", "verbose"):
            config[config_key] = value.lower() in _TRUE_VALUES
        elif config_key == "cmake_args":
            config[config_key] = shlex.split(value)
        elif config_key in ("work_dir", "vendor_dir"):
            config[config_key] = Path(value).expanduser()
        else:
            config[config_key] = value

    return config


def load_config(
    from_source: Optional[bool] = None,
    skip_binary: Optional[bool] = None,
    work_dir: Optional[Path] = None,
    verbose: Optional[bool] = None,
    **kwargs: Any,
) -> BuilderConfig:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. Runtime Parameters (passed to this function)
    2. Environment Variables (BLDR_SAUCER_*)
    3. Project Config ([tool.bldr-saucer] in pyproject.toml)
    4. Defaults (hardcoded in BuilderConfig)

    Args:
        from_source: Force the source-built binary.
        skip_binary: Skip installation.
        work_dir: Extraction and build directory.
        verbose: Enable detailed logging.
        **kwargs: Additional configuration parameters.

    Returns:
        BuilderConfig instance with merged configuration.

    Raises:
        ConfigError: If a merged value fails validation.
    """
    default_config = BuilderConfig()
    file_config = _load_from_pyproject_toml()
    env_config = _load_from_env()

    runtime_config: dict[str, Any] = {}
    if from_source is not None:
        runtime_config["from_source"] = from_source
    if skip_binary is not None:
        runtime_config["skip_binary"] = skip_binary
    if work_dir is not None:
        runtime_config["work_dir"] = work_dir
    if verbose is not None:
        runtime_config["verbose"] = verbose
    runtime_config.update(kwargs)

    merged_config = default_config.model_dump()
    merged_config.update(file_config)
    merged_config.update(env_config)
    merged_config.update(runtime_config)

    try:
        return BuilderConfig(**merged_config)
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        details = "; ".join(
            f"{field}: {err['msg']}" for field, err in zip(fields, e.errors())
        )
        raise ConfigError(f"Invalid configuration: {details}", fields=fields) from e
