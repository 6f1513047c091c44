"""Error messages users see."""

from pathlib import Path
from unittest.mock import patch

import pytest

import bldr_saucer
from bldr_saucer.exceptions import BinaryNotFoundError, EmbedError, NotFoundError


def test_error_missing_embedded_path() -> None:
    """Requesting an unknown file names the path."""
    with pytest.raises(NotFoundError) as excinfo:
        bldr_saucer.get_sources().read_all("src/nope.cpp")

    assert "src/nope.cpp" in str(excinfo.value)


def test_error_path_escape_is_not_found() -> None:
    """Escaping the bundle root is reported like any missing file."""
    with pytest.raises(NotFoundError, match="Invalid bundle path"):
        bldr_saucer.get_sources().open("../setup.py")


def test_error_empty_pattern_names_pattern(tmp_path: Path) -> None:
    (tmp_path / "CMakeLists.txt").write_text("project(x)\n")

    with pytest.raises(EmbedError) as excinfo:
        bldr_saucer.snapshot(tmp_path)

    assert "src/*.cpp" in str(excinfo.value)


def test_error_no_binary_suggests_source_build(tmp_path: Path) -> None:
    config = bldr_saucer.BuilderConfig(work_dir=tmp_path)

    with patch("bldr_saucer.binary.locator.get_platform_binary_path", return_value=None):
        with pytest.raises(BinaryNotFoundError) as excinfo:
            bldr_saucer.get_binary_path(config)

    assert "BLDR_SAUCER_FROM_SOURCE=true" in str(excinfo.value)
