"""Test cases for CLI command implementations."""

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import typer
from rich.console import Console

from bldr_saucer.binary.builder import InstallOutcome
from bldr_saucer.bundle import ResourceBundle
from bldr_saucer.cli.commands import (
    cat_source,
    extract_sources,
    list_sources,
    run_install,
    show_binary_path,
    show_deps,
)
from bldr_saucer.config import BuilderConfig
from bldr_saucer.exceptions import BinaryNotFoundError, BuildError


@pytest.fixture
def mock_console() -> Console:
    """Create a console that records to memory."""
    return Console(file=io.StringIO(), force_terminal=False, width=200)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def bundle() -> ResourceBundle:
    return ResourceBundle(
        {
            "CMakeLists.txt": b"project(x)\n",
            "src/a.cpp": b"int a;\n",
            "src/a.h": b"extern int a;\n",
        }
    )


@pytest.fixture
def patched_sources(bundle: ResourceBundle):  # type: ignore[no-untyped-def]
    with patch("bldr_saucer.cli.commands.get_sources", return_value=bundle):
        yield bundle


@pytest.mark.usefixtures("patched_sources")
class TestListSources:
    """Test cases for list_sources."""

    def test_recursive(self, mock_console: Console) -> None:
        list_sources(console=mock_console)

        output = _output(mock_console)
        assert "CMakeLists.txt" in output
        assert "src/a.cpp" in output
        assert "7 B" in output

    def test_shallow_marks_directories(self, mock_console: Console) -> None:
        list_sources(shallow=True, console=mock_console)

        output = _output(mock_console)
        assert "src/" in output
        assert "src/a.cpp" not in output

    def test_missing_prefix_exits(self, mock_console: Console) -> None:
        with pytest.raises(typer.Exit) as excinfo:
            list_sources(prefix="include", console=mock_console)

        assert excinfo.value.exit_code == 1
        assert "not a directory" in _output(mock_console)


@pytest.mark.usefixtures("patched_sources")
class TestCatSource:
    """Test cases for cat_source."""

    def test_missing_exits(self, mock_console: Console) -> None:
        with pytest.raises(typer.Exit):
            cat_source("src/b.cpp", console=mock_console)

        assert "not part of the bundle" in _output(mock_console)


@pytest.mark.usefixtures("patched_sources")
class TestExtractSources:
    """Test cases for extract_sources."""

    def test_writes_files(self, mock_console: Console, tmp_path: Path) -> None:
        extract_sources(tmp_path, console=mock_console)

        assert (tmp_path / "src" / "a.h").read_bytes() == b"extern int a;\n"
        assert "Extracted 3 files" in _output(mock_console)

    def test_unwritable_destination_exits(
        self, mock_console: Console, tmp_path: Path
    ) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(typer.Exit):
            extract_sources(blocker, console=mock_console)


class TestRunInstall:
    """Test cases for run_install."""

    @pytest.mark.parametrize(
        "outcome, expected",
        [
            (InstallOutcome.BUILT, "Built bldr-saucer from source"),
            (InstallOutcome.PREBUILT, "Prebuilt bldr-saucer binary"),
            (InstallOutcome.SKIPPED, "Skipped"),
            (InstallOutcome.NOT_REQUESTED, "--from-source"),
        ],
    )
    @patch("bldr_saucer.cli.commands.install")
    def test_outcomes(
        self,
        mock_install: MagicMock,
        outcome: InstallOutcome,
        expected: str,
        mock_console: Console,
    ) -> None:
        mock_install.return_value = outcome
        config = BuilderConfig()

        run_install(config, console=mock_console)

        mock_install.assert_called_once_with(config)
        assert expected in _output(mock_console)

    @patch(
        "bldr_saucer.cli.commands.install",
        side_effect=BuildError("cmake is required but not found", step="tools"),
    )
    def test_build_error_exits(
        self, _mock_install: MagicMock, mock_console: Console
    ) -> None:
        with pytest.raises(typer.Exit) as excinfo:
            run_install(BuilderConfig(), console=mock_console)

        assert excinfo.value.exit_code == 1
        assert "cmake is required" in _output(mock_console)


class TestShowBinaryPath:
    """Test cases for show_binary_path."""

    @patch("bldr_saucer.cli.commands.get_binary_path")
    def test_prints_path(
        self,
        mock_get: MagicMock,
        mock_console: Console,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_get.return_value = Path("/opt/bldr-saucer")

        show_binary_path(BuilderConfig(), console=mock_console)

        assert capsys.readouterr().out.strip() == str(Path("/opt/bldr-saucer"))

    @patch(
        "bldr_saucer.cli.commands.get_binary_path",
        side_effect=BinaryNotFoundError("no binary for linux-x64", platform="linux-x64"),
    )
    def test_missing_binary_exits(
        self, _mock_get: MagicMock, mock_console: Console
    ) -> None:
        with pytest.raises(typer.Exit):
            show_binary_path(BuilderConfig(), console=mock_console)

        assert "no binary for linux-x64" in _output(mock_console)


class TestShowDeps:
    """Test cases for show_deps."""

    def test_packaged_manifest(self, mock_console: Console) -> None:
        show_deps(console=mock_console)

        output = _output(mock_console)
        assert "github.com/aperturerobotics/saucer" in output
        assert "yes" in output

    def test_bad_manifest_exits(self, mock_console: Console, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit):
            show_deps(manifest=tmp_path / "missing.toml", console=mock_console)

        assert "Cannot read manifest" in _output(mock_console)
