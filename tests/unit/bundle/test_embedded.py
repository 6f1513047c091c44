"""Tests for bldr_saucer.bundle.embedded module."""

import threading
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

import bldr_saucer
from bldr_saucer.bundle import embedded
from bldr_saucer.bundle.embedded import EMBED_PATTERNS, get_sources
from bldr_saucer.exceptions import NotFoundError

SOURCES_DIR = Path(bldr_saucer.__file__).resolve().parent / "sources"


@pytest.fixture
def fresh_cache() -> Generator[None, None, None]:
    """Drop the process-wide bundle so get_sources() rebuilds it."""
    saved = embedded._SOURCES
    embedded._SOURCES = None
    yield
    embedded._SOURCES = saved


class TestShippedSources:
    """The bundle built from package data."""

    def test_exact_file_set(self) -> None:
        expected = {"CMakeLists.txt"}
        for suffix in ("*.cpp", "*.h"):
            expected |= {
                f"src/{p.name}" for p in (SOURCES_DIR / "src").glob(suffix)
            }

        assert set(get_sources().paths) == expected
        assert [path for path, _ in get_sources().list("")] == sorted(expected)

    def test_known_sources_present(self) -> None:
        sources = get_sources()

        for path in (
            "CMakeLists.txt",
            "src/main.cpp",
            "src/fetch_proto.cpp",
            "src/fetch_proto.h",
            "src/pipe_client.cpp",
            "src/pipe_client.h",
            "src/pipe_connection.h",
            "src/scheme_forwarder.cpp",
            "src/scheme_forwarder.h",
        ):
            assert path in sources

    def test_contents_match_package_data(self) -> None:
        sources = get_sources()

        for path in sources.paths:
            assert sources.read_all(path) == (SOURCES_DIR / path).read_bytes()

    def test_build_configuration_builds_the_sources(self) -> None:
        cmake = get_sources().read_all("CMakeLists.txt").decode("utf-8")

        assert "project(bldr-saucer" in cmake
        assert "src/*.cpp" in cmake

    def test_missing_source(self) -> None:
        with pytest.raises(NotFoundError):
            get_sources().open("src/missing.cpp")

    def test_patterns(self) -> None:
        assert EMBED_PATTERNS == ("CMakeLists.txt", "src/*.cpp", "src/*.h")


class TestGetSourcesCaching:
    """get_sources() builds the bundle once per process."""

    def test_same_instance_returned(self) -> None:
        assert get_sources() is get_sources()

    @pytest.mark.usefixtures("fresh_cache")
    def test_snapshot_called_once(self) -> None:
        sentinel = MagicMock()
        with patch(
            "bldr_saucer.bundle.embedded.snapshot", return_value=sentinel
        ) as mock_snapshot:
            assert get_sources() is sentinel
            assert get_sources() is sentinel

        mock_snapshot.assert_called_once()
        assert mock_snapshot.call_args[0][1] == EMBED_PATTERNS

    @pytest.mark.usefixtures("fresh_cache")
    def test_concurrent_first_use_builds_once(self) -> None:
        results = []
        barrier = threading.Barrier(6)

        def worker() -> None:
            barrier.wait()
            results.append(get_sources())

        with patch(
            "bldr_saucer.bundle.embedded.snapshot", side_effect=lambda *a: object()
        ) as mock_snapshot:
            threads = [threading.Thread(target=worker) for _ in range(6)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert mock_snapshot.call_count == 1
        assert len({id(result) for result in results}) == 1
