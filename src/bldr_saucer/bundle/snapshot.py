"""Capture pattern-matched files from a directory into a bundle.

Patterns are slash-separated globs relative to the root. ``*``, ``?`` and
``[...]`` match within a single path segment and never cross a ``/``. A
pattern that names a directory captures its whole subtree, skipping
entries whose names start with ``.`` or ``_``.
"""

import fnmatch
import logging
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterable, Iterator, Union

from bldr_saucer.bundle.resource_bundle import ResourceBundle
from bldr_saucer.exceptions import EmbedError

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("CMakeLists.txt", "src/*.cpp", "src/*.h")

Root = Union[Path, Traversable]


def _split_pattern(pattern: str) -> list[str]:
    segments = pattern.split("/")
    if (
        not pattern
        or pattern.startswith("/")
        or any(seg in ("", ".", "..") for seg in segments)
    ):
        raise EmbedError(f"Invalid embed pattern: {pattern!r}", pattern=pattern)
    return segments


def _join(prefix: str, name: str) -> str:
    return f"{prefix}/{name}" if prefix else name


def _sorted_children(node: Root) -> list[Root]:
    return sorted(node.iterdir(), key=lambda child: child.name)


def _expand(node: Root, segments: list[str], prefix: str) -> Iterator[tuple[str, Root]]:
    if not segments:
        yield prefix, node
        return
    if not node.is_dir():
        return
    head, rest = segments[0], segments[1:]
    for child in _sorted_children(node):
        if fnmatch.fnmatchcase(child.name, head):
            yield from _expand(child, rest, _join(prefix, child.name))


def _read_tree(node: Root, path: str) -> Iterator[tuple[str, bytes]]:
    if node.is_file():
        yield path, node.read_bytes()
        return
    for child in _sorted_children(node):
        if child.name.startswith((".", "_")):
            continue
        yield from _read_tree(child, _join(path, child.name))


def snapshot(root: Root, patterns: Iterable[str] = DEFAULT_PATTERNS) -> ResourceBundle:
    """Read every file under *root* matching *patterns* into a new bundle.

    Args:
        root: Directory to capture from, either a filesystem path or an
            ``importlib.resources`` traversable.
        patterns: Embed patterns relative to *root*.

    Returns:
        An immutable :class:`ResourceBundle` holding the matched files.

    Raises:
        EmbedError: If a pattern is malformed or matches no files.
    """
    files: dict[str, bytes] = {}
    for pattern in patterns:
        segments = _split_pattern(pattern)
        matched = 0
        for path, node in _expand(root, segments, ""):
            for file_path, data in _read_tree(node, path):
                files[file_path] = data
                matched += 1
        if matched == 0:
            raise EmbedError(f"Pattern {pattern!r} matched no files", pattern=pattern)
        logger.debug("Embed pattern %r matched %d file(s)", pattern, matched)

    return ResourceBundle(files)
