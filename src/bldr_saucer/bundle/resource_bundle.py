"""Immutable, path-keyed bundle of embedded files.

A :class:`ResourceBundle` maps slash-separated relative paths to the bytes
captured when the bundle was created. Nothing can be added, removed or
rewritten afterwards, so a bundle may be shared freely between threads.
"""

from __future__ import annotations

import io
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field

from bldr_saucer.exceptions import NotFoundError

ROOT = "."


class EntryInfo(BaseModel):
    """Metadata for a single bundle entry.

    Embedded entries carry no modification time; directories report a
    size of zero.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(description="Slash-separated path relative to the bundle root")
    name: str = Field(description="Final path segment")
    size: int = Field(default=0, ge=0, description="Content length in bytes")
    is_dir: bool = Field(default=False, description="Whether the entry is a directory")


def clean_path(path: str, allow_dir_slash: bool = False) -> str:
    """Validate *path* and return it in canonical form.

    Accepted paths are unrooted and slash-separated, without empty, ``.``
    or ``..`` segments. The empty string and ``"."`` both name the root.
    With *allow_dir_slash* a single trailing slash is tolerated; it only
    makes sense for directory prefixes.

    Raises:
        NotFoundError: If *path* is malformed.
    """
    if path in ("", ROOT):
        return ROOT
    candidate = path
    if allow_dir_slash and path.endswith("/"):
        candidate = path[:-1]
    segments = candidate.split("/")
    if path.startswith("/") or any(seg in ("", ".", "..") for seg in segments):
        raise NotFoundError(f"Invalid bundle path: {path!r}", path=path)
    return candidate


def _parent(path: str) -> str:
    head, sep, _ = path.rpartition("/")
    return head if sep else ROOT


def _name(path: str) -> str:
    return path.rpartition("/")[2]


class BundleListing:
    """Lazy, restartable view over the entries below a directory.

    Each call to ``iter()`` starts a fresh pass, so a listing can be
    consumed any number of times.
    """

    def __init__(self, bundle: ResourceBundle, prefix: str, recursive: bool) -> None:
        self._bundle = bundle
        self._prefix = prefix
        self._recursive = recursive

    def __iter__(self) -> Iterator[tuple[str, EntryInfo]]:
        if self._recursive:
            return self._walk()
        return self._children()

    def _walk(self) -> Iterator[tuple[str, EntryInfo]]:
        for path in self._bundle.paths:
            if self._prefix == ROOT or path.startswith(self._prefix + "/"):
                yield path, self._bundle.stat(path)

    def _children(self) -> Iterator[tuple[str, EntryInfo]]:
        for path in self._bundle._dirs[self._prefix]:
            yield path, self._bundle.stat(path)

    def __repr__(self) -> str:
        return (
            f"BundleListing(prefix={self._prefix!r}, recursive={self._recursive})"
        )


class ResourceBundle:
    """Read-only in-memory filesystem over a fixed set of files.

    Example::

        bundle = ResourceBundle({"CMakeLists.txt": b"...", "src/foo.cpp": b"..."})
        bundle.read_all("src/foo.cpp")
        [path for path, _ in bundle.list("src")]

    Args:
        files: Mapping of relative path to file contents. Paths must pass
            :func:`clean_path` and must not collide with a directory
            implied by another path.

    Raises:
        ValueError: If a path is malformed or names both a file and a
            directory.
    """

    def __init__(self, files: Mapping[str, bytes]) -> None:
        contents: dict[str, bytes] = {}
        for raw_path, data in files.items():
            try:
                path = clean_path(raw_path)
            except NotFoundError as e:
                raise ValueError(str(e)) from e
            if path == ROOT:
                raise ValueError("A bundle file cannot be stored at the root path")
            contents[path] = bytes(data)

        dirs: dict[str, set[str]] = {ROOT: set()}
        for path in contents:
            child = path
            parent = _parent(child)
            while True:
                dirs.setdefault(parent, set()).add(child)
                if parent == ROOT:
                    break
                child, parent = parent, _parent(parent)

        clashes = sorted(set(contents) & set(dirs))
        if clashes:
            raise ValueError(f"Paths used as both file and directory: {clashes}")

        self._files: Mapping[str, bytes] = MappingProxyType(
            {path: contents[path] for path in sorted(contents)}
        )
        self._dirs: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {d: tuple(sorted(children)) for d, children in dirs.items()}
        )
        self._infos: Mapping[str, EntryInfo] = MappingProxyType(
            {
                **{
                    d: EntryInfo(path=d, name=_name(d), is_dir=True)
                    for d in self._dirs
                },
                **{
                    p: EntryInfo(path=p, name=_name(p), size=len(data))
                    for p, data in self._files.items()
                },
            }
        )

    @property
    def paths(self) -> tuple[str, ...]:
        """All file paths in the bundle, sorted."""
        return tuple(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self._files

    def __repr__(self) -> str:
        return f"ResourceBundle({len(self._files)} files)"

    def _lookup(self, path: str) -> bytes:
        key = clean_path(path)
        if key in self._dirs:
            raise NotFoundError(f"{path!r} is a directory, not a file", path=path)
        try:
            return self._files[key]
        except KeyError:
            raise NotFoundError(
                f"{path!r} is not part of the bundle", path=path
            ) from None

    def open(self, path: str) -> io.BytesIO:
        """Open an embedded file for reading.

        Args:
            path: Relative path of the file.

        Returns:
            A new binary stream positioned at the start of the contents.

        Raises:
            NotFoundError: If *path* is not an embedded file.
        """
        return io.BytesIO(self._lookup(path))

    def read_all(self, path: str) -> bytes:
        """Return the complete contents of an embedded file.

        Raises:
            NotFoundError: If *path* is not an embedded file.
        """
        return self._lookup(path)

    def stat(self, path: str) -> EntryInfo:
        """Return metadata for a file or directory of the bundle.

        A trailing slash is accepted for directories only.

        Raises:
            NotFoundError: If *path* names neither a file nor a directory.
        """
        key = clean_path(path, allow_dir_slash=True)
        if path.endswith("/") and key not in self._dirs:
            raise NotFoundError(f"{path!r} is not a directory of the bundle", path=path)
        try:
            return self._infos[key]
        except KeyError:
            raise NotFoundError(
                f"{path!r} is not part of the bundle", path=path
            ) from None

    def list(self, prefix: str = "", recursive: bool = True) -> BundleListing:
        """Enumerate entries under *prefix*.

        Args:
            prefix: Directory to list; ``""`` lists from the root.
            recursive: When ``True`` yield every file below *prefix*.
                When ``False`` yield only the immediate children,
                directories included.

        Returns:
            A lazy listing of ``(path, EntryInfo)`` pairs in path order.

        Raises:
            NotFoundError: If *prefix* is not a directory of the bundle.
        """
        key = clean_path(prefix, allow_dir_slash=True)
        if key not in self._dirs:
            raise NotFoundError(
                f"{prefix!r} is not a directory of the bundle", path=prefix
            )
        return BundleListing(self, key, recursive)

    def materialize(self, dest: Path) -> list[Path]:
        """Write every embedded file below *dest*, recreating the layout.

        Existing files at the same locations are overwritten.

        Returns:
            The paths written, in bundle order.
        """
        dest = Path(dest)
        written: list[Path] = []
        for path, data in self._files.items():
            target = dest.joinpath(*path.split("/"))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
            written.append(target)
        return written
