"""File discovery utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List

from filesniff.scan.errors import EnumerationError


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


class DirectoryScanner:
    """Enumerate regular files under a root in a stable, sorted order."""

    def __init__(
        self,
        *,
        recursive: bool,
        include_hidden: bool = True,
        follow_symlinks: bool = False,
        exclude_dirs: Iterable[str] = (),
    ) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks
        self.exclude_dirs = frozenset(exclude_dirs)

    def collect(self, root: Path) -> List[Path]:
        """Return every candidate file under ``root`` as a list.

        Raises:
            EnumerationError: If the root is missing or cannot be listed.
        """
        return list(self.scan(root))

    def scan(self, root: Path) -> Iterator[Path]:
        """Yield files discovered under root respecting configured filters."""
        root = Path(root).expanduser().resolve()
        if not root.exists():
            raise EnumerationError(f"Path does not exist: {root}")

        try:
            for path in self._iter_paths(root):
                if path.is_symlink() and not self.follow_symlinks:
                    continue
                if not path.is_file():
                    continue
                try:
                    relative = path.relative_to(root)
                except ValueError:
                    relative = Path(path.name)
                if not self.include_hidden and _is_hidden(relative):
                    continue
                if any(part in self.exclude_dirs for part in relative.parts[:-1]):
                    continue
                yield path
        except OSError as exc:
            raise EnumerationError(f"Error reading directory {root}: {exc}") from exc

    def _iter_paths(self, root: Path) -> Iterable[Path]:
        """Internal helper to iterate candidate paths."""
        if root.is_file():
            yield root
            return

        if self.recursive:
            yield from self._walk(root)
        else:
            yield from sorted(root.iterdir())

    def _walk(self, directory: Path) -> Iterator[Path]:
        # Symlinked directories are never descended into, so cycles cannot occur.
        for entry in sorted(directory.iterdir()):
            if entry.is_dir() and not entry.is_symlink():
                if entry.name not in self.exclude_dirs:
                    yield from self._walk(entry)
            else:
                yield entry
