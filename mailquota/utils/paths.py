"""Deduplication of overlapping quota count paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class QuotaCountPath:
    """One root to be scanned: a directory tree or a single mailbox file."""
    path: str
    is_file: bool = False


def is_path_within(path: str, parent: str) -> bool:
    """True if ``path`` equals ``parent`` or lies below it.

    The comparison stops at a ``/`` boundary, so ``/var/mail2`` is not
    within ``/var/mail``.
    """
    if path == parent:
        return True
    return path.startswith(parent.rstrip("/") + "/")


class QuotaPathSet:
    """Ordered set of count paths where no entry covers another.

    Use :meth:`add` to insert; the set can be iterated and sized but not
    indexed.
    """

    def __init__(self) -> None:
        self._paths: list[QuotaCountPath] = []

    def add(self, path: str, is_file: bool = False) -> None:
        """Insert ``path`` unless an existing entry already covers it.

        Existing entries below ``path`` are dropped, all of them.
        """
        i = 0
        while i < len(self._paths):
            existing = self._paths[i].path
            if is_path_within(path, existing):
                # already counted
                return
            if is_path_within(existing, path):
                del self._paths[i]
            else:
                i += 1

        self._paths.append(QuotaCountPath(path=path, is_file=is_file))

    def __iter__(self) -> Iterator[QuotaCountPath]:
        return iter(tuple(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"QuotaPathSet({[p.path for p in self._paths]!r})"
