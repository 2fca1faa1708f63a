"""Disk usage of mail storage trees."""

from __future__ import annotations

import logging
import os
import stat
from typing import Iterable

from mailquota.utils.paths import QuotaCountPath

logger = logging.getLogger(__name__)


class QuotaUsageError(Exception):
    """A filesystem call failed for a reason other than a missing entry."""

    def __init__(self, path: str, operation: str, cause: OSError):
        self.path = path
        self.operation = operation
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"{operation}({path}) failed: {reason}")


def get_dir_usage(path: str) -> int:
    """Sum the sizes of all non-directory entries below ``path``.

    Symlinks are counted by their own size and never followed. Entries that
    vanish during the walk contribute nothing. Subdirectories are walked
    from an explicit stack, so tree depth is not bounded by recursion.
    """
    total = 0
    pending = [path]
    while pending:
        dir_path = pending.pop()
        try:
            it = os.scandir(dir_path)
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise QuotaUsageError(dir_path, "opendir", exc) from exc

        with it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as exc:
                    raise QuotaUsageError(dir_path, "readdir", exc) from exc

                entry_path = os.path.join(dir_path, entry.name)
                try:
                    st = os.lstat(entry_path)
                except FileNotFoundError:
                    continue
                except OSError as exc:
                    raise QuotaUsageError(entry_path, "lstat", exc) from exc

                if stat.S_ISDIR(st.st_mode):
                    pending.append(entry_path)
                else:
                    total += st.st_size
    return total


def get_usage(path: str, is_file: bool = False) -> int:
    """Bytes used by a single mailbox file or a whole directory tree."""
    if not is_file:
        return get_dir_usage(path)

    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return 0
    except OSError as exc:
        raise QuotaUsageError(path, "lstat", exc) from exc
    return st.st_size


def compute_usage(paths: Iterable[QuotaCountPath]) -> int:
    """Total bytes of all given roots.

    Raises :class:`QuotaUsageError` on the first failure; a partial sum is
    never returned.
    """
    total = 0
    for count_path in paths:
        used = get_usage(count_path.path, count_path.is_file)
        logger.debug("%s: %d bytes", count_path.path, used)
        total += used
    return total
