"""Quota backend that reports usage by summing file sizes in mail storage.

The backend is auto-updating: usage is always recomputed from the
filesystem, so updates after mailbox changes are no-ops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mailquota.services.namespaces import MailNamespace
from mailquota.utils.paths import QuotaPathSet
from mailquota.utils.storage import QuotaUsageError, compute_usage

logger = logging.getLogger(__name__)

QUOTA_NAME_STORAGE_KILOBYTES = "STORAGE"
QUOTA_NAME_STORAGE_BYTES = "STORAGE_BYTES"
QUOTA_UNKNOWN_RESOURCE_ERROR_STRING = "Unknown quota resource"

FLAG_OPTIONS = ("noenforcing", "hidden", "ignoreunlimited")


class QuotaConfigError(ValueError):
    """Invalid quota root argument string."""


class QuotaGetResult(str, Enum):
    """Outcome of a resource lookup."""

    LIMITED = "limited"
    UNKNOWN_RESOURCE = "unknown_resource"
    INTERNAL_ERROR = "internal_error"


@dataclass
class QuotaResourceResult:
    result: QuotaGetResult
    value: int = 0
    error: str | None = None


class DirsizeQuotaBackend:
    """Read-only quota root over a user's mail namespaces."""

    name = "dirsize"

    def __init__(self, namespaces: list[MailNamespace]):
        self._namespaces: list[MailNamespace] | None = list(namespaces)
        self.auto_updating = False
        self.ns_prefix: str | None = None
        self.flags: set[str] = set()

    def init(self, args: str | None = None) -> None:
        """Parse the quota root arguments (``ns=<prefix>`` and flags)."""
        self.auto_updating = True
        for option in (args or "").split():
            if option.startswith("ns="):
                self.ns_prefix = option[len("ns="):]
            elif option in FLAG_OPTIONS:
                self.flags.add(option)
            else:
                raise QuotaConfigError(f"Unknown quota root argument: {option}")
        logger.debug(
            "dirsize quota initialized (ns=%s, flags=%s)",
            self.ns_prefix, sorted(self.flags),
        )

    def deinit(self) -> None:
        self._namespaces = None

    def get_resources(self) -> list[str]:
        return [QUOTA_NAME_STORAGE_KILOBYTES]

    def is_namespace_visible(self, namespace: MailNamespace) -> bool:
        if self.ns_prefix is None:
            return True
        return namespace.prefix == self.ns_prefix

    def collect_paths(self) -> QuotaPathSet:
        """Deduplicated roots of every visible namespace."""
        if self._namespaces is None:
            raise RuntimeError("Quota backend used after deinit()")

        paths = QuotaPathSet()
        for ns in self._namespaces:
            if not self.is_namespace_visible(ns):
                continue
            if ns.root_dir:
                paths.add(ns.root_dir, False)
            # INBOX may be in a different path
            if ns.inbox_path:
                paths.add(ns.inbox_path, ns.mailbox_file)
        return paths

    def get_usage(self) -> int:
        """Total bytes used; raises QuotaUsageError on filesystem failure."""
        return compute_usage(self.collect_paths())

    def get_resource(self, name: str) -> QuotaResourceResult:
        if name.lower() != QUOTA_NAME_STORAGE_BYTES.lower():
            return QuotaResourceResult(
                result=QuotaGetResult.UNKNOWN_RESOURCE,
                error=QUOTA_UNKNOWN_RESOURCE_ERROR_STRING,
            )

        try:
            value = self.get_usage()
        except QuotaUsageError as e:
            logger.error("dirsize quota: %s", e)
            return QuotaResourceResult(result=QuotaGetResult.INTERNAL_ERROR, error=str(e))

        return QuotaResourceResult(result=QuotaGetResult.LIMITED, value=value)

    def update(self, transaction: Any = None) -> None:
        """No-op: usage is derived from the filesystem."""
        return None
