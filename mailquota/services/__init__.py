"""Quota services: singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mailquota.config import settings

if TYPE_CHECKING:
    from mailquota.services.dirsize_backend import DirsizeQuotaBackend, QuotaResourceResult
    from mailquota.services.namespaces import NamespaceResolver

logger = logging.getLogger(__name__)

_namespace_resolver: NamespaceResolver | None = None


def init_services() -> None:
    """Create the namespace resolver from settings."""
    global _namespace_resolver

    from mailquota.services.namespaces import NamespaceResolver

    _namespace_resolver = NamespaceResolver(settings.namespaces)
    logger.info("Quota services initialized (%d namespaces)", len(settings.namespaces))


def shutdown_services() -> None:
    global _namespace_resolver
    _namespace_resolver = None


def get_namespace_resolver() -> NamespaceResolver:
    if _namespace_resolver is None:
        raise RuntimeError("Services not initialized: call init_services() first")
    return _namespace_resolver


def open_quota_root(user: str) -> DirsizeQuotaBackend:
    """Allocate and initialize a dirsize quota root for ``user``."""
    from mailquota.services.dirsize_backend import DirsizeQuotaBackend

    backend = DirsizeQuotaBackend(get_namespace_resolver().resolve(user))
    backend.init(settings.quota_args)
    return backend


def get_quota_resource(backend: DirsizeQuotaBackend, name: str) -> QuotaResourceResult:
    """Look up ``name`` on ``backend``; ``STORAGE`` is answered in kilobytes
    from the backend's ``STORAGE_BYTES`` value."""
    from mailquota.services.dirsize_backend import (
        QUOTA_NAME_STORAGE_BYTES,
        QUOTA_NAME_STORAGE_KILOBYTES,
        QuotaGetResult,
    )

    if name.lower() != QUOTA_NAME_STORAGE_KILOBYTES.lower():
        return backend.get_resource(name)

    res = backend.get_resource(QUOTA_NAME_STORAGE_BYTES)
    if res.result == QuotaGetResult.LIMITED:
        res.value //= 1024
    return res
