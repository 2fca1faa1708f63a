"""Quota resource queries: usage derived from mail storage on disk."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from mailquota.schemas.quota import QuotaResourceResponse, QuotaResourcesResponse
from mailquota.services import get_quota_resource, open_quota_root
from mailquota.services.dirsize_backend import DirsizeQuotaBackend, QuotaConfigError, QuotaGetResult

logger = logging.getLogger(__name__)
router = APIRouter()


def _open(user: str) -> DirsizeQuotaBackend:
    try:
        return open_quota_root(user)
    except QuotaConfigError as e:
        logger.error("Quota root misconfigured: %s", e)
        raise HTTPException(500, "Quota backend misconfigured")
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.get("/{user}/resources", response_model=QuotaResourcesResponse)
async def list_resources(user: str):
    backend = _open(user)
    try:
        return QuotaResourcesResponse(
            user=user,
            backend=backend.name,
            resources=backend.get_resources(),
        )
    finally:
        backend.deinit()


@router.get("/{user}/resources/{name}", response_model=QuotaResourceResponse)
async def get_resource(user: str, name: str):
    """Current usage of ``name`` for ``user``, walked from disk."""
    backend = _open(user)
    try:
        # Blocking filesystem walk
        res = await run_in_threadpool(get_quota_resource, backend, name)
    finally:
        backend.deinit()

    if res.result == QuotaGetResult.UNKNOWN_RESOURCE:
        raise HTTPException(404, res.error)
    if res.result == QuotaGetResult.INTERNAL_ERROR:
        logger.error("Quota lookup failed for %s: %s", user, res.error)
        raise HTTPException(500, "Internal quota error")

    return QuotaResourceResponse(
        user=user,
        resource=name,
        value=res.value,
        result=res.result.value,
    )
