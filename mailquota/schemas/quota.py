"""Quota resource schemas."""

from pydantic import BaseModel


class QuotaResourcesResponse(BaseModel):
    """Resources reported by the quota backend."""
    user: str
    backend: str
    resources: list[str]


class QuotaResourceResponse(BaseModel):
    """Current usage of one quota resource."""
    user: str
    resource: str
    value: int
    result: str = "limited"
