"""
REST API routes — health and tenants.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from database.helpers import create_tenant
from database.session import get_db_session

router = APIRouter()


class TenantCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100)
    plan: Optional[str] = Field(default=None, max_length=32)


class TenantResponse(BaseModel):
    id: str
    name: str
    slug: str
    plan: str


@router.get("/health", tags=["health"])
async def health() -> Dict[str, Any]:
    return {"status": "ok", "time": datetime.now(timezone.utc)}


@router.post("/tenants", response_model=TenantResponse, tags=["tenants"])
async def post_tenant(
    req: TenantCreateRequest,
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    """Create a tenant. Slugs are not checked for uniqueness."""
    tenant = await create_tenant(session, req.name, req.slug, req.plan)
    await session.commit()
    return {
        "id": str(tenant.id),
        "name": tenant.name,
        "slug": tenant.slug,
        "plan": tenant.plan,
    }
