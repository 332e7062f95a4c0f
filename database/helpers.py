"""
Database helper functions — credential store, tenant store and seeding.

"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Tenant, User

logger = logging.getLogger(__name__)

DEFAULT_PLAN = "free"


class DuplicateEmailError(Exception):
    """A user with this email already exists."""

    def __init__(self, email: str) -> None:
        super().__init__("email already registered")
        self.email = email


# ── Users ───────────────────────────────────────────────────────────


async def find_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def count_users(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(User))
    return result.scalar_one()


async def create_user(session: AsyncSession, email: str, password_hash: str) -> User:
    """
    Insert a new ``User`` row.

    The unique index on ``users.email`` is the source of truth: a conflicting
    insert surfaces as ``DuplicateEmailError`` even when a prior lookup
    found nothing.
    """
    user = User(email=email, password_hash=password_hash)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateEmailError(email) from exc
    return user


# ── Tenants ─────────────────────────────────────────────────────────


async def create_tenant(
    session: AsyncSession,
    name: str,
    slug: str,
    plan: Optional[str] = None,
) -> Tenant:
    """Insert a tenant; ``plan`` falls back to ``"free"``."""
    tenant = Tenant(name=name, slug=slug, plan=plan or DEFAULT_PLAN)
    session.add(tenant)
    await session.flush()
    logger.info("Created tenant %s (%s, plan=%s)", tenant.slug, tenant.id, tenant.plan)
    return tenant


# ── Seeding ─────────────────────────────────────────────────────────


async def seed_admin(session: AsyncSession, email: str, password_hash: str) -> Optional[User]:
    """
    Create the platform admin when the users table is empty.

    Returns the new user, or ``None`` if any user already exists.
    """
    if await count_users(session) > 0:
        logger.info("Users present, skipping admin seed")
        return None
    user = await create_user(session, email, password_hash)
    await session.commit()
    logger.info("Seeded admin user: %s", email)
    return user
