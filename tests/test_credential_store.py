"""Tests for the user/tenant data layer against SQLite."""

import pytest

from auth.password import hash_password, verify_password
from database.helpers import (
    DuplicateEmailError,
    count_users,
    create_tenant,
    create_user,
    find_user_by_email,
    seed_admin,
)


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_create_and_find(self, db):
        user = await create_user(db, "a@example.com", "hash-a")
        await db.commit()

        found = await find_user_by_email(db, "a@example.com")
        assert found is not None
        assert found.id == user.id
        assert found.created_at is not None

    @pytest.mark.asyncio
    async def test_find_unknown_returns_none(self, db):
        assert await find_user_by_email(db, "nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_unique_constraint_rejects_duplicate(self, db):
        await create_user(db, "dup@example.com", "hash-1")
        await db.commit()

        with pytest.raises(DuplicateEmailError) as excinfo:
            await create_user(db, "dup@example.com", "hash-2")
        assert excinfo.value.email == "dup@example.com"
        assert await count_users(db) == 1

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, db):
        await create_user(db, "Case@example.com", "hash-1")
        await create_user(db, "case@example.com", "hash-2")
        await db.commit()
        assert await count_users(db) == 2


class TestTenantStore:
    @pytest.mark.asyncio
    async def test_plan_defaults_to_free(self, db):
        tenant = await create_tenant(db, "Acme", "acme")
        assert tenant.plan == "free"
        assert tenant.id is not None

    @pytest.mark.asyncio
    async def test_plan_override(self, db):
        tenant = await create_tenant(db, "Acme", "acme", plan="pro")
        assert tenant.plan == "pro"

    @pytest.mark.asyncio
    async def test_slug_not_unique(self, db):
        first = await create_tenant(db, "Acme", "acme")
        second = await create_tenant(db, "Acme Two", "acme")
        assert first.id != second.id


class TestSeedAdmin:
    @pytest.mark.asyncio
    async def test_seeds_when_empty(self, db):
        digest = hash_password("Admin123!", rounds=4)
        user = await seed_admin(db, "admin@example.com", digest)
        assert user is not None

        stored = await find_user_by_email(db, "admin@example.com")
        assert verify_password("Admin123!", stored.password_hash)

    @pytest.mark.asyncio
    async def test_noop_when_users_exist(self, db):
        await create_user(db, "someone@example.com", "hash")
        await db.commit()

        assert await seed_admin(db, "admin@example.com", "hash") is None
        assert await find_user_by_email(db, "admin@example.com") is None
