"""Tests for the --migrate / --seed boot path."""

import pytest
from unittest.mock import AsyncMock, patch

from main import bootstrap_database, parse_args


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert not args.migrate
        assert not args.seed

    def test_flags(self):
        args = parse_args(["--migrate", "--seed"])
        assert args.migrate and args.seed


class TestBootstrapDatabase:
    @pytest.mark.asyncio
    async def test_migrate_only_skips_seed(self, settings):
        with patch("main.seed_admin", new_callable=AsyncMock) as mock_seed:
            await bootstrap_database(settings, seed=False)
        mock_seed.assert_not_called()

    @pytest.mark.asyncio
    async def test_migrate_and_seed(self, settings):
        with patch("main.seed_admin", new_callable=AsyncMock) as mock_seed:
            await bootstrap_database(settings, seed=True)
        mock_seed.assert_awaited_once()
        _, email, password_hash = mock_seed.await_args.args
        assert email == settings.platform_admin_email
        assert password_hash.startswith("$2")


class TestModuleImport:
    def test_import_does_not_build_an_app(self):
        import main

        assert not hasattr(main, "app")
