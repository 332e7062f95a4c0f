"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Request

from config.settings import Settings


def app_settings(request: Request) -> Settings:
    """The settings object the app was built with."""
    return request.app.state.settings
