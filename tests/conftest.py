"""Shared test fixtures for the Storefront Gateway tests."""

from __future__ import annotations

import os

import pytest


# Settings read APP_ENV when they are built; tests always use the test profile
os.environ.setdefault("APP_ENV", "test")

from storefront_gateway.core.config import Settings  # noqa: E402


@pytest.fixture
def test_settings() -> Settings:
    """Settings with credentials filled in and the test profile applied."""
    return Settings(
        APP_ENV="test",
        JUDGEME_API_TOKEN="test-judgeme-token",
        SHOPIFY_ACCESS_TOKEN="test-shopify-token",
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
