"""Root conftest: shared test configuration."""

import os

import pytest

# Tests never touch a real database file
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from catalog.core.domain_types import PlayerDraft, Profession, Race  # noqa: E402
from tests.builders import utc  # noqa: E402


@pytest.fixture
def valid_draft() -> PlayerDraft:
    """The smallest draft full validation accepts."""
    return PlayerDraft(
        name="Ab",
        title="T",
        race=Race.ELF,
        profession=Profession.DRUID,
        birthday=utc(2500),
        experience=0,
    )
