"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - PlayerId wraps a positive int assigned by storage; never use a bare int in domain logic
    - Race, Profession and PlayerOrder are closed sets; unknown values never reach storage
    - PlayerRecord always carries level/until_next_level consistent with experience once persisted

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost
    - str Enums keyed by upper-case names: they serialize to JSON as-is
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PlayerId = NewType("PlayerId", int)


# ─── Bounds ──────────────────────────────────────────────────────

NAME_MIN_LENGTH: int = 2
NAME_MAX_LENGTH: int = 12
TITLE_MIN_LENGTH: int = 1
TITLE_MAX_LENGTH: int = 30
MIN_EXPERIENCE: int = 0
MAX_EXPERIENCE: int = 10_000_000
MIN_BIRTH_YEAR: int = 2000
MAX_BIRTH_YEAR: int = 3000

DEFAULT_PAGE_SIZE: int = 3

# Storage integer widths: ids are BIGINT, experience and level are INTEGER
MAX_PLAYER_ID: int = 2**63 - 1
MIN_COLUMN_INT: int = -(2**31)
MAX_COLUMN_INT: int = 2**31 - 1

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ─── Enums ───────────────────────────────────────────────────────

class Race(str, Enum):
    """Player race. Maps to DB `race` column."""
    HUMAN = "HUMAN"
    DWARF = "DWARF"
    ELF = "ELF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(str, Enum):
    """Player profession. Maps to DB `profession` column."""
    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERIC = "CLERIC"
    PALADIN = "PALADIN"
    NAZGUL = "NAZGUL"
    WARLOCK = "WARLOCK"
    DRUID = "DRUID"


class PlayerOrder(str, Enum):
    """Sort orders accepted by list queries."""
    ID = "ID"
    NAME = "NAME"
    EXPERIENCE = "EXPERIENCE"
    BIRTHDAY = "BIRTHDAY"
    LEVEL = "LEVEL"

    @property
    def field_name(self) -> str:
        """PlayerRecord attribute this order sorts by."""
        return self.value.lower()


# ─── Records ─────────────────────────────────────────────────────

@dataclass
class PlayerRecord:
    """A stored player. id is None until the repository assigns one."""
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: datetime
    banned: bool
    experience: int
    level: int
    until_next_level: int
    id: PlayerId | None = None


@dataclass
class PlayerDraft:
    """Client-supplied fields for a new player. Every field may be missing."""
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: datetime | None = None
    banned: bool | None = None
    experience: int | None = None


@dataclass
class PlayerPatch:
    """Partial update. None means "leave the stored value unchanged"."""
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: datetime | None = None
    banned: bool | None = None
    experience: int | None = None

    def present_fields(self) -> dict:
        """Fields explicitly supplied by the client."""
        return {
            name: value for name, value in vars(self).items()
            if value is not None
        }


# ─── Timestamp conversion ────────────────────────────────────────

def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones pass through."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_epoch_millis(moment: datetime) -> int:
    """Epoch milliseconds for an aware or naive-UTC datetime."""
    delta = as_utc(moment) - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_millis(millis: int) -> datetime:
    """UTC datetime for epoch milliseconds. Raises OverflowError when out of range."""
    return EPOCH + timedelta(milliseconds=millis)
