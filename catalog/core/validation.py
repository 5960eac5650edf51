"""Player Validation: full checks for creation, range checks for partial updates.

Invariants:
    - validate_draft / validate_patch are PURE: return failing field names, never raise
    - An empty list means valid; any entry rejects the whole record or patch
    - Patch validation checks ONLY experience range and birthday sign; names, titles,
      races and professions in a patch pass unchecked

Design Decisions:
    - The full/patch asymmetry is kept: an update may move a record into a state
      that creation would reject (e.g. a one-letter name)
    - Birthday: the full path rejects a missing value before checking range, the
      patch path checks range only when the field is present
"""

from datetime import datetime

from catalog.core.domain_types import (
    EPOCH,
    MAX_BIRTH_YEAR,
    MAX_EXPERIENCE,
    MIN_BIRTH_YEAR,
    MIN_EXPERIENCE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    PlayerDraft,
    PlayerPatch,
    as_utc,
)


def is_valid_name(name: str | None) -> bool:
    return bool(name) and NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH


def is_valid_title(title: str | None) -> bool:
    return bool(title) and TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH


def is_valid_experience(experience: int | None) -> bool:
    return experience is not None and MIN_EXPERIENCE <= experience <= MAX_EXPERIENCE


def is_non_negative_epoch(birthday: datetime) -> bool:
    """True when the timestamp is at or after 1970-01-01T00:00:00Z. Naive means UTC."""
    return as_utc(birthday) >= EPOCH


def is_valid_birthday(birthday: datetime | None) -> bool:
    if birthday is None:
        return False
    if not is_non_negative_epoch(birthday):
        return False
    return MIN_BIRTH_YEAR <= as_utc(birthday).year <= MAX_BIRTH_YEAR


def validate_draft(draft: PlayerDraft) -> list[str]:
    """Full validation for creation. Returns names of failing fields."""
    checks = {
        "name": is_valid_name(draft.name),
        "title": is_valid_title(draft.title),
        "race": draft.race is not None,
        "profession": draft.profession is not None,
        "birthday": is_valid_birthday(draft.birthday),
        "experience": is_valid_experience(draft.experience),
    }
    return [field for field, ok in checks.items() if not ok]


def validate_patch(patch: PlayerPatch) -> list[str]:
    """Range checks for fields present in an update. Returns names of failing fields."""
    failures = []
    if patch.experience is not None and not is_valid_experience(patch.experience):
        failures.append("experience")
    if patch.birthday is not None and not is_non_negative_epoch(patch.birthday):
        failures.append("birthday")
    return failures
