"""Filter Predicate Builder: folds optional per-field criteria into one conjunctive predicate.

Invariants:
    - An absent criterion contributes nothing (identity of AND)
    - build_predicate(PlayerCriteria()) accepts every record
    - PlayerPredicate holds a frozenset of criteria: combination with & is
      associative and commutative, and equal criteria sets compare equal
    - Range bounds are inclusive; a missing bound leaves that side open
    - No OR, no negation

Design Decisions:
    - Criteria are declarative frozen dataclasses (field + bounds), evaluable
      in memory via matches() and translatable by a storage engine into its own
      query language (see infrastructure/player_repository.py)
    - One filter_by_* function per field, each returning a criterion or None,
      so the builder is a plain fold over optional values
"""

from dataclasses import dataclass, field
from typing import Any, Union

from catalog.core.domain_types import (
    PlayerRecord, Profession, Race, from_epoch_millis,
)


# ─── Criteria ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Contains:
    """Record field contains `text` as a substring (case as given)."""
    field: str
    text: str

    def matches(self, record: PlayerRecord) -> bool:
        return self.text in getattr(record, self.field)


@dataclass(frozen=True)
class Equals:
    """Record field equals `value`."""
    field: str
    value: Any

    def matches(self, record: PlayerRecord) -> bool:
        return getattr(record, self.field) == self.value


@dataclass(frozen=True)
class Between:
    """Record field within [lower, upper]; None leaves that side unbounded."""
    field: str
    lower: Any = None
    upper: Any = None

    def matches(self, record: PlayerRecord) -> bool:
        value = getattr(record, self.field)
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


Criterion = Union[Contains, Equals, Between]


# ─── Predicate ───────────────────────────────────────────────────

@dataclass(frozen=True)
class PlayerPredicate:
    """Conjunction of criteria. Callable on a PlayerRecord."""
    criteria: frozenset = field(default_factory=frozenset)

    def __call__(self, record: PlayerRecord) -> bool:
        return all(criterion.matches(record) for criterion in self.criteria)

    def __and__(self, other: "PlayerPredicate") -> "PlayerPredicate":
        return PlayerPredicate(self.criteria | other.criteria)

    def with_criterion(self, criterion: Criterion | None) -> "PlayerPredicate":
        """Add a criterion; None is the identity."""
        if criterion is None:
            return self
        return PlayerPredicate(self.criteria | {criterion})

    @property
    def is_unfiltered(self) -> bool:
        return not self.criteria


ACCEPT_ALL = PlayerPredicate()


# ─── Per-field criteria ──────────────────────────────────────────

def filter_by_name(name: str | None) -> Contains | None:
    return None if name is None else Contains("name", name)


def filter_by_title(title: str | None) -> Contains | None:
    return None if title is None else Contains("title", title)


def filter_by_race(race: Race | None) -> Equals | None:
    return None if race is None else Equals("race", race)


def filter_by_profession(profession: Profession | None) -> Equals | None:
    return None if profession is None else Equals("profession", profession)


def filter_by_banned(banned: bool | None) -> Equals | None:
    return None if banned is None else Equals("banned", banned)


def filter_by_range(
    field_name: str, lower: Any = None, upper: Any = None,
) -> Between | None:
    if lower is None and upper is None:
        return None
    return Between(field_name, lower, upper)


def filter_by_experience(minimum: int | None, maximum: int | None) -> Between | None:
    return filter_by_range("experience", minimum, maximum)


def filter_by_level(minimum: int | None, maximum: int | None) -> Between | None:
    return filter_by_range("level", minimum, maximum)


def filter_by_birthday(after: int | None, before: int | None) -> Between | None:
    """Bounds are epoch milliseconds; compared as timestamps."""
    lower = None if after is None else from_epoch_millis(after)
    upper = None if before is None else from_epoch_millis(before)
    return filter_by_range("birthday", lower, upper)


# ─── Builder ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlayerCriteria:
    """Optional query criteria. None on any field means "no constraint"."""
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    after: int | None = None
    before: int | None = None
    banned: bool | None = None
    min_experience: int | None = None
    max_experience: int | None = None
    min_level: int | None = None
    max_level: int | None = None


def build_predicate(criteria: PlayerCriteria) -> PlayerPredicate:
    """Fold every present criterion into one PlayerPredicate with AND."""
    optional_criteria = (
        filter_by_name(criteria.name),
        filter_by_title(criteria.title),
        filter_by_race(criteria.race),
        filter_by_profession(criteria.profession),
        filter_by_birthday(criteria.after, criteria.before),
        filter_by_banned(criteria.banned),
        filter_by_experience(criteria.min_experience, criteria.max_experience),
        filter_by_level(criteria.min_level, criteria.max_level),
    )
    predicate = ACCEPT_ALL
    for criterion in optional_criteria:
        predicate = predicate.with_criterion(criterion)
    return predicate
