from __future__ import annotations

import string
from collections.abc import Callable, Sequence
from typing import TypeVar

from faker import Faker
from faker.exceptions import UniquenessException

from catalog_seeder.config import Settings, UniqueScope
from catalog_seeder.schemas import EntityKind

T = TypeVar("T")

MAX_UNIQUE_ATTEMPTS = 1000


class RandomContentProvider:
    """Random primitives for entity composition, backed by Faker.

    The provider owns the session uniqueness ledger. Names share one ledger
    across categories, tags and products when ``unique_scope`` is ``SHARED``;
    with ``PER_KIND`` each kind keeps its own. SKUs always have their own
    ledger. Call :meth:`reset` at the start of a session.
    """

    def __init__(
        self,
        faker: Faker | None = None,
        seed: int | None = None,
        locale: str = "en_US",
        unique_scope: UniqueScope = UniqueScope.SHARED,
    ) -> None:
        self._faker = faker or Faker(locale)
        if seed is not None:
            self._faker.seed_instance(seed)
        self.unique_scope = unique_scope
        self._ledgers: dict[str, set[str]] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> RandomContentProvider:
        return cls(seed=settings.seed, locale=settings.locale, unique_scope=settings.unique_scope)

    @property
    def faker(self) -> Faker:
        return self._faker

    def reset(self) -> None:
        self._ledgers.clear()

    def issued(self, ledger: str) -> frozenset[str]:
        """Case-folded values already handed out from ``ledger``."""
        return frozenset(self._ledgers.get(ledger, set()))

    def paragraph(self) -> str:
        return self._faker.paragraph()

    def name(self) -> str:
        return self._faker.name()

    def email(self) -> str:
        return self._faker.email()

    def catch_phrase(self) -> str:
        return self._faker.catch_phrase()

    def number_between(self, low: int, high: int) -> int:
        return self._faker.random_int(min=low, max=high)

    def boolean(self, chance_of_getting_true: int = 50) -> bool:
        return self._faker.boolean(chance_of_getting_true=chance_of_getting_true)

    def random_element(self, items: Sequence[T]) -> T:
        return self._faker.random_element(elements=list(items))

    def random_elements(self, items: Sequence[T], length: int) -> list[T]:
        """Pick ``length`` distinct items."""
        return list(self._faker.random_elements(elements=list(items), length=length, unique=True))

    def unique_catch_phrase(self, kind: EntityKind) -> str:
        return self._unique(self._name_ledger(kind), self.catch_phrase)

    def unique_sku(self, pattern: str) -> str:
        """Fill a ``#``/``?`` pattern after shuffling its slots, upper-cased."""

        def draw() -> str:
            slots = self._faker.random.sample(pattern, len(pattern))
            return self._faker.bothify("".join(slots), letters=string.ascii_letters).upper()

        return self._unique("sku", draw)

    def _name_ledger(self, kind: EntityKind) -> str:
        if self.unique_scope is UniqueScope.PER_KIND:
            return f"name:{kind.value}"
        return "name"

    def _unique(self, ledger: str, draw: Callable[[], str]) -> str:
        seen = self._ledgers.setdefault(ledger, set())
        for _ in range(MAX_UNIQUE_ATTEMPTS):
            value = draw()
            # Ledger keys are case-folded.
            key = value.casefold()
            if key not in seen:
                seen.add(key)
                return value
        raise UniquenessException(
            f"Got duplicated values after {MAX_UNIQUE_ATTEMPTS:,} iterations in ledger {ledger}.",
        )
