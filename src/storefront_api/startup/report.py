"""
storefront_api.startup.report

Outcome of the recoverable startup stages, kept on `app.state.startup`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SeedOutcome(enum.StrEnum):
    disabled = "disabled"
    seeded = "seeded"
    skipped = "skipped"
    # Seeder returned neither flag.
    none = "none"
    failed = "failed"


class SearchMode(enum.StrEnum):
    vector = "vector"
    fallback = "fallback"


@dataclass(slots=True)
class StartupReport:
    seed: SeedOutcome = SeedOutcome.disabled
    search: SearchMode = SearchMode.fallback
    vector_requested: bool = False

    @property
    def degraded(self) -> bool:
        if self.seed is SeedOutcome.failed:
            return True
        return self.vector_requested and self.search is SearchMode.fallback

    def as_dict(self) -> dict[str, str | bool]:
        return {"seed": self.seed.value, "search": self.search.value, "degraded": self.degraded}
