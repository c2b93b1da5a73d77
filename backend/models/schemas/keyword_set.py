"""Extraction output: ranked keywords partitioned into priority tiers."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

# Static tier proportions over the ranked list (ceil for high and medium)
HIGH_TIER_RATIO = 0.35
MEDIUM_TIER_RATIO = 0.35


class KeywordTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Keyword(BaseModel):
    """A single ranked term from a job description."""
    model_config = ConfigDict(frozen=True)

    text: str  # surface form, case preserved
    normalized: str  # lowercase comparison form
    tier: KeywordTier = KeywordTier.LOW


class KeywordSet(BaseModel):
    """Rank-ordered keywords plus their high/medium/low partition.

    Built through from_terms() so every source (internal fallback or a
    registered extractor) yields the same shape.
    """
    model_config = ConfigDict(frozen=True)

    all: list[Keyword] = []
    high: list[Keyword] = []
    medium: list[Keyword] = []
    low: list[Keyword] = []
    total: int = 0
    timing_ms: float = 0.0
    vocabulary_version: str = ""  # set by the internal fallback; "" for collaborator output

    @model_validator(mode="after")
    def _check_tiers(self) -> "KeywordSet":
        tiered = len(self.high) + len(self.medium) + len(self.low)
        if not (tiered == self.total == len(self.all)):
            raise ValueError(
                f"tier sizes {tiered} / total {self.total} / all {len(self.all)} disagree"
            )
        return self

    @classmethod
    def from_terms(cls, terms: list[str], max_keywords: int | None = None) -> "KeywordSet":
        """Dedupe (case-insensitive, first wins), truncate and tier a ranked list."""
        seen: set[str] = set()
        ranked: list[str] = []
        for term in terms:
            surface = term.strip()
            norm = surface.lower()
            if not surface or norm in seen:
                continue
            seen.add(norm)
            ranked.append(surface)
        if max_keywords is not None:
            ranked = ranked[:max_keywords]

        n = len(ranked)
        high_count = math.ceil(n * HIGH_TIER_RATIO)
        medium_count = min(math.ceil(n * MEDIUM_TIER_RATIO), n - high_count)

        keywords: list[Keyword] = []
        for i, surface in enumerate(ranked):
            if i < high_count:
                tier = KeywordTier.HIGH
            elif i < high_count + medium_count:
                tier = KeywordTier.MEDIUM
            else:
                tier = KeywordTier.LOW
            keywords.append(Keyword(text=surface, normalized=surface.lower(), tier=tier))

        return cls(
            all=keywords,
            high=keywords[:high_count],
            medium=keywords[high_count:high_count + medium_count],
            low=keywords[high_count + medium_count:],
            total=n,
        )

    @classmethod
    def empty(cls) -> "KeywordSet":
        return cls()

    @property
    def terms(self) -> list[str]:
        return [kw.text for kw in self.all]

    def with_timing(self, timing_ms: float) -> "KeywordSet":
        return self.model_copy(update={"timing_ms": timing_ms})
