"""Keyword extraction for job descriptions.

Ranks job-description terms into a tiered KeywordSet. A registered
collaborator is used when present (reliable first, then generic); otherwise
a frequency-based fallback with a domain-term boost runs locally. Results
are cached by document fingerprint so repeated submissions of the same
posting cost almost nothing.
"""

import inspect
import logging
import re
from collections import Counter

from models.schemas.keyword_set import KeywordSet
from services.fingerprint_cache import FingerprintCache, fingerprint
from services.pipeline.capabilities import CapabilityRegistry
from services.pipeline.timing import TIMING_TARGETS, Clock, MonotonicClock
from services.vocabulary import (
    BOOST_FACTOR,
    DOMAIN_TERMS,
    MIN_TOKEN_CHARS,
    STOP_WORDS,
    VOCABULARY_VERSION,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_KEYWORDS = 35
MIN_JOB_DESCRIPTION_CHARS = 50

# Extractor slots in preference order
_EXTRACTOR_SLOTS: tuple[str, ...] = ("reliable_extractor", "generic_extractor")

_STRIP_RE = re.compile(r"[^a-z0-9\s\-/]")

# Multi-word domain terms as token sequences, longest first
_PHRASES: list[tuple[str, list[str]]] = sorted(
    ((term, term.split()) for term in DOMAIN_TERMS if " " in term),
    key=lambda item: -len(item[1]),
)


def _normalize(text: str) -> str:
    """Lowercase and blank out everything but letters, digits, '-', '/'."""
    return _STRIP_RE.sub(" ", text.lower())


def rank_terms(job_description: str) -> list[str]:
    """Rank candidate terms by boosted frequency.

    Ties keep first-encounter order (sorted() is stable).
    """
    # edge "-" and "/" only; interior ones survive (ci/cd, end-to-end)
    tokens = [t.strip("-/") for t in _normalize(job_description).split()]
    counts: Counter[str] = Counter()

    for i, token in enumerate(tokens):
        for phrase, words in _PHRASES:
            if tokens[i:i + len(words)] == words:
                counts[phrase] += 1
        if len(token) < MIN_TOKEN_CHARS or token in STOP_WORDS:
            continue
        if not any(c.isalnum() for c in token):
            continue
        counts[token] += 1

    scored = [
        (term, count * BOOST_FACTOR if term in DOMAIN_TERMS else count)
        for term, count in counts.items()
    ]
    scored.sort(key=lambda item: -item[1])
    return [term for term, _ in scored]


def extract_keywords_fallback(
    job_description: str, max_keywords: int = DEFAULT_MAX_KEYWORDS
) -> KeywordSet:
    """Dependency-free frequency extraction, tiered 35/35/rest."""
    keywords = KeywordSet.from_terms(rank_terms(job_description), max_keywords)
    return keywords.model_copy(update={"vocabulary_version": VOCABULARY_VERSION})


def _coerce_keyword_set(raw: object, max_keywords: int) -> KeywordSet:
    """Re-tier collaborator output so every source yields the same shape."""
    if isinstance(raw, KeywordSet):
        return KeywordSet.from_terms(raw.terms, max_keywords)
    if isinstance(raw, (list, tuple)) and all(isinstance(t, str) for t in raw):
        return KeywordSet.from_terms(list(raw), max_keywords)
    raise TypeError(f"Extractor returned {type(raw).__name__}, expected KeywordSet")


class KeywordExtractionEngine:
    """Cache-backed keyword extraction with ranked collaborator fallbacks."""

    def __init__(
        self,
        cache: FingerprintCache,
        capabilities: CapabilityRegistry | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.cache = cache
        self.capabilities = capabilities or CapabilityRegistry()
        self.clock = clock or MonotonicClock()

    async def extract(
        self, job_text: str | None, max_keywords: int = DEFAULT_MAX_KEYWORDS
    ) -> KeywordSet:
        """Return the ranked KeywordSet for a job description.

        Text shorter than MIN_JOB_DESCRIPTION_CHARS is not an error: it
        yields an empty set with zero timing.
        """
        if not job_text or len(job_text) < MIN_JOB_DESCRIPTION_CHARS:
            return KeywordSet.empty()

        start = self.clock.now_ms()
        key = fingerprint(job_text)

        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for keywords (fingerprint %s)", key)
            return cached.with_timing(self.clock.now_ms() - start)

        result = await self._extract_uncached(job_text, max_keywords)
        self.cache.put(key, result)

        timing = self.clock.now_ms() - start
        logger.info(
            "Keywords extracted in %.0fms (target: %.0fms)",
            timing, TIMING_TARGETS["extraction"],
        )
        return result.with_timing(timing)

    async def _extract_uncached(self, job_text: str, max_keywords: int) -> KeywordSet:
        for slot in _EXTRACTOR_SLOTS:
            if not self.capabilities.is_registered(slot):
                continue
            try:
                extractor = self.capabilities.get(slot)
                raw = extractor.extract(job_text, max_keywords)
                if inspect.isawaitable(raw):
                    raw = await raw
                return _coerce_keyword_set(raw, max_keywords)
            except Exception as e:
                logger.warning("%s failed, falling back: %s", slot, e)

        return extract_keywords_fallback(job_text, max_keywords)
