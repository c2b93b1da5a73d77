"""Résumé tailoring: inject the job's missing keywords into the CV text.

Two internal strategies:

- sections (default): parse the CV, weave keywords into experience bullets,
  consolidate the skills list and reassemble the canonical document.
- anchor: fast path that drops a comma-separated keyword line under the
  skills header (or synthesizes a SKILLS section).

A registered tailorer collaborator takes precedence; if it raises, the
internal strategy runs instead.
"""

import inspect
import logging

from models.schemas.keyword_set import KeywordSet
from models.schemas.tailoring_result import TailoringResult, TailoringStats, TailorOptions
from services.keyword_injector import consolidate_skills_detailed, inject_bullets, proper_case
from services.pipeline.capabilities import CapabilityRegistry
from services.pipeline.timing import TIMING_TARGETS, Clock, MonotonicClock
from services.section_parser import (
    EDUCATION_HEADER_RE,
    SKILLS_HEADER_RE,
    assemble_document,
    leading_text,
    normalize_newlines,
    parse_sections,
)

logger = logging.getLogger(__name__)


def find_missing_keywords(cv_text: str, keywords: list[str]) -> list[str]:
    """Keywords (rank order) not found anywhere in the CV, case-insensitive."""
    cv_lower = cv_text.lower()
    return [kw for kw in keywords if kw.lower() not in cv_lower]


def _unchanged(cv_text: str) -> TailoringResult:
    return TailoringResult(tailored_text=cv_text, original_text=cv_text)


def _insert_skills_line(text: str, cv_text: str, to_add: list[str]) -> TailoringResult:
    """Place `to_add` as one line under the skills header of `text`.

    `text` is the newline-normalized form of `cv_text`; the raw input is
    returned untouched whenever nothing is inserted.
    """
    if not to_add:
        return _unchanged(cv_text)

    skills_line = ", ".join(proper_case(kw) for kw in to_add)

    header = SKILLS_HEADER_RE.search(text)
    if header:
        insert_pos = text.find("\n", header.start())
        if insert_pos == -1:
            logger.info("Skills header has no line to anchor on; CV left unchanged")
            return _unchanged(cv_text)
        tailored = text[:insert_pos + 1] + skills_line + "\n" + text[insert_pos + 1:]
    else:
        new_section = f"SKILLS\n{skills_line}"
        education = EDUCATION_HEADER_RE.search(text)
        if education:
            tailored = text[:education.start()] + new_section + "\n\n" + text[education.start():]
        else:
            body = text.rstrip("\n")
            tailored = f"{body}\n\n{new_section}" if body else new_section

    return TailoringResult(
        tailored_text=tailored,
        original_text=cv_text,
        injected_keywords=to_add,
        stats=TailoringStats(total=len(to_add), skills=len(to_add)),
    )


def tailor_skills_anchor(
    cv_text: str, keywords: list[str], options: TailorOptions | None = None
) -> TailoringResult:
    """Insert missing keywords as one line directly below the skills header.

    Without a skills header, a SKILLS section is placed before EDUCATION or
    appended. A skills header with no line break after it leaves the text
    untouched. At most `options.max_skills_added` keywords are inserted.
    """
    options = options or TailorOptions()
    to_add = find_missing_keywords(cv_text, keywords)[:options.max_skills_added]
    return _insert_skills_line(normalize_newlines(cv_text), cv_text, to_add)


def tailor_sections(
    cv_text: str, keywords: list[str], options: TailorOptions | None = None
) -> TailoringResult:
    """Weave missing keywords into bullets and the skills list, then reassemble.

    Only keywords absent from the whole CV are used, so running this again
    on its own output injects nothing.
    """
    missing = find_missing_keywords(cv_text, keywords)
    if not missing:
        return _unchanged(cv_text)

    text = normalize_newlines(cv_text)
    parsed = parse_sections(text)
    if parsed.is_empty:
        # Uncapped, so a second pass over the output finds nothing missing
        logger.info("No recognizable sections; adding a skills line instead")
        return _insert_skills_line(text, cv_text, missing)

    experience, exp_injected = inject_bullets(parsed.experience, missing)
    skills, skills_added = consolidate_skills_detailed(parsed.skills, missing)

    body = assemble_document(parsed.model_copy(update={"experience": experience, "skills": skills}))
    preamble = leading_text(text)
    tailored = f"{preamble}\n\n{body}" if preamble else body

    seen = {kw.lower() for kw in exp_injected}
    injected = exp_injected + [kw for kw in skills_added if kw.lower() not in seen]

    return TailoringResult(
        tailored_text=tailored,
        original_text=cv_text,
        injected_keywords=injected,
        stats=TailoringStats(
            total=len(injected),
            experience=len(exp_injected),
            skills=len(skills_added),
        ),
    )


def tailor_fallback(
    cv_text: str, keyword_set: KeywordSet, options: TailorOptions | None = None
) -> TailoringResult:
    options = options or TailorOptions()
    if options.strategy == "anchor":
        return tailor_skills_anchor(cv_text, keyword_set.terms, options)
    return tailor_sections(cv_text, keyword_set.terms, options)


def _coerce_result(raw: object, cv_text: str) -> TailoringResult:
    if isinstance(raw, TailoringResult):
        result = raw
    elif isinstance(raw, dict):
        result = TailoringResult.model_validate(raw)
    else:
        raise TypeError(f"Tailorer returned {type(raw).__name__}, expected TailoringResult")
    if not result.original_text:
        result = result.model_copy(update={"original_text": cv_text})
    return result


class TailoringEngine:
    """Runs the registered tailorer, or the internal strategies, with timing."""

    def __init__(
        self,
        capabilities: CapabilityRegistry | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.capabilities = capabilities or CapabilityRegistry()
        self.clock = clock or MonotonicClock()

    async def tailor(
        self,
        cv_text: str | None,
        keyword_set: KeywordSet,
        options: TailorOptions | None = None,
    ) -> TailoringResult:
        if not cv_text or not keyword_set.total:
            return _unchanged(cv_text or "")

        options = options or TailorOptions()
        start = self.clock.now_ms()
        result = await self._tailor_with_collaborator(cv_text, keyword_set, options)
        if result is None:
            result = tailor_fallback(cv_text, keyword_set, options)

        timing = self.clock.now_ms() - start
        logger.info(
            "CV tailored in %.0fms (target: %.0fms), %d keywords injected",
            timing, TIMING_TARGETS["tailoring"], result.stats.total,
        )
        return result.model_copy(update={"timing_ms": timing})

    async def _tailor_with_collaborator(
        self, cv_text: str, keyword_set: KeywordSet, options: TailorOptions
    ) -> TailoringResult | None:
        if not self.capabilities.is_registered("tailorer"):
            return None
        try:
            tailorer = self.capabilities.get("tailorer")
            raw = tailorer.tailor(cv_text, keyword_set, options)
            if inspect.isawaitable(raw):
                raw = await raw
            return _coerce_result(raw, cv_text)
        except Exception as e:
            logger.warning("Tailorer failed, falling back to internal strategy: %s", e)
            return None
