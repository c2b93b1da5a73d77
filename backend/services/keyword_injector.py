"""Keyword injection into experience bullets and the skills list.

Bullets gain at most MAX_KEYWORDS_PER_BULLET terms per pass, woven in as a
trailing clause; each keyword is used by at most one bullet. The skills
section is rebuilt as a de-duplicated, comma-separated list.
"""

import logging
import re

from services.vocabulary import BULLET_GLYPHS, PROPER_NOUN_LOOKUP

logger = logging.getLogger(__name__)

MAX_KEYWORDS_PER_BULLET = 2
MIN_SKILL_CHARS = 2
MAX_SKILL_CHARS = 50

_GLYPHS = "".join(re.escape(g) for g in BULLET_GLYPHS)
# leading indent + glyph + spacing | content | trailing whitespace
_BULLET_RE = re.compile(rf"^(\s*[{_GLYPHS}]\s*)(.*?)(\s*)$")
_SKILL_GLYPH_RE = re.compile(rf"[{_GLYPHS}]")
_SKILL_SPLIT_RE = re.compile(r"[,\s]+")


def proper_case(keyword: str) -> str:
    """Canonical casing for known proper nouns ("aws" -> "AWS"), else lowercase."""
    lower = keyword.lower()
    return PROPER_NOUN_LOOKUP.get(lower, lower)


def is_bullet(line: str) -> bool:
    return line.strip().startswith(BULLET_GLYPHS)


def _dedupe(keywords: list[str]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for kw in keywords:
        kw = kw.strip()
        if kw and kw.lower() not in seen:
            seen.add(kw.lower())
            unique.append(kw)
    return unique


def _weave(content: str, additions: list[str]) -> str:
    """Append keywords as a trailing clause, keeping the sentence's period."""
    joined = " and ".join(additions)
    if content.endswith("."):
        return f"{content[:-1]}, leveraging {joined}."
    return f"{content} utilizing {joined}"


def inject_bullets(
    experience_text: str,
    keywords: list[str],
    per_bullet_cap: int = MAX_KEYWORDS_PER_BULLET,
) -> tuple[str, list[str]]:
    """Inject keywords into bullet lines; return (new text, injected in order).

    Non-bullet lines pass through untouched. For each bullet, keywords not
    yet consumed that already appear in it count against the cap; the rest
    of the cap is filled, in rank order, with consumed-once keywords the
    bullet does not already mention.
    """
    if not experience_text or not keywords:
        return experience_text, []

    ranked = _dedupe(keywords)
    consumed: set[str] = set()
    injected: list[str] = []
    out_lines: list[str] = []

    for line in experience_text.split("\n"):
        match = _BULLET_RE.match(line) if is_bullet(line) else None
        if match is None or not any(c.isalnum() for c in match.group(2)):
            out_lines.append(line)
            continue

        prefix, content, trailing = match.groups()
        content_lower = content.lower()
        remaining = [kw for kw in ranked if kw.lower() not in consumed]
        existing = sum(1 for kw in remaining if kw.lower() in content_lower)

        additions: list[str] = []
        if existing < per_bullet_cap:
            for kw in remaining:
                if len(additions) >= per_bullet_cap - existing:
                    break
                if kw.lower() in content_lower:
                    continue
                additions.append(kw)
                consumed.add(kw.lower())

        if additions:
            content = _weave(content, additions)
            injected.extend(additions)
        out_lines.append(f"{prefix}{content}{trailing}")

    logger.debug("Injected %d keywords into experience bullets", len(injected))
    return "\n".join(out_lines), injected


def inject_into_experience(experience_text: str, keywords: list[str]) -> str:
    """Experience text with missing keywords woven into its bullets."""
    text, _ = inject_bullets(experience_text, keywords)
    return text


def parse_skills(skills_text: str) -> dict[str, str]:
    """Existing skills keyed by lowercase form, first-seen casing kept.

    Bullet glyphs act as separators alongside commas and whitespace.
    """
    skills: dict[str, str] = {}
    if not skills_text:
        return skills
    cleaned = _SKILL_GLYPH_RE.sub(",", skills_text)
    for token in _SKILL_SPLIT_RE.split(cleaned):
        token = token.strip()
        if MIN_SKILL_CHARS <= len(token) <= MAX_SKILL_CHARS:
            skills.setdefault(token.lower(), token)
    return skills


def consolidate_skills_detailed(
    skills_text: str, keywords: list[str]
) -> tuple[str, list[str]]:
    """Return (comma-joined skills, keywords that were added)."""
    skills = parse_skills(skills_text)
    added: list[str] = []
    for kw in _dedupe(keywords):
        if kw.lower() in skills:
            continue
        skills[kw.lower()] = proper_case(kw)
        added.append(kw)
    return ", ".join(skills.values()), added


def consolidate_skills(skills_text: str, keywords: list[str]) -> str:
    """Skills list (insertion order) extended with every missing keyword."""
    text, _ = consolidate_skills_detailed(skills_text, keywords)
    return text
