"""Résumé section segmentation and plain-text reassembly."""

import logging
import re

from models.schemas.parsed_resume import CANONICAL_SECTIONS, ParsedResume
from services.vocabulary import SECTION_HEADERS, SECTION_TITLES

logger = logging.getLogger(__name__)


def _header_line(section_names: tuple[str, ...] | list[str]) -> str:
    """Regex for a header line: a spelling alone on its line, or followed by ':'."""
    spellings = "|".join(p for name in section_names for p in SECTION_HEADERS[name])
    return rf"^[ \t]*(?:{spellings})[ \t]*(?::|$)"


def _compile_section_patterns() -> dict[str, re.Pattern]:
    """One pattern per section, ending at the next *later* canonical header.

    Each section is searched independently, so headers out of canonical
    order can yield overlapping or truncated captures.
    """
    compiled: dict[str, re.Pattern] = {}
    for i, section in enumerate(CANONICAL_SECTIONS):
        later = CANONICAL_SECTIONS[i + 1:]
        stop = rf"(?={_header_line(later)}|\Z)" if later else r"\Z"
        compiled[section] = re.compile(
            rf"{_header_line([section])}(.*?){stop}",
            re.IGNORECASE | re.MULTILINE | re.DOTALL,
        )
    return compiled


_COMPILED: dict[str, re.Pattern] = _compile_section_patterns()

# Anchors used by the fast skills-line strategy
SKILLS_HEADER_RE = re.compile(_header_line(["skills"]), re.IGNORECASE | re.MULTILINE)
EDUCATION_HEADER_RE = re.compile(_header_line(["education"]), re.IGNORECASE | re.MULTILINE)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and bare CR line endings to the LF the header patterns expect."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_sections(text: str) -> ParsedResume:
    """Split resume text into the five canonical sections.

    Missing sections come back as "" rather than None.
    """
    if not text:
        return ParsedResume()
    text = normalize_newlines(text)

    bodies: dict[str, str] = {}
    for section, pattern in _COMPILED.items():
        match = pattern.search(text)
        if match:
            bodies[section] = match.group(1).strip()

    parsed = ParsedResume(**bodies)
    logger.debug("Parsed sections: %s", parsed.sections_found)
    return parsed


def leading_text(text: str) -> str:
    """Text above the first recognized header (name, contact lines)."""
    if not text:
        return ""
    text = normalize_newlines(text)
    starts = [m.start() for m in (p.search(text) for p in _COMPILED.values()) if m]
    if not starts:
        return ""
    return text[:min(starts)].strip()


def assemble_document(parsed: ParsedResume) -> str:
    """Serialize sections in canonical order, each under its uppercase header.

    Empty sections are skipped; sections are separated by one blank line.
    """
    blocks = [
        f"{SECTION_TITLES[name]}\n{body.strip()}"
        for name, body in parsed.sections()
        if body.strip()
    ]
    return "\n\n".join(blocks)
