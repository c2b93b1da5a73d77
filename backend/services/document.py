"""Candidate document text helpers: contact header, file names, cover letter."""

import re

from models.schemas.candidate import CandidateProfile, ContactBlock

DEFAULT_LOCATION = "Open to relocation"
RELOCATION_NOTE = "open to relocation"
DEFAULT_FIRST_NAME = "Applicant"

_FILE_SUFFIXES: dict[str, str] = {
    "cv": "CV",
    "cover_letter": "Cover_Letter",
}

_SALUTATION_PATTERNS: list[re.Pattern] = [
    re.compile(r"Dear\s+Hiring\s+Committee,?", re.IGNORECASE),
    re.compile(r"Dear\s+Sir/Madam,?", re.IGNORECASE),
    re.compile(r"To\s+Whom\s+It\s+May\s+Concern,?", re.IGNORECASE),
]
STANDARD_SALUTATION = "Dear Hiring Manager,"


def build_contact_block(candidate: CandidateProfile) -> ContactBlock:
    name = f"{candidate.first_name} {candidate.last_name}".strip()
    location = candidate.location or DEFAULT_LOCATION
    contact_parts = [candidate.phone, candidate.email, location, RELOCATION_NOTE]
    link_parts = [candidate.linkedin, candidate.github, candidate.portfolio]
    return ContactBlock(
        name=name,
        contact_line=" | ".join(p for p in contact_parts if p),
        links_line=" | ".join(p for p in link_parts if p),
    )


def render_contact_block(block: ContactBlock) -> str:
    """Uppercase name, contact line, links line; blank parts are dropped."""
    lines = [block.name.upper(), block.contact_line, block.links_line]
    return "\n".join(line for line in lines if line)


def with_contact_header(candidate: CandidateProfile | None, body: str) -> str:
    if candidate is None:
        return body
    header = render_contact_block(build_contact_block(candidate))
    if not header:
        return body
    return f"{header}\n\n{body}" if body else header


def document_file_name(candidate: CandidateProfile | None, kind: str = "cv") -> str:
    """'{First}_{Last}_CV.pdf' / '{First}_{Last}_Cover_Letter.pdf'."""
    if kind not in _FILE_SUFFIXES:
        raise ValueError(f"Unknown document kind: {kind}")
    first = (candidate.first_name.strip() if candidate else "") or DEFAULT_FIRST_NAME
    last = candidate.last_name.strip() if candidate else ""
    first = re.sub(r"\s+", "_", first)
    last = re.sub(r"\s+", "_", last)
    stem = f"{first}_{last}" if last else first
    return f"{stem}_{_FILE_SUFFIXES[kind]}.pdf"


def normalize_cover_letter(text: str) -> str:
    """Replace generic salutations with 'Dear Hiring Manager,'."""
    result = text or ""
    for pattern in _SALUTATION_PATTERNS:
        result = pattern.sub(STANDARD_SALUTATION, result)
    return result
