"""Section parser output: the five canonical résumé sections."""

from pydantic import BaseModel

# Canonical order; also the serialization order of the tailored document
CANONICAL_SECTIONS: tuple[str, ...] = (
    "summary",
    "experience",
    "skills",
    "education",
    "certifications",
)


class ParsedResume(BaseModel):
    """Section bodies keyed by canonical name. Missing sections are ""."""
    summary: str = ""
    experience: str = ""
    skills: str = ""
    education: str = ""
    certifications: str = ""

    def sections(self) -> list[tuple[str, str]]:
        return [(name, getattr(self, name)) for name in CANONICAL_SECTIONS]

    @property
    def sections_found(self) -> list[str]:
        return [name for name, body in self.sections() if body]

    @property
    def is_empty(self) -> bool:
        return not self.sections_found
