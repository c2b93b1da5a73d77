"""Tailoring output: rewritten résumé text and what was injected."""

from typing import Literal

from pydantic import BaseModel, Field


class TailoringStats(BaseModel):
    total: int = 0
    experience: int = 0
    skills: int = 0


class TailorOptions(BaseModel):
    """Options forwarded to the internal tailorer or a registered one."""
    strategy: Literal["sections", "anchor"] = "sections"
    target_score: int = Field(default=95, ge=0, le=100)
    max_skills_added: int = Field(default=15, ge=1)


class TailoringResult(BaseModel):
    tailored_text: str = ""
    original_text: str = ""  # kept for diffing
    injected_keywords: list[str] = []
    stats: TailoringStats = TailoringStats()
    timing_ms: float = 0.0
