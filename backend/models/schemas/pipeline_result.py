"""Orchestrator output: one immutable record per pipeline invocation."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from models.schemas.candidate import CoverLetter
from models.schemas.keyword_set import KeywordSet
from models.schemas.tailoring_result import TailoringStats


class PipelinePhase(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    TAILORING = "tailoring"
    DONE = "done"
    FAILED = "failed"


class PipelineResult(BaseModel):
    """Success flag, keywords, flattened tailoring fields and timings.

    success=False is the only signal that callers should stop; every other
    outcome carries usable, if imperfect, output.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    error: str | None = None
    phase: PipelinePhase = PipelinePhase.IDLE
    keywords: KeywordSet = KeywordSet()
    tailored_text: str = ""
    original_text: str = ""
    injected_keywords: list[str] = []
    stats: TailoringStats = TailoringStats()
    timings: dict[str, float] = {}
    meets_target: bool = False
    # Candidate documents (filled when a profile / cover letter is supplied)
    document_text: str = ""
    cv_file_name: str = ""
    cover_letter: CoverLetter | None = None


class TaskResult(BaseModel):
    """Per-task outcome of run_parallel(); failures never affect siblings."""
    name: str = ""
    success: bool
    result: Any = None
    error: str | None = None
