"""Pydantic contracts shared by the tailoring pipeline stages."""

from models.schemas.candidate import CandidateProfile, ContactBlock, CoverLetter, JobPosting
from models.schemas.keyword_set import Keyword, KeywordSet, KeywordTier
from models.schemas.parsed_resume import CANONICAL_SECTIONS, ParsedResume
from models.schemas.pipeline_result import PipelinePhase, PipelineResult, TaskResult
from models.schemas.tailoring_result import TailoringResult, TailoringStats, TailorOptions

__all__ = [
    "CANONICAL_SECTIONS",
    "CandidateProfile",
    "ContactBlock",
    "CoverLetter",
    "JobPosting",
    "Keyword",
    "KeywordSet",
    "KeywordTier",
    "ParsedResume",
    "PipelinePhase",
    "PipelineResult",
    "TaskResult",
    "TailoringResult",
    "TailoringStats",
    "TailorOptions",
]
