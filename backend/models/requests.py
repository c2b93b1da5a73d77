from pydantic import BaseModel, Field

from models.schemas.candidate import CandidateProfile, JobPosting
from models.schemas.tailoring_result import TailorOptions


class TailorRequest(BaseModel):
    resume_text: str = Field(..., description="Plain text resume content")
    job_description: str = Field(..., description="Job description text")
    job_title: str = ""
    company: str = ""
    candidate: CandidateProfile | None = None
    cover_letter: str | None = Field(default=None, max_length=20000)
    options: TailorOptions = TailorOptions()
    max_keywords: int | None = Field(default=None, ge=1, le=100)


class BatchTailorRequest(BaseModel):
    resume_text: str
    jobs: list[JobPosting] = Field(..., min_length=1)
    candidate: CandidateProfile | None = None
    options: TailorOptions = TailorOptions()
