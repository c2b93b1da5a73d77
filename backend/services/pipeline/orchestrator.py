"""Pipeline orchestrator: keyword extraction followed by CV tailoring.

Flow:
    job description + base CV
      ├─ EXTRACTING: KeywordExtractionEngine.extract(job_text)  → KeywordSet
      │       (empty set → FAILED, the only stop signal)
      ├─ TAILORING:  TailoringEngine.tailor(cv, keywords)       → TailoringResult
      └─ DONE:       PipelineResult (+ contact header, file names, cover letter)

Rendering (≤800ms) and file attachment (≤200ms) happen downstream; their
budgets are listed in TIMING_TARGETS for reference only. All budgets are
advisory: overruns are logged, never cancelled.
"""

import logging

from models.schemas.candidate import CandidateProfile, CoverLetter, JobPosting
from models.schemas.keyword_set import KeywordSet
from models.schemas.pipeline_result import PipelinePhase, PipelineResult, TaskResult
from models.schemas.tailoring_result import TailoringResult, TailorOptions
from services.document import document_file_name, normalize_cover_letter, with_contact_header
from services.fingerprint_cache import FingerprintCache
from services.keyword_extractor import DEFAULT_MAX_KEYWORDS, KeywordExtractionEngine
from services.pipeline.capabilities import CapabilityRegistry
from services.pipeline.parallel import run_parallel
from services.pipeline.timing import TIMING_TARGETS, Clock, MonotonicClock, meets_target
from services.tailoring import TailoringEngine

logger = logging.getLogger(__name__)

NO_KEYWORDS_ERROR = "No keywords extracted"


def _transition(phase: PipelinePhase) -> PipelinePhase:
    logger.debug("Pipeline phase -> %s", phase.value)
    return phase


def _log_phase(phase: str, elapsed_ms: float) -> None:
    target = TIMING_TARGETS[phase]
    if not meets_target(phase, elapsed_ms):
        logger.warning("%s took %.0fms, over its %.0fms target", phase, elapsed_ms, target)
    else:
        logger.info("%s took %.0fms (target: %.0fms)", phase, elapsed_ms, target)


class TailoringPipeline:
    """Owns the keyword cache and collaborators for repeated submissions."""

    def __init__(
        self,
        cache: FingerprintCache | None = None,
        capabilities: CapabilityRegistry | None = None,
        clock: Clock | None = None,
        max_keywords: int = DEFAULT_MAX_KEYWORDS,
    ) -> None:
        self.cache = cache if cache is not None else FingerprintCache()
        self.capabilities = capabilities or CapabilityRegistry()
        self.clock = clock or MonotonicClock()
        self.max_keywords = max_keywords
        self.extraction = KeywordExtractionEngine(self.cache, self.capabilities, self.clock)
        self.tailoring = TailoringEngine(self.capabilities, self.clock)

    def clear_cache(self) -> None:
        self.cache.clear()

    async def execute(
        self,
        job: JobPosting | str,
        base_cv: str,
        candidate: CandidateProfile | None = None,
        cover_letter: str | None = None,
        options: TailorOptions | None = None,
        max_keywords: int | None = None,
    ) -> PipelineResult:
        """Run IDLE → EXTRACTING → TAILORING → DONE | FAILED for one posting."""
        if isinstance(job, str):
            job = JobPosting(description=job)
        base_cv = base_cv or ""
        start = self.clock.now_ms()
        timings: dict[str, float] = {}
        phase = _transition(PipelinePhase.IDLE)
        logger.info("Starting pipeline for: %s", job.title or "<untitled job>")

        # --- Phase 1: keyword extraction ---
        phase = _transition(PipelinePhase.EXTRACTING)
        try:
            keywords = await self.extraction.extract(
                job.description, max_keywords or self.max_keywords
            )
        except Exception:
            logger.exception("Keyword extraction raised; treating as empty")
            keywords = KeywordSet.empty()
        timings["extraction"] = keywords.timing_ms
        _log_phase("extraction", keywords.timing_ms)

        if not keywords.total:
            phase = _transition(PipelinePhase.FAILED)
            total = self.clock.now_ms() - start
            timings["total"] = total
            logger.warning("Pipeline %s: %s", phase.value, NO_KEYWORDS_ERROR)
            return PipelineResult(
                success=False,
                error=NO_KEYWORDS_ERROR,
                phase=phase,
                keywords=keywords,
                tailored_text=base_cv,
                original_text=base_cv,
                timings=timings,
                meets_target=meets_target("total", total),
            )

        # --- Phase 2: CV tailoring ---
        phase = _transition(PipelinePhase.TAILORING)
        try:
            tailored = await self.tailoring.tailor(base_cv, keywords, options)
        except Exception:
            logger.exception("Tailoring raised; keeping the original CV")
            tailored = TailoringResult(tailored_text=base_cv, original_text=base_cv)
        timings["tailoring"] = tailored.timing_ms
        _log_phase("tailoring", tailored.timing_ms)

        total = self.clock.now_ms() - start
        timings["total"] = total
        _log_phase("total", total)

        letter = None
        if cover_letter is not None:
            letter = CoverLetter(
                text=normalize_cover_letter(cover_letter),
                file_name=document_file_name(candidate, "cover_letter"),
            )

        phase = _transition(PipelinePhase.DONE)
        logger.info("Pipeline %s: %d keywords, %d injected", phase.value, keywords.total, tailored.stats.total)
        return PipelineResult(
            success=True,
            phase=phase,
            keywords=keywords,
            tailored_text=tailored.tailored_text,
            original_text=tailored.original_text or base_cv,
            injected_keywords=tailored.injected_keywords,
            stats=tailored.stats,
            timings=timings,
            meets_target=meets_target("total", total),
            document_text=with_contact_header(candidate, tailored.tailored_text),
            cv_file_name=document_file_name(candidate, "cv"),
            cover_letter=letter,
        )

    async def execute_many(
        self,
        jobs: list[JobPosting],
        base_cv: str,
        candidate: CandidateProfile | None = None,
        options: TailorOptions | None = None,
    ) -> list[TaskResult]:
        """Tailor one CV against several postings concurrently.

        Each posting gets its own TaskResult; only the keyword cache is shared.
        """
        tasks = [
            (
                job.title or f"job-{i}",
                lambda job=job: self.execute(job, base_cv, candidate=candidate, options=options),
            )
            for i, job in enumerate(jobs)
        ]
        return await run_parallel(tasks)
