from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_pipeline
from config import settings
from models.requests import BatchTailorRequest, TailorRequest
from models.responses import BatchItem, BatchTailorResponse, CacheClearedResponse
from models.schemas.candidate import JobPosting
from models.schemas.pipeline_result import PipelineResult
from services.pipeline.orchestrator import TailoringPipeline

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _check_input_sizes(resume_text: str, job_descriptions: list[str]) -> None:
    if len(resume_text) > settings.max_resume_chars:
        raise HTTPException(status_code=400, detail=f"Resume too long (max {settings.max_resume_chars} chars)")
    if any(len(jd) > settings.max_job_description_chars for jd in job_descriptions):
        raise HTTPException(
            status_code=400,
            detail=f"Job description too long (max {settings.max_job_description_chars} chars)",
        )


@router.get("/health")
async def health(pipeline: TailoringPipeline = Depends(get_pipeline)):
    return {
        "status": "ok",
        "cached_keyword_sets": len(pipeline.cache),
        "reliable_extractor": pipeline.capabilities.is_registered("reliable_extractor"),
        "generic_extractor": pipeline.capabilities.is_registered("generic_extractor"),
        "tailorer": pipeline.capabilities.is_registered("tailorer"),
    }


@router.post("/tailor", response_model=PipelineResult)
@limiter.limit(settings.rate_limit)
async def tailor(
    request: Request,
    body: TailorRequest,
    pipeline: TailoringPipeline = Depends(get_pipeline),
):
    _check_input_sizes(body.resume_text, [body.job_description])

    job = JobPosting(title=body.job_title, company=body.company, description=body.job_description)
    return await pipeline.execute(
        job,
        body.resume_text,
        candidate=body.candidate,
        cover_letter=body.cover_letter,
        options=body.options,
        max_keywords=body.max_keywords,
    )


@router.post("/tailor/batch", response_model=BatchTailorResponse)
@limiter.limit(settings.rate_limit)
async def tailor_batch(
    request: Request,
    body: BatchTailorRequest,
    pipeline: TailoringPipeline = Depends(get_pipeline),
):
    if len(body.jobs) > settings.max_batch_jobs:
        raise HTTPException(status_code=400, detail=f"Too many jobs (max {settings.max_batch_jobs})")
    _check_input_sizes(body.resume_text, [job.description for job in body.jobs])

    task_results = await pipeline.execute_many(
        body.jobs, body.resume_text, candidate=body.candidate, options=body.options
    )
    items = [
        BatchItem(job=t.name, success=t.success, result=t.result, error=t.error)
        for t in task_results
    ]
    succeeded = sum(1 for item in items if item.success and item.result and item.result.success)
    return BatchTailorResponse(results=items, succeeded=succeeded, failed=len(items) - succeeded)


@router.delete("/cache", response_model=CacheClearedResponse)
async def clear_cache(pipeline: TailoringPipeline = Depends(get_pipeline)):
    cleared = len(pipeline.cache)
    pipeline.clear_cache()
    return CacheClearedResponse(cleared=cleared)
