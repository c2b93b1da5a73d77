from pydantic import BaseModel

from models.schemas.pipeline_result import PipelineResult


class BatchItem(BaseModel):
    job: str = ""
    success: bool = False
    result: PipelineResult | None = None
    error: str | None = None


class BatchTailorResponse(BaseModel):
    results: list[BatchItem] = []
    succeeded: int = 0
    failed: int = 0


class CacheClearedResponse(BaseModel):
    cleared: int = 0
