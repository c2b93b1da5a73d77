"""Shared dependencies for API routes."""

from fastapi import Request

from services.pipeline.orchestrator import TailoringPipeline


def get_pipeline(request: Request) -> TailoringPipeline:
    """The app-owned pipeline; its keyword cache persists across requests."""
    return request.app.state.pipeline
