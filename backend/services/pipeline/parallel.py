"""Concurrent fan-out of independent pipeline tasks with isolated failures."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from models.schemas.pipeline_result import TaskResult

logger = logging.getLogger(__name__)

Task = tuple[str, Callable[[], Awaitable[Any]]]


async def _run_one(name: str, fn: Callable[[], Awaitable[Any]]) -> TaskResult:
    try:
        return TaskResult(name=name, success=True, result=await fn())
    except Exception as e:
        logger.error("Task %s failed: %s", name or "<unnamed>", e)
        return TaskResult(name=name, success=False, error=str(e) or type(e).__name__)


async def run_parallel(tasks: list[Task]) -> list[TaskResult]:
    """Run (name, coroutine factory) pairs concurrently.

    Results come back in input order. A failing task is reported in its own
    TaskResult and never cancels its siblings.
    """
    if not tasks:
        return []
    return list(await asyncio.gather(*(_run_one(name, fn) for name, fn in tasks)))
