"""Background expiry of stale pick requests."""

import asyncio
from datetime import datetime

import logfire
from dishka import AsyncContainer

from pickme.domain.service import PickRequestService


async def sweep_once(container: AsyncContainer, now: datetime | None = None) -> int:
    """Run one expiry pass in its own request scope.

    The scope's session commits on exit, so each pass is independent.

    Returns:
        Number of pick requests moved to EXPIRED
    """
    async with container() as request_container:
        pick_request_service = await request_container.get(PickRequestService)
        return await pick_request_service.expire_sweep(now)


async def run_expiry_sweeper(container: AsyncContainer, interval_seconds: float) -> None:
    """Sweep forever until cancelled.

    A failing pass is logged and the loop carries on with the next tick.
    """
    logfire.info("Expiry sweeper started", interval_seconds=interval_seconds)
    while True:
        try:
            await sweep_once(container)
        except Exception as e:
            logfire.exception("Expiry sweep failed", error=str(e))
        await asyncio.sleep(interval_seconds)
