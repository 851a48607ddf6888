"""
Bounded dispatch of service operations.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from log_service.errors import ServiceBusyError

logger = logging.getLogger(__name__)


class BoundedDispatcher:
    """
    Fixed-size pool of operation slots with a bounded backlog.

    At most ``max_concurrent`` operations run at once and at most
    ``max_pending`` more wait for a slot. Anything beyond that is rejected
    with ServiceBusyError instead of queuing without limit.
    """

    def __init__(self, max_concurrent: int, max_pending: int):
        self.max_concurrent = max_concurrent
        self.max_pending = max_pending
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._admitted = 0

    @property
    def admitted(self) -> int:
        """Operations currently running or waiting."""
        return self._admitted

    @asynccontextmanager
    async def slot(self, operation: str) -> AsyncGenerator[None, None]:
        """Hold one slot for the duration of ``operation``."""
        if self._admitted >= self.max_concurrent + self.max_pending:
            logger.warning(f"Rejecting {operation}: {self._admitted} operations admitted")
            raise ServiceBusyError()

        self._admitted += 1
        try:
            async with self._semaphore:
                yield
        finally:
            self._admitted -= 1
