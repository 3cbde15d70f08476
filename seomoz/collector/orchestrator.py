"""
Bulk Query Orchestrator

Splits an arbitrarily long URL list into API-sized batches, runs them
concurrently and merges the results. A bulk call is all-or-nothing: if any
batch fails the first error observed is raised and every result is dropped.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from ..models import MAX_BATCH_URLS, URLMetrics

logger = logging.getLogger(__name__)

BatchFn = Callable[[List[str], int], Awaitable[Dict[str, URLMetrics]]]


def chunk_urls(urls: List[str], size: int) -> List[List[str]]:
    """Split *urls* into contiguous chunks of at most *size* items."""
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")
    return [urls[i:i + size] for i in range(0, len(urls), size)]


@dataclass
class ChunkOutcome:
    """What a chunk task hands back to the collector."""
    index: int
    metrics: Optional[Dict[str, URLMetrics]] = None
    error: Optional[BaseException] = None


class BulkQueryOrchestrator:
    """
    Fan-out/fan-in over a batch function.

    Each chunk runs in its own task and posts a ChunkOutcome to a queue. Only
    the collector loop in ``run`` touches the merged mapping and the
    first-error slot. Chunks are never cancelled because another one failed.

    Usage:
        orchestrator = BulkQueryOrchestrator(client.get_batch_url_metrics)
        metrics = await orchestrator.run(urls, DEFAULT_COLS)
    """

    def __init__(
        self,
        batch_fn: BatchFn,
        max_batch_urls: int = MAX_BATCH_URLS,
        max_concurrency: Optional[int] = None,
    ):
        """
        Args:
            batch_fn: Coroutine function executing one batch call
            max_batch_urls: URLs per chunk
            max_concurrency: Max chunks in flight, None for no limit
        """
        if max_batch_urls < 1:
            raise ValueError(f"max_batch_urls must be at least 1, got {max_batch_urls}")
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

        self.batch_fn = batch_fn
        self.max_batch_urls = max_batch_urls
        self.max_concurrency = max_concurrency

    async def run(self, urls: List[str], cols: int) -> Dict[str, URLMetrics]:
        """
        Query metrics for every URL in *urls*.

        Returns:
            Mapping of requested URL to its metrics

        Raises:
            The first chunk error observed, after all chunks have finished
        """
        chunks = chunk_urls(list(urls), self.max_batch_urls)
        if not chunks:
            return {}

        logger.debug(
            f"Bulk query: {len(urls)} URLs in {len(chunks)} batches "
            f"(max_concurrency={self.max_concurrency})"
        )

        queue: asyncio.Queue = asyncio.Queue()
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        tasks = [
            asyncio.create_task(self._run_chunk(index, chunk, cols, queue, semaphore))
            for index, chunk in enumerate(chunks)
        ]

        results: Dict[str, URLMetrics] = {}
        first_error: Optional[BaseException] = None
        first_failed_index = None
        failed = 0
        try:
            for _ in range(len(tasks)):
                outcome = await queue.get()
                if outcome.error is not None:
                    failed += 1
                    if first_error is None:
                        first_error = outcome.error
                        first_failed_index = outcome.index
                elif first_error is None:
                    results.update(outcome.metrics)
        except asyncio.CancelledError:
            # The bulk call itself was cancelled; don't leave chunks orphaned
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        await asyncio.gather(*tasks, return_exceptions=True)

        if first_error is not None:
            logger.debug(
                f"Bulk query failed: {failed}/{len(chunks)} batches errored, "
                f"first was batch {first_failed_index}: {first_error!r}"
            )
            raise first_error

        logger.debug(f"Bulk query complete: {len(results)} URLs")
        return results

    async def _run_chunk(
        self,
        index: int,
        chunk: List[str],
        cols: int,
        queue: asyncio.Queue,
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        """Execute one chunk and post its outcome."""
        try:
            if semaphore is None:
                metrics = await self.batch_fn(chunk, cols)
            else:
                async with semaphore:
                    metrics = await self.batch_fn(chunk, cols)
        except asyncio.CancelledError as e:
            # The collector waits for one outcome per chunk
            queue.put_nowait(ChunkOutcome(index=index, error=e))
            raise
        except Exception as e:
            # Handed to the collector, which re-raises it
            await queue.put(ChunkOutcome(index=index, error=e))
        else:
            await queue.put(ChunkOutcome(index=index, metrics=metrics))
