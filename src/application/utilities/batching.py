"""Bounded-concurrency batch processing with index-stable results.

One processor drives both tag extraction and catalog resolution: at most
``concurrency_limit`` calls are in flight, every item's result lands in the
slot of its original position, and a failing item never disturbs the others.

Clean Architecture compliant - no external dependencies, uses dependency injection.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from attrs import define, field, validators


class Logger(Protocol):
    """Protocol for logging."""

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message."""
        ...


@define(frozen=True, slots=True)
class ItemResult[R]:
    """Outcome of processing a single item.

    Exactly one of ``value`` or ``error`` is meaningful: ``error`` is set
    when the processing function raised.
    """

    index: int
    value: R | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Whether the item was processed without raising."""
        return self.error is None


@define(frozen=True, slots=True)
class BatchProcessor[T, R]:
    """Process items concurrently under a fixed in-flight cap.

    Attributes:
        concurrency_limit: Maximum number of concurrent processing calls
        logger_instance: Optional logger for failures and progress
    """

    concurrency_limit: int = field(default=5, validator=validators.gt(0))
    logger_instance: Logger | None = field(default=None)

    async def process(
        self,
        items: Sequence[T],
        process_func: Callable[[T], Awaitable[R]],
        on_item_done: Callable[[int, ItemResult[R]], None] | None = None,
    ) -> list[ItemResult[R]]:
        """Process items with bounded concurrency.

        Args:
            items: Items to process
            process_func: Async function that processes a single item
            on_item_done: Called in completion order as each item finishes

        Returns:
            One ItemResult per input item, in input order

        Note:
            Cancelling the awaiting task cancels every in-flight call and
            no result or callback is produced for a cancelled item.
        """
        if not items:
            return []

        semaphore = asyncio.Semaphore(self.concurrency_limit)
        slots: list[ItemResult[R] | None] = [None] * len(items)

        async def run(index: int, item: T) -> None:
            async with semaphore:
                try:
                    result = ItemResult(index=index, value=await process_func(item))
                except Exception as e:
                    if self.logger_instance:
                        self.logger_instance.warning(
                            "Item {} of {} failed: {}",
                            index + 1,
                            len(items),
                            e,
                            error_type=type(e).__name__,
                        )
                    result = ItemResult(index=index, error=e)

            slots[index] = result
            if on_item_done:
                on_item_done(index, result)

        if self.logger_instance:
            self.logger_instance.debug(
                f"Processing {len(items)} items",
                concurrency_limit=self.concurrency_limit,
            )

        # No return_exceptions: cancellation must propagate to every task
        await asyncio.gather(*(run(i, item) for i, item in enumerate(items)))

        return [slot for slot in slots if slot is not None]
