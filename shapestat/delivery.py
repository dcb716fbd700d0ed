"""
Result Delivery - Synchronous and deferred stats dispatch.

Threading Model:
- Synchronous path: aggregation and handler run on the caller's thread,
  the handler finishes before compute_stats() returns
- Deferred path:
  1. Caller thread snapshots the registry
  2. Worker thread (ThreadPoolExecutor) runs the aggregation
  3. Worker posts the handler call to a DeliveryContext
  4. The context runs it (inline on the worker, or when its owner drains)

The handler is never invoked from inside compute_stats_async(), only ever
receives a complete ShapeStats, and runs exactly once per dispatch.
"""

import functools
import queue
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol, Tuple

from shapestat.analytics import ShapeStats, StatsAggregator
from shapestat.geometry import Shape
from shapestat.logging import StructuredLogger, LogEvent
from shapestat.registry import ShapeRegistry

StatsHandler = Callable[[ShapeStats], None]


class DeliveryContext(Protocol):
    """Execution context that result handlers are marshaled onto."""

    def post(self, callback: Callable[[], None]) -> None:
        ...


class InlineContext:
    """Runs callbacks immediately on whichever thread posts them."""

    def post(self, callback: Callable[[], None]) -> None:
        callback()


class QueueContext:
    """
    Foreground context backed by a thread-safe queue.

    Workers post callbacks; the owning (main) thread runs them when it
    calls run_pending() or run_next().

    Usage:
        foreground = QueueContext()
        dispatcher = StatsDispatcher(context=foreground)
        dispatcher.compute_stats_async(registry, on_stats)
        ...
        foreground.run_next(timeout=1.0)   # on_stats runs here
    """

    def __init__(self):
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def post(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def run_next(self, timeout: Optional[float] = None) -> bool:
        """
        Block until one callback is available and run it.

        Returns:
            True if a callback ran, False on timeout
        """
        try:
            callback = self._queue.get(timeout=timeout)
        except queue.Empty:
            return False
        callback()
        return True

    def run_pending(self) -> int:
        """Run every callback queued so far without blocking. Returns the count."""
        ran = 0
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1


class StatsDispatcher:
    """
    Runs aggregations and delivers results to handlers.

    Usage:
        with StatsDispatcher(aggregator=StatsAggregator(observer=sink)) as dispatcher:
            stats = dispatcher.compute_stats(registry, print_stats)
            future = dispatcher.compute_stats_async(registry, print_stats)
            future.result()
    """

    def __init__(
        self,
        aggregator: Optional[StatsAggregator] = None,
        executor: Optional[Executor] = None,
        context: Optional[DeliveryContext] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            aggregator: Aggregator to run (default: no observer)
            executor: Worker executor (default: private single-thread pool)
            context: Where deferred handlers run (default: InlineContext)
            logger: Structured logger (default: shapestat.delivery)
        """
        self.aggregator = aggregator or StatsAggregator()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="shapestat-stats"
        )
        self.context = context or InlineContext()
        self.logger = logger or StructuredLogger(component="delivery")

    def compute_stats(self, registry: ShapeRegistry, handler: StatsHandler) -> ShapeStats:
        """
        Aggregate on the calling thread and hand the result to handler.

        The handler has run by the time this returns.
        """
        stats = self.aggregator.compute(registry.shapes())
        self._deliver(handler, stats, deferred=False)
        return stats

    def compute_stats_async(
        self,
        registry: ShapeRegistry,
        handler: StatsHandler,
    ) -> "Future[ShapeStats]":
        """
        Aggregate on a worker and deliver through the delivery context.

        The registry is snapshotted before returning, so shapes added
        afterwards are not part of this result.

        Returns:
            Future resolving to the same ShapeStats the handler receives
        """
        snapshot = registry.shapes()
        future = self._executor.submit(self._run, snapshot, handler)

        self.logger.debug(
            event=LogEvent.STATS_DISPATCHED,
            message="Dispatched aggregation to worker",
            metadata={'shape_count': len(snapshot)}
        )
        return future

    def _run(self, snapshot: Tuple[Shape, ...], handler: StatsHandler) -> ShapeStats:
        try:
            stats = self.aggregator.compute(snapshot)
        except Exception as e:
            self.logger.error(
                event=LogEvent.DELIVERY_ERROR,
                message="Deferred aggregation failed",
                exc_info=e,
                metadata={'shape_count': len(snapshot)}
            )
            raise

        self.context.post(functools.partial(self._deliver, handler, stats, True))
        return stats

    def _deliver(self, handler: StatsHandler, stats: ShapeStats, deferred: bool) -> None:
        handler(stats)
        self.logger.debug(
            event=LogEvent.STATS_DELIVERED,
            message="Delivered stats to handler",
            metadata={'deferred': deferred, 'shape_count': stats.shape_count}
        )

    def shutdown(self, wait: bool = True) -> None:
        """Release the worker pool if this dispatcher created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "StatsDispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
