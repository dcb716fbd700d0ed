"""
Shape Statistics Module
=======================

Single-pass reduction of a shape snapshot to named extrema.

Design:
- Immutable snapshots (ShapeStats, SkippedShape, AreaReport)
- One left-to-right scan, all extrema updated together
- Strict comparisons: the first-seen shape wins every tie
- Evaluation errors are isolated per shape (skip-with-report)
- Observer is borrowed, never owned
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Protocol, Tuple

from shapestat.geometry import Shape, ShapeError
from shapestat.logging import StructuredLogger, LogEvent


class ShapeObserver(Protocol):
    """Notification sink for the largest-area shape of each aggregation."""

    def on_largest_shape_processed(self, description: Optional[str]) -> None:
        """Called once per aggregation (None when no shape had a valid area)."""
        ...


@dataclass(frozen=True)
class SkippedShape:
    """
    A shape excluded from the area extrema.

    Attributes:
        index: Position in the scanned snapshot
        description: Rendered description (descriptions never fail)
        error_type: Exception class name (e.g. "NegativeAreaError")
        reason: Exception message
    """

    index: int
    description: str
    error_type: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'index': self.index,
            'description': self.description,
            'error_type': self.error_type,
            'reason': self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SkippedShape':
        return cls(
            index=int(data['index']),
            description=str(data['description']),
            error_type=str(data['error_type']),
            reason=str(data['reason']),
        )


@dataclass(frozen=True)
class ShapeStats:
    """
    Immutable result of one aggregation pass.

    Every extremum is None when no shape qualified (empty snapshot, or
    every shape skipped for the area extrema).
    """

    longest_description: Optional[str] = None
    shortest_description: Optional[str] = None
    largest_area_description: Optional[str] = None
    smallest_area_description: Optional[str] = None
    longest_perimeter_description: Optional[str] = None
    shortest_perimeter_description: Optional[str] = None
    shape_count: int = 0
    skipped: Tuple[SkippedShape, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.shape_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'longest_description': self.longest_description,
            'shortest_description': self.shortest_description,
            'largest_area_description': self.largest_area_description,
            'smallest_area_description': self.smallest_area_description,
            'longest_perimeter_description': self.longest_perimeter_description,
            'shortest_perimeter_description': self.shortest_perimeter_description,
            'shape_count': self.shape_count,
            'skipped': [skip.to_dict() for skip in self.skipped],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShapeStats':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                longest_description=data.get('longest_description'),
                shortest_description=data.get('shortest_description'),
                largest_area_description=data.get('largest_area_description'),
                smallest_area_description=data.get('smallest_area_description'),
                longest_perimeter_description=data.get('longest_perimeter_description'),
                shortest_perimeter_description=data.get('shortest_perimeter_description'),
                shape_count=int(data['shape_count']),
                skipped=tuple(SkippedShape.from_dict(s) for s in data.get('skipped', [])),
            )
        except KeyError as e:
            raise ValueError(f"Missing required ShapeStats field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid ShapeStats data: {e}")


@dataclass(frozen=True)
class AreaReport:
    """Outcome of evaluating one shape's area."""

    description: str
    area: Optional[float] = None
    error: Optional[ShapeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class _Extremum:
    """Running max/min where the first-seen candidate keeps ties. NaN keys are ignored."""

    def __init__(self, prefer_larger: bool):
        self._prefer_larger = prefer_larger
        self.key: Optional[float] = None
        self.description: Optional[str] = None

    def offer(self, key: float, description: str) -> None:
        if math.isnan(key):
            return
        if self.key is None:
            better = True
        elif self._prefer_larger:
            better = key > self.key
        else:
            better = key < self.key

        if better:
            self.key = key
            self.description = description


class StatsAggregator:
    """
    Reduces shapes to ShapeStats in one scan.

    The aggregator never mutates shapes and holds no per-pass state, so
    compute() is idempotent over an unchanged snapshot.

    Usage:
        aggregator = StatsAggregator(observer=my_sink)
        stats = aggregator.compute(registry.shapes())
        stats.largest_area_description  # "Rhombus 'Rh1' area: 20.0"
    """

    def __init__(
        self,
        observer: Optional[ShapeObserver] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            observer: Optional largest-shape sink (borrowed)
            logger: Structured logger (default: shapestat.analytics)
        """
        self.observer = observer
        self.logger = logger or StructuredLogger(component="analytics")

    @staticmethod
    def area_report(shape: Shape) -> AreaReport:
        """Evaluate one shape's area, capturing evaluation errors."""
        try:
            return AreaReport(description=shape.description, area=shape.area())
        except ShapeError as e:
            return AreaReport(description=shape.description, error=e)

    def compute(self, shapes: Iterable[Shape]) -> ShapeStats:
        """
        Scan shapes once and compute every extremum.

        Args:
            shapes: Snapshot in insertion order

        Returns:
            ShapeStats (all extrema None for an empty snapshot)
        """
        longest = _Extremum(prefer_larger=True)
        shortest = _Extremum(prefer_larger=False)
        largest_area = _Extremum(prefer_larger=True)
        smallest_area = _Extremum(prefer_larger=False)
        longest_perimeter = _Extremum(prefer_larger=True)
        shortest_perimeter = _Extremum(prefer_larger=False)
        skipped = []
        count = 0

        for index, shape in enumerate(shapes):
            count += 1
            description = shape.description

            longest.offer(len(description), description)
            shortest.offer(len(description), description)

            perimeter = shape.perimeter()
            longest_perimeter.offer(perimeter, description)
            shortest_perimeter.offer(perimeter, description)

            report = self.area_report(shape)
            if not report.ok:
                skipped.append(SkippedShape(
                    index=index,
                    description=description,
                    error_type=type(report.error).__name__,
                    reason=str(report.error),
                ))
                self.logger.warning(
                    event=LogEvent.STATS_SHAPE_SKIPPED,
                    message="Shape excluded from area extrema",
                    metadata={
                        'index': index,
                        'kind': shape.kind.value,
                        'error_type': type(report.error).__name__,
                    }
                )
                continue

            largest_area.offer(report.area, description)
            smallest_area.offer(report.area, description)

        stats = ShapeStats(
            longest_description=longest.description,
            shortest_description=shortest.description,
            largest_area_description=largest_area.description,
            smallest_area_description=smallest_area.description,
            longest_perimeter_description=longest_perimeter.description,
            shortest_perimeter_description=shortest_perimeter.description,
            shape_count=count,
            skipped=tuple(skipped),
        )

        self.logger.info(
            event=LogEvent.STATS_COMPUTED,
            message=f"Computed stats for {count} shapes",
            metadata={'shape_count': count, 'skipped_count': len(skipped)}
        )

        self._notify(stats.largest_area_description)
        return stats

    def _notify(self, description: Optional[str]) -> None:
        if self.observer is None:
            return

        try:
            self.observer.on_largest_shape_processed(description)
        except Exception as e:
            self.logger.error(
                event=LogEvent.STATS_OBSERVER_FAILED,
                message="Largest-shape observer raised",
                exc_info=e,
                metadata={'description': description}
            )
