"""
Shape Registry - Ordered, thread-safe shape ownership.

The registry owns an append-only sequence of shapes in insertion order.
Aggregation never reads the live list: it works on snapshots.

Thread Safety:
- Uses threading.Lock for appends
- Snapshot pattern for shapes() so scans never hold the lock
- Shapes are immutable (frozen dataclasses)
"""

import threading
from typing import Iterable, Iterator, List, Optional, Tuple

from shapestat.geometry import Shape, is_shape
from shapestat.logging import StructuredLogger, LogEvent


class ShapeRegistry:
    """
    Ordered collection of shapes.

    Thread Safety Guarantees:
    - add_shape(): Write operation (acquires lock)
    - shapes(), len(), iteration: Read snapshot (acquires lock briefly)

    Usage:
        registry = ShapeRegistry()
        registry.add_shape(Triangle(3, 4, 5, name="T1"))
        registry.add_shape(Square(4, name="S1"))

        for shape in registry.shapes():   # immutable snapshot
            print(shape.description)
    """

    def __init__(
        self,
        shapes: Optional[Iterable[Shape]] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize registry, optionally seeded with shapes.

        Args:
            shapes: Initial shapes, appended in iteration order
            logger: Structured logger (default: shapestat.registry)
        """
        self._shapes: List[Shape] = []
        self._lock = threading.Lock()
        self.logger = logger or StructuredLogger(component="registry")

        for shape in shapes or ():
            self.add_shape(shape)

    def add_shape(self, shape: Shape) -> None:
        """
        Append a shape to the end of the registry.

        Args:
            shape: Any constructed (hence already validated) shape variant

        Raises:
            TypeError: If shape is not a supported shape variant
        """
        if not is_shape(shape):
            raise TypeError(f"Expected a shape variant, got {type(shape).__name__}")

        with self._lock:
            self._shapes.append(shape)
            index = len(self._shapes) - 1

        self.logger.debug(
            event=LogEvent.SHAPE_ADDED,
            message="Added shape",
            metadata={'index': index, 'kind': shape.kind.value, 'name': shape.name}
        )

    def shapes(self) -> Tuple[Shape, ...]:
        """
        Get an immutable snapshot of the shapes in insertion order.

        Thread-safe: Acquires lock briefly.
        """
        with self._lock:
            return tuple(self._shapes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes())
