import threading

import pytest

from shapestat import Line, ShapeRegistry, Square


def test_registry_preserves_insertion_order(lab_shapes):
    registry = ShapeRegistry()
    for shape in lab_shapes:
        registry.add_shape(shape)

    assert registry.shapes() == tuple(lab_shapes)
    assert len(registry) == 5
    assert list(registry) == lab_shapes


def test_registry_seeded_from_iterable(lab_shapes):
    assert ShapeRegistry(lab_shapes).shapes() == tuple(lab_shapes)
    assert len(ShapeRegistry()) == 0


def test_snapshot_is_not_affected_by_later_adds():
    registry = ShapeRegistry([Square(side=1)])
    snapshot = registry.shapes()

    registry.add_shape(Square(side=2))

    assert len(snapshot) == 1
    assert len(registry) == 2


def test_registry_rejects_non_shapes():
    registry = ShapeRegistry()
    with pytest.raises(TypeError):
        registry.add_shape({"type": "square", "side": 4})
    assert len(registry) == 0


def test_concurrent_adds_are_all_kept():
    registry = ShapeRegistry()

    def add_many(offset):
        for i in range(100):
            registry.add_shape(Line.from_length(offset + i + 1))

    threads = [threading.Thread(target=add_many, args=(n * 1000,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == 400
