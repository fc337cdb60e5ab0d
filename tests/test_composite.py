import pytest

from coordmap.core.composite import CompositeRange
from coordmap.core.keys import Key1D, Key2D, Key3D, Key4D, ListKey
from coordmap.core.ranges import Direction, ListRange, RegularRange
from coordmap.errors import KeyFamilyError, RangeError, ShapeError


def test_from_shape_2d_visits_x_fastest() -> None:
    key_range = CompositeRange.from_shape((3, 2))
    assert key_range.key_type is Key2D
    assert key_range.shape == (3, 2)
    assert key_range.size == len(key_range) == 6
    assert list(key_range) == [
        Key2D(0, 0),
        Key2D(0, 1),
        Key2D(1, 0),
        Key2D(1, 1),
        Key2D(2, 0),
        Key2D(2, 1),
    ]


def test_from_shape_with_start() -> None:
    key_range = CompositeRange.from_shape((2, 2), start=(10, -1))
    assert key_range.first() == Key2D(10, -1)
    assert key_range.last() == Key2D(11, 0)
    assert CompositeRange.from_shape(3, start=5).last() == Key1D(7)


@pytest.mark.parametrize("shape", [(0,), (2, 0), (3, -1), (1, 1, 1, 1, 1), ()])
def test_from_shape_invalid(shape: tuple[int, ...]) -> None:
    with pytest.raises(ShapeError):
        CompositeRange.from_shape(shape)


def test_from_keys_descending_axes() -> None:
    key_range = CompositeRange.from_keys(Key2D(1, 1), Key2D(0, 0))
    assert [axis.direction for axis in key_range.axes] == [Direction.DOWN, Direction.DOWN]
    assert list(key_range) == [Key2D(1, 1), Key2D(1, 0), Key2D(0, 1), Key2D(0, 0)]


def test_from_keys_mixed_directions() -> None:
    key_range = CompositeRange.from_keys(Key2D(0, 2), Key2D(1, 0))
    assert list(key_range) == [
        Key2D(0, 2),
        Key2D(0, 1),
        Key2D(0, 0),
        Key2D(1, 2),
        Key2D(1, 1),
        Key2D(1, 0),
    ]


def test_from_keys_rejects_list_keys() -> None:
    with pytest.raises(TypeError):
        CompositeRange.from_keys(ListKey("a"), ListKey("b"))


def test_single_value_axes_contribute_one_step() -> None:
    key_range = CompositeRange.from_keys(Key3D(1, 0, 2), Key3D(1, 3, 2))
    assert key_range.shape == (1, 4, 1)
    assert list(key_range) == [Key3D(1, y, 2) for y in range(4)]


def test_odometer_carry_4d() -> None:
    key_range = CompositeRange.from_shape((2, 2, 2, 2))
    assert key_range.next_key(Key4D(0, 0, 0, 0)) == Key4D(0, 0, 0, 1)
    assert key_range.next_key(Key4D(0, 0, 0, 1)) == Key4D(0, 0, 1, 0)
    assert key_range.next_key(Key4D(0, 1, 1, 1)) == Key4D(1, 0, 0, 0)
    assert not key_range.has_next(Key4D(1, 1, 1, 1))
    with pytest.raises(RangeError):
        key_range.next_key(Key4D(1, 1, 1, 1))
    assert len(list(key_range)) == 16


def test_index_matches_row_major_formula() -> None:
    key_range = CompositeRange.from_shape((2, 3, 4, 5))
    size_z, size_y, size_x = 3, 4, 5
    for offset, key in enumerate(key_range):
        expected = ((key.w * size_z + key.z) * size_y + key.y) * size_x + key.x
        assert key_range.index(key) == expected == offset
        assert key_range.at(offset) == key


def test_index_follows_iteration_order_for_descending_axes() -> None:
    key_range = CompositeRange.from_keys(Key2D(5, 2), Key2D(4, 0))
    assert [key_range.index(key) for key in key_range] == list(range(6))
    assert key_range.at(0) == Key2D(5, 2)


def test_index_out_of_range() -> None:
    key_range = CompositeRange.from_shape((2, 2))
    with pytest.raises(RangeError):
        key_range.index(Key2D(2, 0))
    with pytest.raises(RangeError):
        key_range.at(4)
    with pytest.raises(RangeError):
        key_range.at(-1)


def test_wrong_key_family() -> None:
    key_range = CompositeRange.from_shape((2, 2))
    with pytest.raises(KeyFamilyError):
        key_range.contains(Key1D(0))  # type: ignore[arg-type]
    with pytest.raises(KeyFamilyError):
        key_range.next_key(Key3D(0, 0, 0))  # type: ignore[arg-type]


def test_contains() -> None:
    key_range = CompositeRange.from_shape((2, 3), start=(1, 1))
    assert key_range.contains(Key2D(2, 3))
    assert Key2D(1, 1) in key_range
    assert not key_range.contains(Key2D(0, 1))
    assert not key_range.contains(Key2D(1, 4))


def test_sub_range() -> None:
    parent = CompositeRange.from_shape((4, 3))
    child = parent.sub_range(Key2D(0, 0), Key2D(1, 1))
    assert child.shape == (2, 2)
    assert list(child) == [Key2D(0, 0), Key2D(0, 1), Key2D(1, 0), Key2D(1, 1)]

    reversed_child = parent.sub_range(Key2D(1, 1), Key2D(0, 0))
    assert list(reversed_child) == [Key2D(1, 1), Key2D(1, 0), Key2D(0, 1), Key2D(0, 0)]

    # tuples are accepted as bounds
    assert parent.sub_range((2, 1), (3, 1)).shape == (2, 1)


def test_sub_range_reverses_one_axis_only() -> None:
    parent = CompositeRange.from_shape((2, 3))
    child = parent.sub_range(Key2D(0, 2), Key2D(1, 0))
    assert [axis.direction for axis in child.axes] == [Direction.UP, Direction.DOWN]


def test_sub_range_outside_parent() -> None:
    parent = CompositeRange.from_shape((4, 3))
    with pytest.raises(RangeError):
        parent.sub_range(Key2D(0, 0), Key2D(4, 0))
    with pytest.raises(KeyFamilyError):
        parent.sub_range(Key1D(0), Key1D(1))  # type: ignore[arg-type]


def test_list_axis() -> None:
    key_range = CompositeRange((ListRange(["a", "b", "c"]),))
    assert key_range.key_type is ListKey
    assert list(key_range) == [ListKey("a"), ListKey("b"), ListKey("c")]
    assert key_range.index(ListKey("c")) == 2
    child = key_range.sub_range(ListKey("b"), ListKey("c"))
    assert list(child) == [ListKey("b"), ListKey("c")]


def test_list_axis_combined_with_regular_axis() -> None:
    key_range = CompositeRange((RegularRange(0, 1), ListRange([7, 3])))
    assert key_range.key_type is Key2D
    assert list(key_range) == [Key2D(0, 7), Key2D(0, 3), Key2D(1, 7), Key2D(1, 3)]
    assert key_range.index(Key2D(1, 7)) == 2


def test_axis_access() -> None:
    key_range = CompositeRange.from_shape((4, 3, 2))
    assert key_range.size_of("z") == 4
    assert key_range.size_of("y") == 3
    assert key_range.size_of("x") == 2
    with pytest.raises(AttributeError):
        key_range.axis("w")


def test_invalid_composition() -> None:
    with pytest.raises(ShapeError):
        CompositeRange(())
    with pytest.raises(ShapeError):
        CompositeRange((RegularRange(0, 1),), Key2D)
    with pytest.raises(TypeError):
        CompositeRange((CompositeRange.from_shape(2),))


def test_copy() -> None:
    key_range = CompositeRange.from_keys(Key2D(1, 1), Key2D(0, 0))
    clone = key_range.copy()
    assert clone == key_range
    assert clone is not key_range
    assert list(clone) == list(key_range)
