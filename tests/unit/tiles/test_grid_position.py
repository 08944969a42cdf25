from __future__ import annotations

import pytest

from core.models import Vec3
from core.tiles import calculate_grid_position, grid_size_for


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, 0), (1, 1), (2, 2), (4, 2), (5, 3), (9, 3), (10, 4)],
)
def test_grid_size_is_ceil_of_square_root(count: int, expected: int) -> None:
    assert grid_size_for(count) == expected


def test_index_three_of_five_lands_on_second_row_first_column() -> None:
    grid_size = grid_size_for(5)

    position = calculate_grid_position(3, grid_size, 2.5)

    assert grid_size == 3
    assert position == Vec3(-2.5, 0.0, 0.0)


def test_grid_is_centred_on_origin() -> None:
    corners = [calculate_grid_position(index, 3, 2.5) for index in (0, 2, 6, 8)]

    assert corners == [
        Vec3(-2.5, 0.0, -2.5),
        Vec3(2.5, 0.0, -2.5),
        Vec3(-2.5, 0.0, 2.5),
        Vec3(2.5, 0.0, 2.5),
    ]
    assert calculate_grid_position(4, 3, 2.5) == Vec3(0.0, 0.0, 0.0)


def test_single_tile_sits_at_origin() -> None:
    assert calculate_grid_position(0, 1, 2.5) == Vec3(0.0, 0.0, 0.0)


def test_position_is_a_pure_function_of_its_inputs() -> None:
    first = [calculate_grid_position(index, 4, 1.75) for index in range(16)]
    second = [calculate_grid_position(index, 4, 1.75) for index in range(16)]

    assert first == second
    assert len(set(first)) == 16


def test_non_positive_grid_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        calculate_grid_position(0, 0, 2.5)
