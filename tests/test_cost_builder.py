import numpy as np
import pytest

from cost_builder import build_cost_matrix, pairwise_costs, seam_cost
from data_structures import Image, Pixel
from exceptions import InvalidInputError


def make_example_images():
    # A: (0,0,0) | (10,10,10)    B: (50,50,50) | (5,5,5)
    a = Image.from_rows([[(0, 0, 0), (10, 10, 10)]])
    b = Image.from_rows([[(50, 50, 50), (5, 5, 5)]])
    return [a, b]


def test_example_costs_are_directed():
    cost = build_cost_matrix(make_example_images())
    assert cost.size == 3
    assert cost[1, 2] == 120
    assert cost[2, 1] == 15


def test_depot_row_and_column_are_zero():
    rng = np.random.default_rng(7)
    images = [Image(rng.integers(0, 256, size=(4, 3, 3))) for _ in range(5)]
    cost = build_cost_matrix(images)
    assert (cost.values[0, :] == 0).all()
    assert (cost.values[:, 0] == 0).all()
    assert (cost.values >= 0).all()


def test_matrix_matches_seam_cost_for_every_pair():
    rng = np.random.default_rng(11)
    images = [Image(rng.integers(0, 256, size=(3, 4, 3))) for _ in range(4)]
    cost = build_cost_matrix(images)
    for i in range(1, 5):
        for j in range(1, 5):
            if i != j:
                assert cost[i, j] == seam_cost(images[i - 1], images[j - 1])


def test_multi_row_sum():
    top = [(1, 2, 3), (100, 0, 0)]
    bottom = [(4, 5, 6), (0, 200, 0)]
    a = Image.from_rows([top, bottom])
    b = Image.from_rows([[(90, 0, 0), (0, 0, 0)], [(0, 190, 5), (0, 0, 0)]])
    cost = build_cost_matrix([a, b])
    # rows: |100-90| + 0 + 0 = 10 ; 0 + |200-190| + |0-5| = 15
    assert cost[1, 2] == 25
    # b right edge is black: 1+2+3 + 4+5+6
    assert cost[2, 1] == 21


def test_deterministic_and_read_only():
    images = make_example_images()
    first = build_cost_matrix(images)
    second = build_cost_matrix(images)
    assert np.array_equal(first.values, second.values)
    with pytest.raises(ValueError):
        first.values[1, 2] = 0


def test_single_image():
    cost = build_cost_matrix([Image.from_rows([[(1, 1, 1)]])])
    assert cost.values.tolist() == [[0, 0], [0, 0]]


def test_no_images_rejected():
    with pytest.raises(InvalidInputError):
        build_cost_matrix([])


def test_dimension_mismatch_rejected():
    a = Image.from_rows([[(0, 0, 0), (0, 0, 0)]])
    b = Image.from_rows([[(0, 0, 0)], [(0, 0, 0)]])
    with pytest.raises(InvalidInputError):
        build_cost_matrix([a, b])


def test_empty_and_bad_images_rejected():
    with pytest.raises(InvalidInputError):
        Image.from_rows([])
    with pytest.raises(InvalidInputError):
        Image.from_rows([[]])
    with pytest.raises(InvalidInputError):
        Image.from_rows([[(0, 0, 0)], [(0, 0, 0), (1, 1, 1)]])
    with pytest.raises(InvalidInputError):
        Image.from_rows([[(0, 0, 256)]])


def test_pixel_access():
    img = make_example_images()[1]
    assert img.pixel(0, 0) == Pixel(50, 50, 50)
    assert img.pixel(0, 1).b == 5
    assert img.shape == (1, 2)


def test_pairwise_costs_lists_both_directions():
    cost = build_cost_matrix(make_example_images())
    assert list(pairwise_costs(cost)) == [(1, 2, 120, 15)]


def test_float_pixels_rejected():
    with pytest.raises(InvalidInputError):
        Image(np.full((1, 1, 3), 1.7))
    with pytest.raises(InvalidInputError):
        Image.from_rows([[(1.5, 0, 0)]])
