"""Test 2D transformation matrices."""

from math import pi

import pytest

from folio.matrix import Matrix


def test_identity():
    assert Matrix().is_identity
    assert Matrix().values == (1, 0, 0, 1, 0, 0)
    assert not Matrix.translation(1, 0).is_identity


@pytest.mark.parametrize('matrix, point, expected', (
    (Matrix.translation(10, 20), (1, 2), (11, 22)),
    (Matrix.scaling(2), (1, 3), (2, 6)),
    (Matrix.scaling(2, 3), (1, 3), (2, 9)),
    (Matrix.scaling(2) @ Matrix.translation(10, 0), (1, 1), (12, 2)),
    (Matrix.translation(10, 0) @ Matrix.scaling(2), (1, 1), (22, 2)),
    (Matrix.rotation(pi / 2), (1, 0), (0, 1)),
    (Matrix.skewing(angle_x=pi / 4), (0, 10), (10, 10)),
    (Matrix.skewing(angle_y=pi / 4), (10, 0), (10, 10)),
))
def test_transform_point(matrix, point, expected):
    assert matrix.transform_point(*point) == pytest.approx(expected)


def test_invert():
    matrix = Matrix(2, 0, 0, 4, 10, 20)
    assert matrix.determinant == 8
    assert (matrix @ matrix.invert).values == pytest.approx(
        (1, 0, 0, 1, 0, 0))
    assert matrix.invert.transform_point(12, 24) == pytest.approx((1, 1))


def test_transform_rectangle():
    assert Matrix.translation(5, 5).transform_rectangle(0, 0, 10, 20) == (
        5, 5, 15, 25)
    assert Matrix.rotation(pi / 2).transform_rectangle(
        0, 0, 10, 20) == pytest.approx((-20, 0, 0, 10))
