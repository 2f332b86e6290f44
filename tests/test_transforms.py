"""Test the propagation of transforms through the stacking tree."""

import pytest

from folio.transforms import (
    local_transform, map_point, propagate_transforms, transformed_bounds)

from .testing_utils import assert_no_logs, find_box, render


def _render(html, media_type='print'):
    return render(
        '<style>@page { size: 100px } div { width: 20px; height: 10px }'
        f'</style>{html}', media_type=media_type)


@assert_no_logs
@pytest.mark.parametrize('media_type', ('print', 'screen'))
@pytest.mark.parametrize('transform, bounds', (
    ('translate(5px, 30px)', (5, 30, 25, 40)),
    ('translate(50%, 100%)', (10, 10, 30, 20)),
    ('translateX(-5px)', (-5, 0, 15, 10)),
    ('scale(2)', (-10, -5, 30, 15)),
    ('rotate(90deg)', (5, -5, 15, 15)),
    ('translate(10px) rotate(90deg)', (15, -5, 25, 15)),
    ('matrix(1, 0, 0, 1, 3, 4)', (3, 4, 23, 14)),
))
def test_transformed_bounds(media_type, transform, bounds):
    document = _render(
        f'<div id=a style="transform: {transform}"></div>', media_type)
    layer = find_box(document.root_box, 'a').layer
    assert layer.is_stacking_context
    assert transformed_bounds(layer) == pytest.approx(bounds)


@assert_no_logs
def test_transform_origin():
    document = _render(
        '<div id=a style="transform: scale(2); transform-origin: 0 0"></div>')
    layer = find_box(document.root_box, 'a').layer
    assert transformed_bounds(layer) == pytest.approx((0, 0, 40, 20))


@assert_no_logs
def test_no_transform():
    document = _render('<div id=a style="position: relative"></div>')
    layer = find_box(document.root_box, 'a').layer
    assert layer.transform is None
    assert document.root_layer.transform is None
    assert map_point(layer, 3, 4) == (3, 4)
    assert transformed_bounds(layer) == (0, 0, 20, 10)


@assert_no_logs
def test_nested_transforms():
    document = _render('''
      <div id=outer style="transform: translate(10px, 0)">
        <div id=inner style="width: 10px; transform: scale(2)">
          <div id=child style="position: relative"></div>
        </div>
      </div>''')
    root = document.root_box
    outer = find_box(root, 'outer').layer
    inner = find_box(root, 'inner').layer
    child = find_box(root, 'child').layer
    assert outer.transform.values == pytest.approx((1, 0, 0, 1, 10, 0))
    assert map_point(inner, 0, 0) == pytest.approx((5, -5))
    assert transformed_bounds(inner) == pytest.approx((5, -5, 25, 15))
    # Nodes without transforms inherit the transform of their ancestors.
    assert child.transform is inner.transform


@assert_no_logs
def test_local_transform():
    document = _render('<div id=a style="transform: skewX(45deg)"></div>')
    box = find_box(document.root_box, 'a')
    matrix = local_transform(box)
    # The center of the box is the transform origin.
    assert matrix.transform_point(10, 5) == pytest.approx((10, 5))
    assert matrix.transform_point(10, 0) == pytest.approx((5, 0))


@assert_no_logs
def test_pages_for_transformed_box():
    document = _render('''
      <div id=spacer style="height: 150px"></div>
      <div id=a style="transform: translateY(-100px)">
        <div id=child style="height: 5px"></div>
      </div>
      <div id=b></div>''')
    root = document.root_box
    first, second = document.pages
    assert document.pages_for_box(find_box(root, 'spacer')) == [first, second]
    assert document.pages_for_box(find_box(root, 'a')) == [first]
    assert document.pages_for_box(find_box(root, 'child')) == [first]
    assert document.pages_for_box(find_box(root, 'b')) == [second]


@assert_no_logs
def test_propagate_twice():
    document = _render('''
      <div id=a style="transform: rotate(30deg)">
        <div id=b style="transform: translate(1px, 2px) scale(3)"></div>
      </div>''')
    layers = document.paint_order()
    matrices = [layer.transform for layer in layers]
    propagate_transforms(document.root_layer)
    assert [layer.transform for layer in layers] == matrices
