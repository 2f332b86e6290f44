"""Test CSS stacking contexts."""

import pytest

from folio.stacking import AUTO, NEGATIVE, POSITIVE, ZERO

from .testing_utils import (
    assert_no_logs, find_box, layer_ids, parse, render)


@assert_no_logs
def test_composite_order():
    root = parse('''
      <style>div { position: relative }</style>
      <div id=a style="z-index: 1"></div>
      <div id=b style="z-index: -1"></div>
      <div id=c></div>
      <div id=d style="z-index: 0"></div>''')
    layer = root.layer
    assert layer_ids(layer.collect_layers(NEGATIVE)) == ['b']
    assert layer_ids(layer.collect_layers(ZERO)) == ['d']
    assert layer_ids(layer.collect_layers(POSITIVE)) == ['a']
    assert layer_ids(layer.collect_layers(AUTO)) == ['c']
    assert layer_ids(layer.composite_order()) == ['b', 'html', 'c', 'd', 'a']


@assert_no_logs
def test_sorted_layers_tree_order():
    root = parse('''
      <style>div { position: relative }</style>
      <div id=a style="z-index: 2"></div>
      <div id=b style="z-index: 1"></div>
      <div id=c style="z-index: 2"></div>
      <div id=d style="z-index: -3"></div>
      <div id=e style="z-index: -1"></div>
      <div id=f style="z-index: -3"></div>''')
    layer = root.layer
    assert layer_ids(layer.sorted_layers(POSITIVE)) == ['b', 'a', 'c']
    assert layer_ids(layer.sorted_layers(NEGATIVE)) == ['d', 'f', 'e']


@assert_no_logs
def test_nested_contexts():
    root = parse('''
      <div id=outer style="position: relative">
        <div id=inner style="position: relative; z-index: 2"></div>
      </div>
      <div id=context style="position: relative; z-index: 1">
        <div id=nested style="position: relative; z-index: 5"></div>
      </div>''')
    layer = root.layer
    outer = find_box(root, 'outer').layer
    context = find_box(root, 'context').layer
    assert not outer.is_stacking_context
    assert context.is_stacking_context
    assert layer_ids(outer.children) == ['inner']
    assert layer_ids(layer.collect_layers(POSITIVE)) == ['inner', 'context']
    assert layer_ids(layer.composite_order()) == [
        'html', 'outer', 'context', 'inner']
    assert layer_ids(layer.paint_order()) == [
        'html', 'outer', 'context', 'nested', 'inner']


@assert_no_logs
@pytest.mark.parametrize('style, has_layer, is_context, tier', (
    ('', False, None, None),
    ('z-index: 3', False, None, None),
    ('position: relative', True, False, AUTO),
    ('position: relative; z-index: 3', True, True, POSITIVE),
    ('position: absolute; z-index: 0', True, True, ZERO),
    ('position: fixed; z-index: -2', True, True, NEGATIVE),
    ('isolation: isolate', True, True, AUTO),
    ('isolation: isolate; z-index: 3', True, True, AUTO),
    ('transform: rotate(10deg)', True, True, AUTO),
    ('overflow: hidden', True, False, AUTO),
    ('position: running(header)', True, False, AUTO),
))
def test_layers(style, has_layer, is_context, tier):
    root = parse(f'<div id=div style="{style}"></div>')
    layer = find_box(root, 'div').layer
    if not has_layer:
        assert layer is None
        return
    assert layer.parent is root.layer
    assert layer.is_stacking_context is is_context
    assert layer.tier == tier


@assert_no_logs
def test_z_index_non_positioned():
    root = parse('<div id=div style="z-index: 3; isolation: isolate"></div>')
    layer = find_box(root, 'div').layer
    assert layer.z_index == 0
    assert layer_ids(root.layer.collect_layers(AUTO)) == ['div']
    assert root.layer.collect_layers(POSITIVE) == []


@assert_no_logs
def test_unknown_tier():
    root = parse('<div></div>')
    with pytest.raises(ValueError):
        root.layer.collect_layers('top')


@assert_no_logs
def test_running_isolated():
    root = parse('''
      <div id=header style="position: running(header)">
        <div id=child style="position: relative; z-index: 1"></div>
      </div>
      <div id=main style="position: relative"></div>''')
    header = find_box(root, 'header').layer
    assert header.isolated
    assert layer_ids(header.children) == ['child']
    assert layer_ids(root.layer.paint_order()) == ['html', 'main']
    assert root.layer.collect_layers(POSITIVE) == []


@assert_no_logs
def test_destroy():
    root = parse('''
      <style>div { position: relative; z-index: 1 }</style>
      <div id=a><div id=b></div></div>
      <div id=c></div>''')
    a = find_box(root, 'a')
    a_layer, b_layer = a.layer, find_box(root, 'b').layer
    a.destroy()
    assert a_layer.marked_for_deletion
    assert a_layer.parent is None
    assert not a_layer.is_root_layer
    assert root.layer.is_root_layer
    assert layer_ids(root.layer.paint_order()) == ['html', 'c']
    assert b_layer.marked_for_deletion
    # Destroying a box twice changes nothing.
    a.destroy()
    assert layer_ids(root.layer.paint_order()) == ['html', 'c']


@assert_no_logs
def test_remove_unknown_child():
    root = parse('<div id=a style="position: relative"></div>')
    layer = find_box(root, 'a').layer
    layer.detach()
    with pytest.raises(ValueError):
        root.layer.remove_child(layer)


@assert_no_logs
def test_root_structures():
    root = parse('''
      <div id=a style="position: relative">
        <div id=b style="position: fixed">
          <div id=c style="position: absolute"></div>
        </div>
      </div>''')
    a, b, c = (find_box(root, id_).layer for id_ in 'abc')
    assert c.find_root() is root.layer
    assert c.running_blocks is root.layer.running_blocks
    assert c.page_sequences is root.layer.page_sequences
    assert not a.has_fixed_ancestor
    assert b.has_fixed_ancestor
    assert c.has_fixed_ancestor
    assert find_box(root, 'c').containing_block is find_box(root, 'b')
    assert find_box(root, 'b').containing_block is None


@assert_no_logs
def test_floats():
    root = parse('<div id=a style="position: relative"></div>')
    layer = root.layer
    box = find_box(root, 'a')
    layer.add_float(box)
    layer.add_float(box)
    assert layer.floats == [box]
    layer.remove_float(box)
    assert layer.floats == []


@assert_no_logs
def test_floats_registered():
    document = render('''
      <style>
        @page { size: 100px }
        div { float: left; width: 10px; height: 10px }
        section { position: relative }
      </style>
      <div id=a></div>
      <section><div id=b></div></section>''')
    root = document.root_box
    assert document.root_layer.floats == [find_box(root, 'a')]
    section = root.children[0].children[1]
    assert section.layer.floats == [find_box(root, 'b')]


@assert_no_logs
@pytest.mark.parametrize('position, painting, pages', (
    ('absolute', (0, 0, 100, 140), 2),
    ('fixed', (0, 0, 100, 50), 1),
))
def test_painting_dimension(position, painting, pages):
    document = render(f'''
      <style>
        @page {{ size: 100px }}
        div {{ height: 50px }}
        section {{
          position: {position}; top: 80px; width: 10px; height: 60px }}
      </style>
      <div></div><section></section>''')
    assert document.root_layer.painting_dimension() == painting
    assert len(document.pages) == pages
