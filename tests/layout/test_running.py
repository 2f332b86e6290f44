"""Tests for running elements and page sequences."""

import pytest

from folio.layout.running import (
    FIRST, LAST, LAST_EXCEPT, START, PageSequenceSet, RunningBlockSet)

from ..testing_utils import (
    Page, RunningBlock, assert_no_logs, find_box, render)


def _running_blocks(*positions):
    running_blocks = RunningBlockSet()
    blocks = [RunningBlock(position_y) for position_y in positions]
    for block in blocks:
        running_blocks.register(block)
    return running_blocks, blocks


@assert_no_logs
@pytest.mark.parametrize('page, which, expected', (
    (Page(1, 40, 79), FIRST, 50),
    (Page(1, 40, 79), START, 10),
    (Page(1, 40, 79), LAST, 50),
    (Page(1, 40, 79), LAST_EXCEPT, None),
    (Page(2, 80, 119), FIRST, 90),
    (Page(2, 80, 119), START, 50),
    (Page(2, 80, 119), LAST, 90),
    (Page(2, 80, 119), LAST_EXCEPT, None),
    (Page(3, 120, 159), FIRST, 90),
    (Page(3, 120, 159), START, 90),
    (Page(3, 120, 159), LAST, 90),
    (Page(3, 120, 159), LAST_EXCEPT, 90),
    (Page(0, 0, 39), FIRST, 10),
    (Page(0, 0, 39), START, None),
    (Page(0, 0, 39), LAST, 10),
    (Page(0, 0, 5), FIRST, None),
    (Page(0, 0, 5), LAST, None),
    (Page(0, 0, 5), LAST_EXCEPT, None),
))
def test_resolve(page, which, expected):
    running_blocks, _ = _running_blocks(90, 10, 50)
    block = running_blocks.resolve('header', page, which)
    if expected is None:
        assert block is None
    else:
        assert block.position_y == expected


@assert_no_logs
def test_resolve_errors():
    running_blocks, _ = _running_blocks(10)
    page = Page(0, 0, 99)
    assert running_blocks.resolve('footer', page) is None
    with pytest.raises(ValueError):
        running_blocks.resolve('header', page, 'middle')
    with pytest.raises(ValueError):
        RunningBlockSet().resolve('header', page, 'middle')


@assert_no_logs
def test_register_twice():
    running_blocks, (block_10, block_50) = _running_blocks(10, 50)
    block_10.position_y = 100
    running_blocks.register(block_10)
    assert running_blocks['header'] == [block_50, block_10]


@assert_no_logs
def test_register_same_position():
    running_blocks = RunningBlockSet()
    blocks = [RunningBlock(20, label=label) for label in 'abc']
    for block in blocks:
        running_blocks.register(block)
    assert running_blocks['header'] == blocks
    assert running_blocks.resolve('header', Page(0, 0, 99)) is blocks[0]
    assert running_blocks.resolve('header', Page(0, 0, 99), LAST) is blocks[2]


@assert_no_logs
def test_names():
    running_blocks = RunningBlockSet()
    header = RunningBlock(10)
    footer = RunningBlock(10, 'footer')
    running_blocks.register(header)
    running_blocks.register(footer)
    assert 'header' in running_blocks
    assert 'footer' in running_blocks
    assert 'title' not in running_blocks
    assert running_blocks['title'] == []
    running_blocks.unregister(footer)
    assert 'footer' not in running_blocks
    assert running_blocks['header'] == [header]
    running_blocks.unregister(RunningBlock(10, 'title'))
    assert running_blocks.resolve('footer', Page(0, 0, 99)) is None


@assert_no_logs
def test_page_sequences(pages):
    pages.page_for(399)
    sequences = PageSequenceSet()
    assert len(sequences) == 0
    assert [sequences.relative_page_number(pages, page) for page in pages] == [
        0, 1, 2, 3]
    assert sequences.relative_page_count(pages, pages[2]) == 4

    start = RunningBlock(200)
    sequences.add(start)
    assert list(sequences) == [start]
    assert sequences.find_start(pages[0]) is None
    assert sequences.find_start(pages[2]) is start
    assert sequences.find_start(pages[3]) is start
    assert [sequences.relative_page_number(pages, page) for page in pages] == [
        0, 1, 0, 1]
    assert [sequences.relative_page_count(pages, page) for page in pages] == [
        2, 2, 2, 2]
    assert sequences.relative_page_number_at(pages, 350) == 1
    assert sequences.relative_page_number_at(pages, -1) is None

    other = RunningBlock(300)
    sequences.add(other)
    assert list(sequences) == [start, other]
    assert [sequences.relative_page_number(pages, page) for page in pages] == [
        0, 1, 0, 0]
    assert sequences.relative_page_count(pages, pages[2]) == 1

    sequences.remove(start)
    sequences.remove(start)
    assert list(sequences) == [other]
    assert [sequences.relative_page_number(pages, page) for page in pages] == [
        0, 1, 2, 0]


@assert_no_logs
def test_page_sequences_initial_page_number(pages):
    pages.page_for(399)
    sequences = PageSequenceSet()
    sequences.add(RunningBlock(200))
    assert [
        sequences.relative_page_number(pages, page, 5) for page in pages] == [
            4, 5, 0, 1]
    assert sequences.relative_page_count(pages, pages[0], 5) == 6
    assert sequences.relative_page_count(pages, pages[3], 5) == 2


@assert_no_logs
def test_sequence_starting_on_page_bottom(pages):
    pages.page_for(299)
    sequences = PageSequenceSet()
    start = RunningBlock(99)
    sequences.add(start)
    # A sequence starts on the page after the one including its last position.
    assert sequences.find_start(pages[0]) is None
    assert sequences.find_start(pages[1]) is start


@assert_no_logs
def test_running_elements():
    document = render('''
      <style>
        @page { size: 100px }
        header { display: block; position: running(header); height: 10px }
      </style>
      <header id=h1></header>
      <div id=a style="height: 150px"></div>
      <header id=h2></header>
      <div style="height: 100px"></div>''')
    root = document.root_box
    h1, h2 = find_box(root, 'h1'), find_box(root, 'h2')
    first, second, third = document.pages
    assert find_box(root, 'a').position_y == 0
    assert (h1.position_y, h2.position_y) == (0, 150)
    assert h1.width == 100
    assert document.root_layer.running_blocks['header'] == [h1, h2]
    assert document.running_block('header', first) is h1
    assert document.running_block('header', second) is h2
    assert document.running_block('header', third) is h2
    assert document.running_block('header', second, START) is h1
    assert document.running_block('header', second, LAST_EXCEPT) is None
    assert document.running_block('header', third, LAST_EXCEPT) is h2
    assert document.running_block('footer', first) is None
    # Running elements are not painted in the flow.
    assert [layer.box for layer in document.paint_order()] == [root]


@assert_no_logs
def test_running_element_destroyed():
    document = render('''
      <style>header { position: running(title) }</style>
      <header id=h></header>''')
    h = find_box(document.root_box, 'h')
    assert 'title' in document.root_layer.running_blocks
    h.destroy()
    assert 'title' not in document.root_layer.running_blocks


@assert_no_logs
def test_page_sequence_in_long_document(pages):
    pages.page_for(999)
    sequences = PageSequenceSet()
    sequences.add(RunningBlock(300))
    assert len(pages) == 10
    assert sequences.relative_page_number(pages, pages[3]) == 0
    assert sequences.relative_page_count(pages, pages[3]) == 7
    assert sequences.relative_page_number(pages, pages[9]) == 6
    assert sequences.relative_page_count(pages, pages[2]) == 3


@assert_no_logs
def test_page_sequence_after_last_page():
    document = render('''
      <style>@page { size: 100px }</style>
      <div style="height: 150px"></div>
      <div style="break-before: page; -folio-page-sequence: start"></div>''')
    first, second = document.pages
    assert document.page_number(first) == 1
    assert document.page_number(second) == 2
    assert document.page_count(second) == 2
    assert len(document.pages) == 2
