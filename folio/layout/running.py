"""Running elements and page sequences.

Running elements are taken out of the flow with ``position: running(name)``
and painted in page margins. For a given page, the running element to
display is chosen among the elements sharing the same name according to
their position in the document.

Page sequences restart page numbering: a box with
``-folio-page-sequence: start`` begins a new sequence on its first page.

See https://www.w3.org/TR/css-gcpm-3/#running-elements

"""

# Which running element is displayed on a page.
# https://www.w3.org/TR/css-gcpm-3/#funcdef-element
START = 'start'
FIRST = 'first'
LAST = 'last'
LAST_EXCEPT = 'last-except'


class RunningBlockSet:
    """Running blocks of a document, by name, sorted by vertical position."""
    def __init__(self):
        self._blocks = {}

    def __contains__(self, name):
        return bool(self._blocks.get(name))

    def __getitem__(self, name):
        return list(self._blocks.get(name, ()))

    def register(self, box):
        """Register a running ``box``.

        A box already registered is moved to its current position.

        """
        name = box.running_name
        blocks = [
            block for block in self._blocks.get(name, ()) if block is not box]
        blocks.append(box)
        # sort() is stable, blocks at the same position keep tree order.
        blocks.sort(key=lambda block: block.position_y)
        self._blocks[name] = blocks

    def unregister(self, box):
        name = box.running_name
        if name not in self._blocks:
            return
        self._blocks[name] = [
            block for block in self._blocks[name] if block is not box]

    def resolve(self, name, page, which=FIRST):
        """Return the running block called ``name`` displayed on ``page``.

        Return ``None`` if no block matches.

        """
        blocks = self._blocks.get(name)
        if which not in (START, FIRST, LAST, LAST_EXCEPT):
            raise ValueError(f'Unknown running element position {which!r}')
        if not blocks:
            return None

        if which == START:
            return _start(blocks, page)
        elif which == FIRST:
            for block in blocks:
                if page.top <= block.position_y < page.bottom + 1:
                    return block
                elif block.position_y >= page.bottom + 1:
                    break
            return _start(blocks, page)
        elif which == LAST:
            return _last(blocks, page)
        else:
            for block in blocks:
                if page.top <= block.position_y < page.bottom + 1:
                    return None
            return _last(blocks, page)


def _start(blocks, page):
    """Return the last block before the top of ``page``."""
    result = None
    for block in blocks:
        if block.position_y < page.top:
            result = block
        else:
            break
    return result


def _last(blocks, page):
    """Return the last block before the bottom of ``page``."""
    result = None
    for block in blocks:
        if block.position_y >= page.bottom + 1:
            break
        result = block
    return result


class PageSequenceSet:
    """Boxes starting page sequences.

    The list sorted by vertical position is only built when page numbers are
    requested, and is forgotten each time a new box is added.

    """
    def __init__(self):
        # Dict used as an ordered set.
        self._starts = {}
        self._sorted = None

    def __len__(self):
        return len(self._starts)

    def __iter__(self):
        return iter(self._sorted_starts())

    def add(self, box):
        self._starts[box] = None
        self._sorted = None

    def remove(self, box):
        if box in self._starts:
            del self._starts[box]
            self._sorted = None

    def _sorted_starts(self):
        if self._sorted is None:
            self._sorted = sorted(
                self._starts, key=lambda box: box.position_y)
        return self._sorted

    def _find(self, page):
        """Return the index of the sequence including ``page``, or -1."""
        result = -1
        for i, box in enumerate(self._sorted_starts()):
            if box.position_y < page.bottom:
                result = i
            else:
                break
        return result

    def find_start(self, page):
        """Return the box starting the sequence including ``page``."""
        index = self._find(page)
        if index >= 0:
            return self._sorted_starts()[index]

    def relative_page_number(self, pages, page, initial_page_number=0):
        """Return the 0-based number of ``page`` in its sequence.

        ``pages`` is the :class:`pages.PageManager` owning ``page``.

        """
        index = self._find(page)
        if index < 0:
            return _initial(initial_page_number) + page.index
        start = self._sorted_starts()[index]
        return page.index - _first_page_index(pages, start)

    def relative_page_count(self, pages, page, initial_page_number=0):
        """Return the number of pages in the sequence including ``page``."""
        index = self._find(page)
        if index < 0:
            starts = self._sorted_starts()
            if not starts:
                return _initial(initial_page_number) + len(pages)
            # Pages before the first sequence
            end = _first_page_index(pages, starts[0])
            return _initial(initial_page_number) + end
        starts = self._sorted_starts()
        first_index = _first_page_index(pages, starts[index])
        if index + 1 < len(starts):
            end = _first_page_index(pages, starts[index + 1])
        else:
            end = len(pages)
        return end - first_index

    def relative_page_number_at(self, pages, y, initial_page_number=0):
        """Return the relative page number of the page at position ``y``."""
        page = pages.page_for(y)
        if page is not None:
            return self.relative_page_number(pages, page, initial_page_number)


def _initial(initial_page_number):
    return initial_page_number - 1 if initial_page_number > 0 else 0


def _first_page_index(pages, box):
    """Return the index of the first page of ``box``.

    No page is created: boxes after the last page give the number of pages.

    """
    last_page = pages.last_page
    if last_page is None or box.position_y >= last_page.bottom + 1:
        return len(pages)
    return pages.first_page_for_box(box).index
