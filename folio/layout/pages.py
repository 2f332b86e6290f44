"""Layout for pages.

Pages are created on demand while the document is laid out, each page
covering a range of vertical positions of the document. Pages are contiguous:
the first position of a page follows the last position of the previous page.

"""

from ..css import ComputedStyle, PageType
from ..formatting_structure import boxes
from ..logger import LOGGER
from .percent import resolve_percentages

# Presentation of pages, see ``PageManager.assign_painting_positions``.
PAGED_MODE_SCREEN = 1
PAGED_MODE_PRINT = 2

# Number of pages checked from the end before falling back to a binary search.
MAX_REAR_SEARCH = 5


def page_type_for(index, name=''):
    """Return the :class:`css.PageType` of the page at ``index``.

    The first page is a right page, pages then alternate.

    """
    # TODO: take care of text direction and writing mode
    # https://www.w3.org/TR/css-page-3/#progression
    side = 'right' if index % 2 == 0 else 'left'
    return PageType(side=side, first=index == 0, index=index, name=name)


def make_page(context, page_type):
    """Return a new page box of type ``page_type``.

    Its style comes from ``@page`` rules, its content area is its size minus
    its margins and paddings.

    """
    if context is None:
        style = ComputedStyle(None, {})
    else:
        style = context.page_style(page_type)
    page = boxes.PageBox(page_type, style)
    page_width, page_height = style['size']
    resolve_percentages(page, (page_width, page_height))
    page.position_x = page.position_y = 0
    page.width = page_width - (
        page.margin_left + page.margin_right +
        page.padding_left + page.padding_right)
    page.height = page_height - (
        page.margin_top + page.margin_bottom +
        page.padding_top + page.padding_bottom)
    # Pages cover at least one position.
    page.width = max(page.width, 1)
    page.height = max(page.height, 1)
    return page


class PageManager:
    """Ordered list of the pages of a paginated document.

    Pages are appended when positions past the last page are requested, and
    only removed from the end of the list.

    """
    def __init__(self, context=None):
        self.context = context
        self._pages = []
        # Page returned by the last lookup.
        self._last_requested = None

    def __len__(self):
        return len(self._pages)

    def __iter__(self):
        return iter(self._pages)

    def __getitem__(self, index):
        return self._pages[index]

    @property
    def pages(self):
        return list(self._pages)

    @property
    def last_page(self):
        return self._pages[-1] if self._pages else None

    def is_last_page(self, page):
        return bool(self._pages) and self._pages[-1] is page

    def add_page(self):
        """Create a new page at the end of the document and return it."""
        index = len(self._pages)
        name = self.context.page_name if self.context is not None else ''
        page = make_page(self.context, page_type_for(index, name))
        if self._pages:
            page.set_top_and_bottom(self._pages[-1].bottom + 1)
        else:
            page.set_top_and_bottom(0)
        self._pages.append(page)
        return page

    def remove_last_page(self):
        page = self._pages.pop()
        if page is self._last_requested:
            self._last_requested = None
        return page

    def page_for(self, y):
        """Return the page including the position ``y``.

        Return ``None`` if ``y`` is negative. If ``y`` is after the end of
        the last page, pages are created until ``y`` is included and the last
        page is returned.

        """
        if y < 0:
            return None

        last_requested = self._last_requested
        if last_requested is not None:
            if last_requested.top <= y < last_requested.bottom + 1:
                return last_requested

        if not self._pages or y >= self._pages[-1].bottom + 1:
            page = self.add_page()
            while y >= page.bottom + 1:
                page = self.add_page()
            self._last_requested = page
            return page

        # The page is probably at the end of the document, try the last pages
        # before falling back to a binary search.
        count = len(self._pages)
        for i in range(count - 1, max(count - MAX_REAR_SEARCH, 0) - 1, -1):
            page = self._pages[i]
            if page.top <= y < page.bottom + 1:
                self._last_requested = page
                return page

        low, high = 0, count - MAX_REAR_SEARCH - 1
        while True:
            middle = (low + high) // 2
            page = self._pages[middle]
            if page.bottom + 1 <= y:
                low = middle + 1
            elif page.top > y:
                high = middle - 1
            else:
                break
        self._last_requested = page
        return page

    def first_page_for(self, y):
        """Return the page including ``y``, or the first page if negative."""
        if y < 0:
            return self._pages[0] if self._pages else None
        return self.page_for(y)

    def first_page_for_box(self, box):
        return self.first_page_for(box.position_y)

    def last_page_for_box(self, box):
        return self.first_page_for(
            box.position_y + max(box.margin_height(), 1) - 1)

    def ensure_has_page(self, box):
        """Create the pages needed to include the whole ``box``."""
        self.last_page_for_box(box)

    def range(self, top, bottom):
        """Return the list of pages covering ``top`` to ``bottom``.

        Bounds are swapped if needed. Pages are created if ``bottom`` is after
        the end of the last page. Return an empty list if both bounds are
        negative.

        """
        if top > bottom:
            top, bottom = bottom, top
        if bottom < 0:
            return []
        last = self.page_for(bottom)
        first = self.first_page_for(top)
        return self._pages[first.index:last.index + 1]

    def trim_empty_tail(self, max_y):
        """Remove trailing pages starting at or after ``max_y``.

        Empty pages may result when a "keep together" constraint cannot be
        satisfied and is dropped. The first page is never removed.

        """
        removed = 0
        while len(self._pages) > 1 and self._pages[-1].top >= max_y:
            self.remove_last_page()
            removed += 1
        if removed:
            LOGGER.debug('Removed %d empty pages at the end', removed)

    def trim_to_count(self, count):
        """Remove trailing pages until ``count`` pages are left."""
        while len(self._pages) > count:
            self.remove_last_page()

    def crosses_page_break(self, top, bottom):
        """Return whether a box from ``top`` to ``bottom`` crosses a page.

        ``bottom`` is the first position after the box. Space reserved at the
        bottom of pages is not available, except for float-bottom content.

        """
        if top < 0:
            return False
        page = self.page_for(top)
        context = self.context
        if context is not None and context.in_float_bottom:
            return bottom > page.bottom + 1
        extra_space_bottom = (
            0 if context is None else context.extra_space_bottom)
        return bottom > page.bottom + 1 - extra_space_bottom

    def assign_painting_positions(self, mode, extra_clearance=0):
        """Set the vertical position where each page is painted.

        With ``PAGED_MODE_SCREEN``, whole pages including their margins are
        painted one after the other. With ``PAGED_MODE_PRINT``, only page
        content areas are painted.

        """
        painting_top = extra_clearance
        for page in self._pages:
            page.painting_top = painting_top
            if mode == PAGED_MODE_SCREEN:
                page.painting_bottom = painting_top + page.outer_height
            elif mode == PAGED_MODE_PRINT:
                page.painting_bottom = painting_top + page.content_height
            else:
                raise ValueError(f'Illegal mode {mode!r}')
            painting_top = page.painting_bottom + extra_clearance

    def max_page_width(self, extra_clearance=0):
        """Return the width of the widest page, with its clearance."""
        return max(
            (page.outer_width + 2 * extra_clearance for page in self._pages),
            default=0)
