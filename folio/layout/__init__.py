"""Lay out the box tree and build the pages.

Boxes get *used values* in their ``position_x``, ``position_y``, ``width``
and ``height`` attributes, amongst others. Positions are given in document
coordinates: in paged media, the document is a long strip where pages follow
each other, each page covering a range of vertical positions.

See https://www.w3.org/TR/CSS21/cascade.html#used-value

"""

from collections import namedtuple

from ..logger import LOGGER, PROGRESS_LOGGER
from .block import block_level_layout
from .pages import PageManager, make_page, page_type_for

# Layout values saved while absolutely positioned boxes are laid out.
LayoutState = namedtuple(
    'LayoutState', 'page_name, extra_space_bottom, in_float_bottom')


class LayoutContext:
    def __init__(self, style_for, root_layer, is_print=True,
                 initial_page_number=0):
        self.style_for = style_for
        self.root_layer = root_layer
        self.is_print = is_print
        self.initial_page_number = initial_page_number
        # Size of the initial containing block in continuous media.
        self.viewport = (0, 0)
        # Name of the page used by the current box.
        self.page_name = ''
        # Space reserved at the bottom of pages, unavailable for content.
        self.extra_space_bottom = 0
        # Whether float-bottom content is laid out, ignoring reserved space.
        self.in_float_bottom = False
        # Whether the absolutely positioned box being laid out has to start on
        # a new page.
        self.need_page_clear = False

    def page_style(self, page_type):
        return self.style_for.page_style(page_type)

    def capture_layout_state(self):
        return LayoutState(
            self.page_name, self.extra_space_bottom, self.in_float_bottom)

    def restore_layout_state(self, state):
        self.page_name, self.extra_space_bottom, self.in_float_bottom = state

    def reinit(self):
        """Forget the state of the enclosing flow."""
        self.extra_space_bottom = 0
        self.in_float_bottom = False


def layout_document(style_for, root_box, media_type='print',
                    initial_page_number=0):
    """Lay out the whole document.

    In paged media, the page list is owned by the root stacking node and
    trailing pages left empty are removed.

    :returns: the :class:`LayoutContext` used for layout.

    """
    PROGRESS_LOGGER.info('Step 4 - Creating layout')
    root_layer = root_box.layer
    context = LayoutContext(
        style_for, root_layer, is_print=media_type == 'print',
        initial_page_number=initial_page_number)
    context.page_name = root_box.style['page']

    if context.is_print:
        root_layer.pages = PageManager(context)
        first_page = root_layer.pages.page_for(0)
        context.viewport = (first_page.width, first_page.height)
    else:
        # The viewport has the size of the content area of a default page.
        page = make_page(context, page_type_for(0, context.page_name))
        context.viewport = (page.width, page.height)

    block_level_layout(
        context, root_box, root_layer, (context.viewport[0], 'auto'), 0, 0)
    root_layer.finish(context)

    if context.is_print:
        pages = root_layer.pages
        pages.ensure_has_page(root_box)
        _, position_y, _, height = root_layer.painting_dimension()
        pages.trim_empty_tail(position_y + height)
        LOGGER.debug('Document laid out on %d pages', len(pages))
    return context
