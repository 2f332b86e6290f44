"""Page breaking and layout for block-level and block-container boxes.

Boxes in normal flow are stacked vertically, inline-level boxes are put side
by side on lines. Boxes taken out of the flow (floats, running elements and
absolutely positioned boxes) are laid out where they would have been in the
flow, without taking any space.

"""

from ..logger import LOGGER
from .inline import inline_level_layout
from .percent import resolve_percentages, resolve_position_percentages
from .preferred import shrink_to_fit

# Values of ``break-before`` forcing a page break.
FORCED_BREAKS = ('page', 'left', 'right', 'recto', 'verso')


def block_level_layout(context, box, layer, containing_block, position_x,
                       position_y):
    """Lay out the block-level ``box`` with its top left corner at the given
    position.

    ``layer`` is the stacking node of the nearest ancestor owning one, where
    floats are registered.

    """
    resolve_percentages(box, containing_block)
    if box.margin_top == 'auto':
        box.margin_top = 0
    if box.margin_bottom == 'auto':
        box.margin_bottom = 0
    block_level_width(box, containing_block)
    box.position_x = position_x
    box.position_y = position_y
    block_container_layout(context, box, box.layer or layer)


def block_level_width(box, containing_block):
    """Set the ``box`` width."""
    cb_width = containing_block[0]

    # https://www.w3.org/TR/CSS21/visudet.html#blockwidth
    margin_l = box.margin_left
    margin_r = box.margin_right
    paddings = box.padding_left + box.padding_right
    width = box.width

    if width != 'auto':
        total = paddings + width
        if margin_l != 'auto':
            total += margin_l
        if margin_r != 'auto':
            total += margin_r
        if total > cb_width:
            if margin_l == 'auto':
                margin_l = box.margin_left = 0
            if margin_r == 'auto':
                margin_r = box.margin_right = 0
    if width == 'auto':
        if margin_l == 'auto':
            margin_l = box.margin_left = 0
        if margin_r == 'auto':
            margin_r = box.margin_right = 0
        width = box.width = cb_width - (paddings + margin_l + margin_r)
    margin_sum = cb_width - paddings - width
    if margin_l == margin_r == 'auto':
        box.margin_left = margin_sum / 2
        box.margin_right = margin_sum / 2
    elif margin_l == 'auto' and margin_r != 'auto':
        box.margin_left = margin_sum - margin_r
    elif margin_l != 'auto' and margin_r == 'auto':
        box.margin_right = margin_sum - margin_l


def block_container_layout(context, box, layer):
    """Lay out the children of ``box``.

    The position, the horizontal dimensions and the paddings of ``box`` must
    be set. Its height is set from its content when it is ``'auto'``.

    """
    pages = context.root_layer.pages if context.is_print else None
    content_x = box.content_box_x()
    top = box.content_box_y()
    containing_block = (box.width, box.height)
    right_edge = content_x + box.width

    # Position where the next block-level box is placed.
    position_y = top
    # Current line of inline-level boxes, empty when line_items is 0.
    line_x, line_y, line_height, line_items = content_x, top, 0, 0
    floats = _FloatEdges(content_x, right_edge)

    for child in box.children:
        if line_items:
            static_x, static_y = line_x, line_y
        else:
            static_x, static_y = content_x, position_y

        if not child.is_in_normal_flow():
            out_of_flow_layout(
                context, child, layer, containing_block, static_x, static_y,
                floats)
            continue

        if child.is_inline_level():
            if not line_items:
                line_x, line_y, line_height = content_x, position_y, 0
            inline_level_layout(
                context, child, layer, containing_block, line_x, line_y)
            if line_items and line_x + child.margin_width() > right_edge:
                # Put the box on a new line.
                new_line_y = line_y + line_height
                child.translate(content_x - line_x, new_line_y - line_y)
                line_x, line_y, line_height, line_items = (
                    content_x, new_line_y, 0, 0)
            line_x += child.margin_width()
            line_height = max(line_height, child.margin_height())
            line_items += 1
            position_y = line_y + line_height
            finish_layer(context, child)
            continue

        if line_items:
            line_items = 0

        if pages is not None:
            position_y = _page_break_before(context, pages, child, position_y)
        block_level_layout(
            context, child, layer, containing_block, content_x, position_y)
        if pages is not None and child.avoids_break_inside():
            _avoid_break_inside(pages, child)
        # Relative positioning does not change the flow.
        position_y = child.position_y + child.margin_height()
        if child.is_relative():
            relative_positioning(child, containing_block)
        if pages is not None:
            if child.style['page_sequence'] == 'start':
                context.root_layer.page_sequences.add(child)
            pages.ensure_has_page(child)
        finish_layer(context, child)

    if box.height == 'auto':
        box.height = max(position_y - top, 0)


def out_of_flow_layout(context, box, layer, containing_block, static_x,
                       static_y, floats=None):
    """Lay out ``box`` taken out of the flow.

    ``static_x`` and ``static_y`` give the position the box would have had
    in normal flow.

    """
    box.static_position = (static_x, static_y)
    if box.is_running():
        running_layout(context, box, layer, containing_block, static_x,
                       static_y)
    elif box.is_absolutely_positioned():
        box.position_x, box.position_y = static_x, static_y
        if context.is_print:
            # Laid out when the containing block is finished.
            box.layer.requires_layout = True
        else:
            from .absolute import absolute_box_layout
            absolute_box_layout(context, box)
            finish_layer(context, box)
    else:
        float_layout(context, box, layer, containing_block, static_y, floats)


def running_layout(context, box, layer, containing_block, position_x,
                   position_y):
    """Lay out the running ``box`` at its place in the flow."""
    block_level_layout(
        context, box, layer, containing_block, position_x, position_y)
    context.root_layer.running_blocks.register(box)
    finish_layer(context, box)


def float_layout(context, box, layer, containing_block, position_y,
                 floats=None):
    """Lay out the floating ``box`` at the edge of the current line.

    Floats are registered by the stacking node of their formatting context.

    """
    cb_width = containing_block[0]
    resolve_percentages(box, containing_block)
    for side in ('top', 'right', 'bottom', 'left'):
        if getattr(box, f'margin_{side}') == 'auto':
            setattr(box, f'margin_{side}', 0)
    if box.width == 'auto':
        available_width = cb_width - (
            box.margin_left + box.margin_right +
            box.padding_left + box.padding_right)
        box.width = shrink_to_fit(context, box, available_width)

    if floats is None:
        floats = _FloatEdges(0, cb_width)
    box.position_x = floats.place(box, position_y)
    box.position_y = position_y
    block_container_layout(context, box, box.layer or layer)
    if box.is_relative():
        relative_positioning(box, containing_block)
    layer.add_float(box)
    finish_layer(context, box)


def relative_positioning(box, containing_block=None):
    """Translate the ``box`` if it is relatively positioned.

    Offsets are resolved against ``containing_block`` if given, otherwise
    their used values are kept.

    """
    if box.style['position'] == 'relative':
        if containing_block is not None:
            resolve_position_percentages(box, containing_block)

        if box.left != 'auto':
            translate_x = box.left
        elif box.right != 'auto':
            translate_x = -box.right
        else:
            translate_x = 0

        if box.top != 'auto':
            translate_y = box.top
        elif box.bottom != 'auto':
            translate_y = -box.bottom
        else:
            translate_y = 0

        box.translate(translate_x, translate_y)


def finish_layer(context, box):
    """Finish the stacking node of ``box`` if it owns one."""
    if box.layer is not None:
        box.layer.finish(context)


def next_page_top(pages, position_y):
    """Return the top of the page following the page including
    ``position_y``."""
    return pages.page_for(position_y).bottom + 1


def _page_break_before(context, pages, box, position_y):
    """Return the position of ``box`` after forced page breaks."""
    page = pages.page_for(position_y)
    page_name = box.style['page']
    forced = box.style['break_before'] in FORCED_BREAKS
    if page_name != context.page_name:
        # Named pages are only used by boxes starting on a new page.
        LOGGER.debug(
            'Page name changed from %r to %r', context.page_name, page_name)
        context.page_name = page_name
        forced = True
    if forced and position_y > page.top:
        position_y = next_page_top(pages, position_y)
        # Create the page with the current page name.
        pages.page_for(position_y)
    elif (forced and page.name != page_name and
            pages.is_last_page(page) and page.top == position_y):
        # Nothing has been laid out on the page yet, create it again.
        pages.remove_last_page()
        pages.page_for(position_y)
    return position_y


def _avoid_break_inside(pages, box):
    """Move ``box`` to the next page if it is broken by a page break."""
    top = box.position_y
    bottom = top + box.margin_height()
    if not pages.crosses_page_break(top, bottom):
        return
    page = pages.page_for(top)
    if top <= page.top:
        # Already at the top of a page, the box is too high to be kept.
        return
    box.translate(0, next_page_top(pages, top) - top)
    if pages.crosses_page_break(
            box.position_y, box.position_y + box.margin_height()):
        LOGGER.debug('%r is too high to be kept on one page', box)


class _FloatEdges:
    """Horizontal edges available for floats on the current line."""
    def __init__(self, left, right):
        self.left = self._left = left
        self.right = self._right = right
        self.position_y = None

    def place(self, box, position_y):
        """Return the horizontal position of the floating ``box``."""
        if position_y != self.position_y:
            self.left, self.right = self._left, self._right
            self.position_y = position_y
        if box.style['float'] == 'right':
            self.right -= box.margin_width()
            return self.right
        position_x = self.left
        self.left += box.margin_width()
        return position_x
