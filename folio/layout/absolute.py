"""Absolutely positioned boxes management.

In paged media, absolutely positioned boxes are laid out once their
containing block is laid out, when the stacking node of the containing block
is finished. In continuous media, they are laid out at their static position
in the flow and moved to their final position when their parent node is
finished.

"""

from ..logger import LOGGER
from .percent import resolve_percentages, resolve_position_percentages
from .preferred import shrink_to_fit


def containing_block_rect(context, box):
    """Return ``(x, y, width, height)`` of the containing block of ``box``.

    The height is ``'auto'`` if the containing block is not laid out yet.

    """
    # https://www.w3.org/TR/CSS2/visudet.html#containing-block-details
    containing_block = box.containing_block
    if containing_block is None or box.is_fixed():
        if context.is_print:
            # The initial containing block is the content area of the page
            # where the box would have been in the flow.
            page = context.root_layer.pages.first_page_for(
                box.static_position[1])
            return 0, page.top, page.width, page.height
        return (0, 0, *context.viewport)

    if containing_block.height == 'auto':
        cb_height = 'auto'
    else:
        cb_height = containing_block.padding_height()
    return (
        containing_block.padding_box_x(), containing_block.padding_box_y(),
        containing_block.padding_width(), cb_height)


def absolute_width(context, box, cb_width):
    # https://www.w3.org/TR/CSS2/visudet.html#abs-non-replaced-width
    paddings = box.padding_left + box.padding_right

    if box.left == box.right == box.width == 'auto':
        if box.margin_left == 'auto':
            box.margin_left = 0
        if box.margin_right == 'auto':
            box.margin_right = 0
        available_width = cb_width - (
            paddings + box.margin_left + box.margin_right)
        box.width = shrink_to_fit(context, box, available_width)
    elif box.left != 'auto' and box.right != 'auto' and box.width != 'auto':
        width_for_margins = cb_width - (
            box.right + box.left + box.width + paddings)
        if box.margin_left == box.margin_right == 'auto':
            if width_for_margins >= 0:
                box.margin_left = box.margin_right = width_for_margins / 2
            else:
                box.margin_left = 0
                box.margin_right = width_for_margins
        elif box.margin_left == 'auto':
            box.margin_left = width_for_margins - box.margin_right
        elif box.margin_right == 'auto':
            box.margin_right = width_for_margins - box.margin_left
        else:
            # Over-constrained, ignore margin-right.
            box.margin_right = width_for_margins - box.margin_left
    else:
        if box.margin_left == 'auto':
            box.margin_left = 0
        if box.margin_right == 'auto':
            box.margin_right = 0
        spacing = paddings + box.margin_left + box.margin_right
        if box.left == box.width == 'auto':
            box.width = shrink_to_fit(
                context, box, cb_width - spacing - box.right)
        elif box.width == box.right == 'auto':
            box.width = shrink_to_fit(
                context, box, cb_width - spacing - box.left)
        elif box.width == 'auto' and box.left == box.right == 'auto':
            box.width = shrink_to_fit(context, box, cb_width - spacing)
        elif box.width == 'auto':
            box.width = cb_width - box.right - box.left - spacing


def absolute_height(box, cb_height):
    # https://www.w3.org/TR/CSS2/visudet.html#abs-non-replaced-height
    paddings = box.padding_top + box.padding_bottom

    if cb_height != 'auto' and 'auto' not in (box.top, box.bottom, box.height):
        height_for_margins = cb_height - (
            box.top + box.bottom + box.height + paddings)
        if box.margin_top == box.margin_bottom == 'auto':
            box.margin_top = box.margin_bottom = height_for_margins / 2
        elif box.margin_top == 'auto':
            box.margin_top = height_for_margins - box.margin_bottom
        elif box.margin_bottom == 'auto':
            box.margin_bottom = height_for_margins - box.margin_top
        else:
            # Over-constrained, ignore margin-bottom.
            box.margin_bottom = height_for_margins - box.margin_top
        return

    if box.margin_top == 'auto':
        box.margin_top = 0
    if box.margin_bottom == 'auto':
        box.margin_bottom = 0
    if (cb_height != 'auto' and box.height == 'auto' and
            box.top != 'auto' and box.bottom != 'auto'):
        box.height = cb_height - box.top - box.bottom - (
            paddings + box.margin_top + box.margin_bottom)
    # Otherwise the height depends on the content.


def absolute_box_layout(context, box):
    """Lay out ``box`` and its content at its current position."""
    from .block import block_container_layout

    _, _, cb_width, cb_height = containing_block_rect(context, box)
    resolve_percentages(box, (cb_width, cb_height))
    resolve_position_percentages(box, (cb_width, cb_height))
    absolute_width(context, box, cb_width)
    absolute_height(box, cb_height)
    block_container_layout(context, box, box.layer)


def position_absolute(context, box, axes='both'):
    """Move ``box`` to the position given by its offsets.

    ``axes`` is ``'both'`` or ``'horizontal'``. Offsets set to ``'auto'``
    keep the static position of the box.

    """
    if axes not in ('both', 'horizontal'):
        raise ValueError(f'Unknown axes {axes!r}')
    cb_x, cb_y, cb_width, cb_height = containing_block_rect(context, box)
    resolve_position_percentages(box, (cb_width, cb_height))
    static_x, static_y = box.static_position

    if box.left != 'auto':
        position_x = cb_x + box.left
    elif box.right != 'auto':
        position_x = cb_x + cb_width - box.right - box.margin_width()
    else:
        position_x = static_x

    if axes == 'horizontal':
        position_y = box.position_y
    elif box.top != 'auto':
        position_y = cb_y + box.top
    elif box.bottom != 'auto' and cb_height != 'auto':
        position_y = cb_y + cb_height - box.bottom - box.margin_height()
    else:
        position_y = static_y

    box.translate(position_x - box.position_x, position_y - box.position_y)


def position_on_page(context, box):
    """Move ``box`` to the top of the next page if a page clear is needed."""
    if context.is_print and context.need_page_clear:
        from .block import next_page_top

        pages = context.root_layer.pages
        top = next_page_top(pages, max(box.position_y, 0))
        box.translate(0, top - box.position_y)


def layout_absolute_child(context, layer):
    """Position and lay out the absolutely positioned box of ``layer``."""
    box = layer.box
    if box.style['bottom'] == 'auto':
        # The position does not depend on the height of the box.
        position_absolute(context, box, 'both')
        position_on_page(context, box)
        context.reinit()
        absolute_box_layout(context, box)
        position_absolute(context, box, 'horizontal')
    else:
        # Lay the box out once to get its dimensions, position it using these
        # dimensions, then lay it out again at its final position.
        context.reinit()
        absolute_box_layout(context, box)
        dimensions = box.box_dimensions
        box.reset()
        box.box_dimensions = dimensions
        position_absolute(context, box, 'both')
        position_on_page(context, box)
        position = box.position_x, box.position_y
        box.reset()
        box.position_x, box.position_y = position
        context.reinit()
        absolute_box_layout(context, box)


def layout_absolute_children(context, layer):
    """Lay out the children of ``layer`` waiting for their containing block.

    Boxes avoiding page breaks inside are moved to the next page when they
    are broken, this is only tried twice.

    """
    pages = context.root_layer.pages
    state = context.capture_layout_state()

    for child in layer.children:
        if not child.requires_layout:
            continue
        box = child.box
        is_fixed = box.is_fixed()
        layout_absolute_child(context, child)

        if (not is_fixed and box.avoids_break_inside() and
                _crosses_page_break(pages, box)):
            context.need_page_clear = True
            box.reset()
            layout_absolute_child(context, child)
            if _crosses_page_break(pages, box):
                box.reset()
                layout_absolute_child(context, child)
            context.need_page_clear = False
            if _crosses_page_break(pages, box):
                LOGGER.debug('%r is still broken by a page break', box)

        child.requires_layout = False
        child.finish(context)
        if not is_fixed:
            pages.ensure_has_page(box)

    context.restore_layout_state(state)


def _crosses_page_break(pages, box):
    return pages.crosses_page_break(
        box.position_y, box.position_y + box.margin_height())
