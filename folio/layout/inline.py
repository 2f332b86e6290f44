"""Layout for inline-level boxes.

Inline boxes are never broken: an inline box and its content stay on one
line, lines are only broken between the inline-level children of a block
container.

"""

from ..formatting_structure import boxes
from .percent import resolve_percentages, resolve_position_percentages
from .preferred import shrink_to_fit


def inline_level_layout(context, box, layer, containing_block, position_x,
                        position_y):
    """Lay out the inline-level ``box`` at the given position."""
    resolve_percentages(box, containing_block)
    resolve_position_percentages(box, containing_block)
    for side in ('top', 'right', 'bottom', 'left'):
        if getattr(box, f'margin_{side}') == 'auto':
            setattr(box, f'margin_{side}', 0)
    box.position_x = position_x
    box.position_y = position_y

    if isinstance(box, boxes.InlineBlockBox):
        inline_block_box_layout(context, box, layer, containing_block)
    elif isinstance(box, boxes.InlineBox):
        inline_box_layout(context, box, layer, containing_block)
    else:  # pragma: no cover
        raise TypeError(f'Layout for {type(box).__name__} not handled yet')


def inline_block_box_layout(context, box, layer, containing_block):
    from .block import block_container_layout

    if box.width == 'auto':
        available_content_width = containing_block[0] - (
            box.margin_left + box.margin_right +
            box.padding_left + box.padding_right)
        box.width = shrink_to_fit(context, box, available_content_width)
    block_container_layout(context, box, box.layer or layer)


def inline_box_layout(context, box, layer, containing_block):
    """Put the children of the inline ``box`` side by side.

    The ``width`` and ``height`` properties do not apply to inline boxes,
    their content gives their dimensions.

    """
    from .block import block_level_layout, finish_layer, out_of_flow_layout

    layer = box.layer or layer
    start_x = position_x = box.content_box_x()
    top = box.content_box_y()
    height = 0
    for child in box.children:
        if not child.is_in_normal_flow():
            out_of_flow_layout(
                context, child, layer, containing_block, position_x, top)
            continue
        if child.is_inline_level():
            inline_level_layout(
                context, child, layer, containing_block, position_x, top)
        else:
            block_level_layout(
                context, child, layer, containing_block, position_x, top)
        position_x += child.margin_width()
        height = max(height, child.margin_height())
        finish_layer(context, child)
    box.width = position_x - start_x
    box.height = height
