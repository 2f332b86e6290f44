"""Intrinsic widths of boxes, used for shrink-to-fit widths.

The max-content width of a box is its width when lines are only broken
where they have to, its min-content width is its width when lines are
broken wherever possible (https://dbaron.org/css/intrinsic/).

Text is not laid out, the intrinsic widths of a box only depend on its
fixed widths and on the widths of its children.

"""

from ..formatting_structure import boxes


def shrink_to_fit(context, box, available_content_width):
    """Return the shrink-to-fit content width of ``box``.

    ``available_content_width`` is a content width too.
    https://www.w3.org/TR/CSS21/visudet.html#float-width

    """
    preferred = max_content_width(context, box, outer=False)
    minimum = min_content_width(context, box, outer=False)
    return min(preferred, max(minimum, available_content_width))


def min_content_width(context, box, outer=True):
    """Return the min-content width of ``box``.

    Boxes sharing a line can be put on different lines.

    """
    return _intrinsic_width(context, box, min_content_width, outer, max)


def max_content_width(context, box, outer=True):
    """Return the max-content width of ``box``.

    Boxes sharing a line stay on the same line.

    """
    return _intrinsic_width(context, box, max_content_width, outer, sum)


def _intrinsic_width(context, box, function, outer, combine_line):
    """Return an intrinsic width of ``box``.

    Widths of consecutive inline-level and floated children are merged with
    ``combine_line``, then the widest line or block child gives the width.
    The margin width is returned if ``outer`` is set.

    """
    if not isinstance(box, boxes.ParentBox):
        raise TypeError(
            f'intrinsic width for {type(box).__name__} not handled yet')

    width = box.style['width']
    if width != 'auto' and width.unit == 'px':
        width = width.value
    else:
        # Percentages behave as auto here.
        # https://dbaron.org/css/intrinsic/#outer-intrinsic
        widths, line = [], []
        for child in box.children:
            if child.is_absolutely_positioned() or child.is_running():
                continue
            child_width = function(context, child, outer=True)
            if child.is_inline_level() or child.is_floated():
                line.append(child_width)
                continue
            widths.append(child_width)
            if line:
                widths.append(combine_line(line))
                line = []
        if line:
            widths.append(combine_line(line))
        width = max(widths, default=0)

    return _outer_width(box, width) if outer else width


def _outer_width(box, width):
    """Return ``width`` with the horizontal margins and paddings of ``box``.

    Percentages are part of the result: fixed parts make the rest.

    """
    percentages = 0
    for name in (
            'margin_left', 'padding_left', 'margin_right', 'padding_right'):
        value = box.style[name]
        if value == 'auto':
            continue
        elif value.unit == '%':
            percentages += value.value
        else:
            width += value.value
    if percentages >= 100:
        # Impossible to honor.
        return 0
    return width * 100 / (100 - percentages)
