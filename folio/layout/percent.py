"""Turn computed lengths into used values, resolving percentages."""

from ..formatting_structure import boxes

# Properties whose percentages refer to the width of the containing block.
HORIZONTAL = ('margin_left', 'margin_right', 'padding_left', 'padding_right')
# Properties whose percentages refer to the width of the containing block,
# or to its height for pages.
VERTICAL = ('margin_top', 'margin_bottom', 'padding_top', 'padding_bottom')


def percentage(value, refer_to):
    """Return the used value of the computed length ``value``.

    Percentages are relative to ``refer_to``, and give ``'auto'`` when
    ``refer_to`` is ``'auto'``. ``'auto'`` and ``None`` are kept.

    """
    if value is None or value == 'auto':
        return value
    elif value.unit == 'px':
        return value.value
    assert value.unit == '%'
    if refer_to == 'auto':
        # Percentages of lengths depending on content behave as auto.
        return 'auto'
    return refer_to * value.value / 100


def _set_used_values(box, names, refer_to):
    for name in names:
        setattr(box, name, percentage(box.style[name], refer_to))


def resolve_position_percentages(box, containing_block):
    """Set the used offsets of ``box``."""
    cb_width, cb_height = containing_block
    _set_used_values(box, ('left', 'right'), cb_width)
    _set_used_values(box, ('top', 'bottom'), cb_height)


def resolve_percentages(box, containing_block):
    """Set the used margins, paddings and sizes of ``box``.

    ``containing_block`` is a ``(width, height)`` tuple, its height is
    ``'auto'`` when it depends on content. ``width`` and ``height`` may be
    left as ``'auto'``, like margins.

    """
    cb_width, cb_height = containing_block
    _set_used_values(box, HORIZONTAL + ('width',), cb_width)
    _set_used_values(
        box, VERTICAL,
        cb_height if isinstance(box, boxes.PageBox) else cb_width)
    _set_used_values(box, ('height',), cb_height)
