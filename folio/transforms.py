"""Propagate CSS transforms through the stacking tree.

Each stacking node gets the cumulative transform of its box, combining the
transforms of all its transformed ancestors. It is ``None`` when no
transform applies to the node.

Transforms depend on the final geometry of boxes: they must be propagated
once the whole document is laid out.

https://www.w3.org/TR/css-transforms-1/

"""

import math

from .layout.percent import percentage
from .logger import PROGRESS_LOGGER
from .matrix import Matrix


def propagate_transforms(root_layer):
    """Set the ``transform`` attribute of all the nodes of the tree."""
    PROGRESS_LOGGER.info('Step 5 - Propagating transforms')
    _propagate(root_layer, None)


def _propagate(layer, parent_matrix):
    if layer.has_local_transform:
        matrix = local_transform(layer.box)
        if parent_matrix is not None:
            matrix = matrix @ parent_matrix
    else:
        matrix = parent_matrix
    layer.transform = matrix
    for child in layer.children:
        _propagate(child, matrix)


def local_transform(box):
    """Return the transformation matrix of ``box``, around its origin.

    Percentages are relative to the border box of ``box``.

    """
    border_width = box.border_width()
    border_height = box.border_height()
    origin_x, origin_y = box.style['transform_origin']
    offset_x = percentage(origin_x, border_width)
    offset_y = percentage(origin_y, border_height)
    origin_x = box.border_box_x() + offset_x
    origin_y = box.border_box_y() + offset_y

    matrix = Matrix(e=origin_x, f=origin_y)
    for name, args in box.style['transform']:
        a, b, c, d, e, f = 1, 0, 0, 1, 0, 0
        if name == 'scale':
            a, d = args
        elif name == 'rotate':
            a = d = math.cos(args)
            b = math.sin(args)
            c = -b
        elif name == 'translate':
            e = percentage(args[0], border_width)
            f = percentage(args[1], border_height)
        elif name == 'skew':
            b, c = math.tan(args[1]), math.tan(args[0])
        else:
            assert name == 'matrix'
            a, b, c, d, e, f = args
        matrix = Matrix(a, b, c, d, e, f) @ matrix
    return Matrix(e=-origin_x, f=-origin_y) @ matrix


def map_point(layer, x, y):
    """Map the point ``(x, y)`` of the box of ``layer`` to the canvas."""
    if layer.transform is None:
        return x, y
    return layer.transform.transform_point(x, y)


def transformed_bounds(layer):
    """Return the ``(x1, y1, x2, y2)`` canvas bounds of the ``layer`` box.

    This is the bounding box of the border box of the box, transformed.

    """
    box = layer.box
    x, y = box.border_box_x(), box.border_box_y()
    width, height = box.border_width(), box.border_height()
    if layer.transform is None:
        return x, y, x + width, y + height
    return layer.transform.transform_rectangle(x, y, width, height)
