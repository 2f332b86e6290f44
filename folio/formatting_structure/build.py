"""Build the box tree of a document, then its stacking tree.

Each element generates at most one box, text is ignored. Stacking nodes are
then created for the boxes that need them.

"""

from ..logger import LOGGER
from ..stacking import StackingNode
from . import boxes

# Box classes for the values of ``display``, other than ``none``.
BOX_CLASSES = {
    'block': boxes.BlockBox,
    'inline': boxes.InlineBox,
    'inline-block': boxes.InlineBlockBox,
}


def build_formatting_structure(element_tree, style_for):
    """Return the box of the root element, with its stacking tree.

    The root element always generates a block box, even with
    ``display: none``: its descendants then generate no box.

    """
    box = element_to_box(element_tree, style_for)
    if box is None:
        def root_style_for(element):
            style = style_for(element)
            if style is not None:
                is_root = element == element_tree
                style['display'] = 'block' if is_root else 'none'
            return style
        box = element_to_box(element_tree, root_style_for)

    box.is_for_root_element = True
    create_stacking_nodes(box)
    return box


def element_to_box(element, style_for):
    """Return the box of ``element`` and its descendants, or ``None``.

    Comments, processing instructions and ``display: none`` elements give
    no box.

    """
    # Comments and processing instructions have a function as tag.
    style = style_for(element) if isinstance(element.tag, str) else None
    if style is None or style['display'] == 'none':
        return None
    children = [
        child for child in (
            element_to_box(child_element, style_for)
            for child_element in element)
        if child is not None]
    box_class = BOX_CLASSES[style['display']]
    return box_class(element.tag, style, element, children)


def create_stacking_nodes(box, layer=None, containing_block=None):
    """Create the stacking nodes of ``box`` and its descendants.

    ``layer`` is the node of the nearest ancestor owning one.
    ``containing_block`` is the nearest positioned or transformed ancestor,
    used as the containing block of absolutely positioned descendants.

    """
    if box.is_absolutely_positioned() and not box.is_fixed():
        box.containing_block = containing_block
    if box.needs_layer():
        layer = StackingNode(box, layer)
        if layer.is_stacking_context and layer.parent is not None:
            LOGGER.debug('New stacking context for %r', box)
    if box.is_positioned() or box.has_transform():
        containing_block = box
    for child in box.children:
        create_stacking_nodes(child, layer, containing_block)
