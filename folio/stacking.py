"""Stacking contexts management.

Stacking nodes (or "layers") mirror the boxes of the formatting structure
that are positioned, transformed, isolated or clipped. They define the paint
order of all pieces of a document.

https://www.w3.org/TR/CSS21/visuren.html#x43
https://www.w3.org/TR/CSS21/zindex.html

"""

from .layout.absolute import layout_absolute_children, position_absolute
from .layout.block import relative_positioning
from .layout.running import PageSequenceSet, RunningBlockSet

# Tiers of the paint order of a stacking context.
NEGATIVE = 'negative'  # Child contexts, z-index < 0
ZERO = 'zero'  # Child contexts, z-index = 0
POSITIVE = 'positive'  # Child contexts, z-index > 0
AUTO = 'auto'  # Child contexts with z-index: auto and non-contexts
TIERS = (NEGATIVE, ZERO, POSITIVE, AUTO)


class StackingNode:
    """Stacking node of a box.

    The node is owned by its box and created with it, ``parent`` is the node
    of the nearest ancestor box owning a node. The root node owns the page
    list, the running blocks and the page sequences of the document.

    """
    def __init__(self, box, parent=None):
        self.box = box
        box.layer = self
        self.parent = None
        self.children = []
        self.is_stacking_context = (
            parent is None or box.establishes_stacking_context())
        self.is_inline = box.is_inline_level()
        # Running elements are painted in page margins, never composited
        # with their parent.
        self.isolated = box.is_running()
        self.requires_layout = False
        self.marked_for_deletion = False
        self.has_fixed_ancestor = (
            (parent is not None and parent.has_fixed_ancestor) or
            box.is_fixed())
        self.floats = []
        # Set after layout, see ``transforms.propagate_transforms``.
        self.transform = None

        if parent is None:
            self._pages = None
            self._running_blocks = RunningBlockSet()
            self._page_sequences = PageSequenceSet()
        else:
            parent.add_child(self)

    def __repr__(self):
        return f'<{type(self).__name__} {self.box!r}>'

    @property
    def z_index(self):
        if self.box.has_auto_z_index():
            return 0
        return self.box.style['z_index']

    @property
    def is_root_layer(self):
        return self.parent is None and not self.marked_for_deletion

    @property
    def has_local_transform(self):
        return self.box.has_transform()

    # Tree

    def add_child(self, layer):
        layer.parent = self
        self.children.append(layer)

    def remove_child(self, layer):
        for i, child in enumerate(self.children):
            if child is layer:
                del self.children[i]
                layer.parent = None
                return
        raise ValueError('Could not find layer to remove')

    def detach(self):
        """Unlink the node from its parent and mark it as deleted."""
        if self.parent is not None:
            self.parent.remove_child(self)
        self.marked_for_deletion = True

    def find_root(self):
        layer = self
        while layer.parent is not None:
            layer = layer.parent
        return layer

    # Document-wide structures, owned by the root

    @property
    def pages(self):
        """The :class:`layout.pages.PageManager` of the document."""
        return self.find_root()._pages

    @pages.setter
    def pages(self, pages):
        assert self.parent is None
        self._pages = pages

    @property
    def running_blocks(self):
        return self.find_root()._running_blocks

    @property
    def page_sequences(self):
        return self.find_root()._page_sequences

    # Floats

    def add_float(self, box):
        if not any(float_ is box for float_ in self.floats):
            self.floats.append(box)

    def remove_float(self, box):
        self.floats = [float_ for float_ in self.floats if float_ is not box]

    # Paint order

    def collect_layers(self, which):
        """Return the descendant nodes painted in the ``which`` tier.

        Children are walked in document order. Nested stacking contexts are
        collected but not entered, their descendants are painted by their own
        pass. Deleted and isolated nodes are skipped with their descendants.

        """
        if which not in TIERS:
            raise ValueError(f'Unknown paint order tier {which!r}')
        result = []
        self._collect_layers(which, result)
        return result

    def _collect_layers(self, which, result):
        for child in self.children:
            if child.marked_for_deletion or child.isolated:
                continue
            if child.tier == which:
                result.append(child)
            if not child.is_stacking_context:
                child._collect_layers(which, result)

    @property
    def tier(self):
        """Paint order tier of this node in its parent stacking context."""
        if self.box.has_auto_z_index():
            return AUTO
        z_index = self.z_index
        if z_index < 0:
            return NEGATIVE
        elif z_index == 0:
            return ZERO
        return POSITIVE

    def sorted_layers(self, which):
        """Return collected nodes sorted by z-index, then tree order."""
        # sort() is stable, so the list is sorted by z-index, then tree order.
        return sorted(
            self.collect_layers(which), key=lambda layer: layer.z_index)

    def composite_order(self):
        """Return the paint order of this stacking context.

        The node itself is painted after negative contexts, then come the
        nodes of the auto tier, then zero and positive contexts.

        """
        return [
            *self.sorted_layers(NEGATIVE),
            self,
            *self.collect_layers(AUTO),
            *self.sorted_layers(ZERO),
            *self.sorted_layers(POSITIVE)]

    def paint_order(self):
        """Return all the nodes of the tree, in paint order."""
        order = []
        for layer in self.composite_order():
            if layer is self or not layer.is_stacking_context:
                order.append(layer)
            else:
                order.extend(layer.paint_order())
        return order

    # Layout

    def finish(self, context):
        """Finish the layout of the node once its box is laid out.

        In paged media, pending absolutely positioned children are laid out.
        Absolutely positioned children in continuous media and relatively
        positioned inline-level children are then moved to their final
        positions.

        """
        if context.is_print:
            layout_absolute_children(context, self)
        self.position_children(context)

    def position_children(self, context):
        for child in self.children:
            box = child.box
            if box.is_absolutely_positioned() and not context.is_print:
                position_absolute(context, box, 'both')
            elif box.is_relative() and child.is_inline:
                relative_positioning(box)

    def painting_dimension(self):
        """Return the ``(x, y, width, height)`` painted by this node.

        This is the margin box of the node's box, grown by the extent of its
        absolutely positioned descendants, fixed boxes excluded.

        """
        box = self.box
        x1, y1 = box.position_x, box.position_y
        x2, y2 = x1 + box.margin_width(), y1 + box.margin_height()
        for layer in self._absolute_descendants():
            x, y, width, height = layer.painting_dimension()
            x1, y1 = min(x1, x), min(y1, y)
            x2, y2 = max(x2, x + width), max(y2, y + height)
        return x1, y1, x2 - x1, y2 - y1

    def _absolute_descendants(self):
        for child in self.children:
            if child.marked_for_deletion or child.isolated:
                continue
            if child.box.is_fixed():
                continue
            if child.box.is_absolutely_positioned():
                yield child
            else:
                yield from child._absolute_descendants()
