"""Boxes generated by elements, and their used geometry.

Text is never laid out, so there are no text or line boxes: only boxes
generated by elements take part in the stacking and pagination structures.

The tree is made of:

* a ``BlockBox`` for each block-level element, including the root element;
* an ``InlineBox`` for each inline element, holding its inline children;
* an ``InlineBlockBox`` for each ``inline-block`` element.

``PageBox`` objects are not part of the tree, they describe the pages the
document is cut into. ``Box``, ``ParentBox``, ``BlockLevelBox``,
``InlineLevelBox`` and ``BlockContainerBox`` are only used as base classes.

Borders are not supported: the border box of a box is its padding box.

"""

# Geometry attributes changed by layout, see ``Box.box_dimensions``.
DIMENSIONS = (
    'position_x', 'position_y', 'width', 'height',
    'margin_top', 'margin_right', 'margin_bottom', 'margin_left',
    'padding_top', 'padding_right', 'padding_bottom', 'padding_left')


class Box:
    """Box generated by an element."""
    # Set on the box of the root element by the builder.
    is_for_root_element = False

    # Stacking node owned by this box, if any.
    layer = None

    # Box whose padding box is the containing block of this absolutely
    # positioned box, ``None`` for the initial containing block.
    containing_block = None

    # Position of the box if it were in normal flow, set by layout.
    static_position = (0, 0)

    def __init__(self, element_tag, style, element):
        self.element_tag = element_tag
        self.element = element
        self.style = style
        self.children = []
        self.reset()

    def __repr__(self):
        return f'<{type(self).__name__} {self.element_tag}>'

    def all_children(self):
        return self.children

    def descendants(self):
        """Yield the box, then its descendants in tree order."""
        yield self
        for child in self.children:
            yield from child.descendants()

    def reset(self):
        """Forget the used values set by layout, for the whole subtree."""
        for name in DIMENSIONS:
            setattr(self, name, 0)
        self.top = self.right = self.bottom = self.left = 'auto'
        for child in self.children:
            child.reset()

    def destroy(self):
        """Remove the box and its descendants from the stacking tree.

        Stacking nodes are detached from their parents and marked for
        deletion, running blocks are unregistered.

        """
        root = None
        for box in self.descendants():
            layer = box.layer
            if layer is None or layer.marked_for_deletion:
                continue
            if root is None:
                root = layer.find_root()
            if box.is_running():
                root.running_blocks.unregister(box)
            if layer.parent is not None:
                layer.detach()

    @property
    def box_dimensions(self):
        """Used geometry of the box, as a dict."""
        return {name: getattr(self, name) for name in DIMENSIONS}

    @box_dimensions.setter
    def box_dimensions(self, dimensions):
        for name, value in dimensions.items():
            setattr(self, name, value)

    def translate(self, dx=0, dy=0, move_static_position=False):
        """Move the box and its descendants by ``(dx, dy)``.

        The static positions of descendants follow their ancestors, the
        static position of the box itself is only moved if
        ``move_static_position`` is set.

        """
        if dx == dy == 0:
            return
        self.position_x += dx
        self.position_y += dy
        if move_static_position:
            static_x, static_y = self.static_position
            self.static_position = (static_x + dx, static_y + dy)
        for child in self.all_children():
            child.translate(dx, dy, move_static_position=True)

    # Sizes, from the content box to the margin box

    def padding_width(self):
        return self.padding_left + self.width + self.padding_right

    def padding_height(self):
        return self.padding_top + self.height + self.padding_bottom

    border_width = padding_width
    border_height = padding_height

    def margin_width(self):
        """Width of the box with its paddings and margins."""
        return self.margin_left + self.border_width() + self.margin_right

    def margin_height(self):
        """Height of the box with its paddings and margins."""
        return self.margin_top + self.border_height() + self.margin_bottom

    # Positions of the top left corners, in document coordinates

    def padding_box_x(self):
        return self.position_x + self.margin_left

    def padding_box_y(self):
        return self.position_y + self.margin_top

    def content_box_x(self):
        return self.padding_box_x() + self.padding_left

    def content_box_y(self):
        return self.padding_box_y() + self.padding_top

    border_box_x = padding_box_x
    border_box_y = padding_box_y

    # Positioning schemes

    def is_floated(self):
        return self.style['float'] != 'none'

    def is_absolutely_positioned(self):
        """Return whether the box is absolutely positioned or fixed."""
        return self.style['position'] in ('absolute', 'fixed')

    def is_fixed(self):
        return self.style['position'] == 'fixed'

    def is_relative(self):
        return self.style['position'] == 'relative'

    def is_positioned(self):
        """Return whether the box is relatively or absolutely positioned."""
        return self.is_relative() or self.is_absolutely_positioned()

    def is_running(self):
        """Return whether the box is moved to a running block."""
        return self.style['position'][0] == 'running()'

    @property
    def running_name(self):
        """Identifier of the running block, ``None`` if not running."""
        if self.is_running():
            return self.style['position'][1]

    def is_in_normal_flow(self):
        return not (
            self.is_floated() or self.is_absolutely_positioned() or
            self.is_running())

    def is_inline_level(self):
        return isinstance(self, InlineLevelBox)

    def has_auto_z_index(self):
        # z-index is ignored on static boxes
        return not self.is_positioned() or self.style['z_index'] == 'auto'

    def has_transform(self):
        # 'transform: none' is an empty tuple
        return bool(self.style['transform'])

    def avoids_break_inside(self):
        return self.style['break_inside'] in ('avoid', 'avoid-page')

    def establishes_stacking_context(self):
        """Return whether the stacking node of the box is a context.

        https://www.w3.org/TR/CSS21/zindex.html

        """
        return (
            not self.has_auto_z_index() or
            self.has_transform() or
            self.style['isolation'] == 'isolate')

    def needs_layer(self):
        """Return whether a stacking node is created for this box."""
        return (
            self.is_for_root_element or self.is_positioned() or
            self.is_running() or self.has_transform() or
            self.style['isolation'] == 'isolate' or
            self.style['overflow'] != 'visible')


class ParentBox(Box):
    """Box with a list of children."""
    def __init__(self, element_tag, style, element, children):
        super().__init__(element_tag, style, element)
        self.children = list(children)


class BlockLevelBox(Box):
    """Box stacked vertically with its siblings."""


class BlockContainerBox(ParentBox):
    """Box whose children are all block-level or all inline-level."""


class BlockBox(BlockContainerBox, BlockLevelBox):
    """Box of a ``display: block`` element."""


class InlineLevelBox(Box):
    """Box laid out on lines with its siblings."""


class InlineBox(InlineLevelBox, ParentBox):
    """Box of a ``display: inline`` element.

    Its children are inline-level and share the lines of the box.

    """


class InlineBlockBox(InlineLevelBox, BlockContainerBox):
    """Box of a ``display: inline-block`` element.

    The box is laid out on a line, its children are laid out in it as in a
    block box.

    """


class PageBox(ParentBox):
    """Box for a page.

    A page covers the document Y positions from ``top`` to ``bottom``,
    inclusive: the next page starts at ``bottom + 1``. ``width`` and
    ``height`` are the dimensions of the page content area, ``margin_width()``
    and ``margin_height()`` give the outer page size.

    """
    def __init__(self, page_type, style):
        self.page_type = page_type
        super().__init__(None, style, None, [])
        self.index = page_type.index
        self.name = page_type.name
        self.top = self.bottom = 0
        self.painting_top = self.painting_bottom = 0

    def __repr__(self):
        return f'<{type(self).__name__} {self.index} {self.pseudo_page}>'

    @property
    def pseudo_page(self):
        """Pseudo-page class: ``'first'``, ``'left'`` or ``'right'``."""
        return 'first' if self.page_type.first else self.page_type.side

    def set_top_and_bottom(self, top):
        self.top = top
        self.bottom = top + self.content_height - 1

    @property
    def content_width(self):
        return self.width

    @property
    def content_height(self):
        return self.height

    @property
    def outer_width(self):
        return self.margin_width()

    @property
    def outer_height(self):
        return self.margin_height()
