"""A laid out document, with its pages and its stacking tree."""

from .css import get_all_computed_styles
from .formatting_structure.build import build_formatting_structure
from .layout import layout_document
from .layout.pages import PAGED_MODE_PRINT, PAGED_MODE_SCREEN
from .layout.running import FIRST
from .logger import PROGRESS_LOGGER
from .transforms import propagate_transforms

PRESENTATION_MODES = {
    'print': PAGED_MODE_PRINT,
    'screen': PAGED_MODE_SCREEN,
}


class Document:
    """A laid out document, ready to be painted.

    Typically obtained from :meth:`HTML.render() <folio.HTML.render>`, but
    can also be instantiated directly with a root box.

    """
    @classmethod
    def _build_style_for(cls, html, options):
        from . import CSS

        user_stylesheets = []
        for css in options['stylesheets'] or []:
            if not hasattr(css, 'matcher'):
                css = CSS(guess=css, media_type=html.media_type)
            user_stylesheets.append(css)
        return get_all_computed_styles(html, user_stylesheets)

    @classmethod
    def _render(cls, html, options):
        style_for = cls._build_style_for(html, options)
        PROGRESS_LOGGER.info('Step 3 - Creating formatting structure')
        root_box = build_formatting_structure(html.etree_element, style_for)
        media_type = options['media_type'] or html.media_type
        layout_document(
            style_for, root_box, media_type, options['initial_page_number'])
        propagate_transforms(root_box.layer)
        return cls(
            root_box, options['initial_page_number'],
            options['presentation'], options['page_clearance'])

    def __init__(self, root_box, initial_page_number=0, presentation='print',
                 page_clearance=0):
        #: The root :class:`formatting_structure.boxes.BlockBox`.
        self.root_box = root_box
        #: The root :class:`stacking.StackingNode`, owning the pages.
        self.root_layer = root_box.layer
        #: The number given to the first page, ``0`` to start with 1.
        self.initial_page_number = initial_page_number
        #: Clearance around pages when they are painted.
        self.page_clearance = page_clearance
        # keys: boxes, values: nearest stacking node, see _layer_for
        self._layers = None

        if self.root_layer.pages is not None:
            self.root_layer.pages.assign_painting_positions(
                PRESENTATION_MODES[presentation], page_clearance)

    @property
    def pages(self):
        """The list of :class:`formatting_structure.boxes.PageBox`.

        The list is empty for documents laid out in continuous media.

        """
        pages = self.root_layer.pages
        return [] if pages is None else pages.pages

    def paint_order(self):
        """Return the stacking nodes of the document, in paint order."""
        return self.root_layer.paint_order()

    def _layer_for(self, box):
        """Return the stacking node of ``box`` or of its nearest ancestor."""
        if self._layers is None:
            self._layers = {}
            stack = [(self.root_box, self.root_layer)]
            while stack:
                parent, layer = stack.pop()
                layer = parent.layer or layer
                self._layers[parent] = layer
                stack.extend((child, layer) for child in parent.children)
        return self._layers[box]

    def pages_for_box(self, box):
        """Return the list of pages where ``box`` is painted.

        Transforms of the box and of its ancestors are taken into account.

        """
        pages = self.root_layer.pages
        if pages is None or not len(pages):
            return []
        layer = self._layer_for(box)
        x, y = box.position_x, box.position_y
        width, height = box.margin_width(), box.margin_height()
        if layer.transform is None:
            top, bottom = y, y + height
        else:
            _, top, _, bottom = layer.transform.transform_rectangle(
                x, y, width, height)
        # Pages are only queried, never created.
        last_bottom = pages.last_page.bottom
        bottom = min(max(top, bottom - 1), last_bottom)
        if top > last_bottom or bottom < 0:
            return []
        return pages.range(top, bottom)

    def running_block(self, name, page, which=FIRST):
        """Return the running block called ``name`` displayed on ``page``."""
        return self.root_layer.running_blocks.resolve(name, page, which)

    def page_number(self, page):
        """Return the number of ``page`` in its page sequence, from 1."""
        return 1 + self.root_layer.page_sequences.relative_page_number(
            self.root_layer.pages, page, self.initial_page_number)

    def page_count(self, page):
        """Return the number of pages in the page sequence of ``page``."""
        return self.root_layer.page_sequences.relative_page_count(
            self.root_layer.pages, page, self.initial_page_number)

    def max_page_width(self):
        """Return the width of the widest page, with clearance."""
        pages = self.root_layer.pages
        if pages is None:
            return 0
        return pages.max_page_width(self.page_clearance)
