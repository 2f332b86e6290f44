"""Stacking contexts and pagination for CSS box layout.

Documents are loaded with :class:`HTML`, user stylesheets with :class:`CSS`,
and :meth:`HTML.render` gives a :class:`Document` with the pages and the
stacking tree of the laid out boxes.

"""

import contextlib
from pathlib import Path

import cssselect2
import tinycss2
import tinyhtml5

VERSION = __version__ = '1.0'

#: Rendering options accepted by :meth:`HTML.render` and the command line,
#: with their default values.
#:
#: :param list stylesheets:
#:     User stylesheets, given as :class:`CSS` objects, filenames or file
#:     objects.
#: :param str media_type:
#:     Media type of the layout, ``None`` for the media type of the
#:     document. Only ``'print'`` cuts the document into pages.
#: :param int initial_page_number:
#:     Number given to the first page, ``0`` keeps the default numbering.
#: :param str presentation:
#:     ``'print'`` paints the content areas of pages one after the other,
#:     ``'screen'`` paints whole pages with their margins.
#: :param float page_clearance:
#:     Space kept around painted pages.
DEFAULT_OPTIONS = {
    'stylesheets': None,
    'media_type': None,
    'initial_page_number': 0,
    'presentation': 'print',
    'page_clearance': 0,
}

__all__ = [
    'CSS', 'DEFAULT_OPTIONS', 'HTML', 'VERSION', 'Document', '__version__']


# Modules importing the version need it to be set.
from .logger import LOGGER, PROGRESS_LOGGER  # noqa: I001, E402
# Other imports are at the end of the module, they need HTML and CSS.


class HTML:
    """HTML document, parsed with tinyhtml5.

    The source is given as one argument among ``filename`` (a path),
    ``file_obj`` (an object with a ``read`` method) and ``string``. A
    positional argument is a file object if it can be read, a path
    otherwise. Giving no source or more than one raises :exc:`TypeError`.

    ``encoding`` overrides the encoding of bytes sources, ``media_type`` is
    the type matched by ``@media`` rules.

    """
    def __init__(self, guess=None, filename=None, file_obj=None, string=None,
                 encoding=None, media_type='print'):
        PROGRESS_LOGGER.info(
            'Step 1 - Fetching and parsing HTML - %s',
            guess or filename or getattr(file_obj, 'name', 'HTML string'))
        options = {'namespace_html_elements': False}
        with _read_source(guess, filename, file_obj, string) as source:
            if encoding is not None and not isinstance(source, str):
                options['override_encoding'] = encoding
            root = tinyhtml5.parse(source, **options)
        self.media_type = media_type
        self.wrapper_element = cssselect2.ElementWrapper.from_html_root(
            root, content_language=None)
        self.etree_element = self.wrapper_element.etree_element

    def _ua_stylesheets(self):
        return [HTML5_UA_STYLESHEET]

    def render(self, **options):
        """Lay the document out and return its :class:`Document`.

        Options are described in :data:`DEFAULT_OPTIONS`, unknown options
        are ignored with a warning.

        """
        for name in sorted(set(options) - set(DEFAULT_OPTIONS)):
            LOGGER.warning('Unknown rendering option: %s.', name)
        return Document._render(self, {**DEFAULT_OPTIONS, **options})


class CSS:
    """Stylesheet, parsed with tinycss2.

    Sources are given as for :class:`HTML`. Style rules are stored in a
    cssselect2 ``matcher``, ``@page`` rules in the ``page_rules`` list.

    """
    def __init__(self, guess=None, filename=None, file_obj=None, string=None,
                 encoding=None, media_type='print', matcher=None,
                 page_rules=None):
        PROGRESS_LOGGER.info(
            'Step 2 - Fetching and parsing CSS - %s',
            filename or getattr(file_obj, 'name', 'CSS string'))
        with _read_source(guess, filename, file_obj, string) as source:
            if hasattr(source, 'read'):
                source = source.read()
            if isinstance(source, str):
                rules = tinycss2.parse_stylesheet(source)
            else:
                rules, _encoding = tinycss2.parse_stylesheet_bytes(
                    source, environment_encoding=encoding)
        self.matcher = cssselect2.Matcher() if matcher is None else matcher
        self.page_rules = [] if page_rules is None else page_rules
        preprocess_stylesheet(media_type, rules, self.matcher, self.page_rules)


@contextlib.contextmanager
def _read_source(guess, filename, file_obj, string):
    """Give the only source given, as a string or a readable object.

    Files opened from paths are closed when the context is left.

    """
    given = [
        source for source in (guess, filename, file_obj, string)
        if source is not None]
    if len(given) != 1:
        names = ', '.join(map(str, given)) or 'nothing'
        raise TypeError(f'Expected exactly one source, got {names}')
    if guess is not None and hasattr(guess, 'read'):
        file_obj = guess
    elif guess is not None:
        filename = guess
    if filename is not None:
        with open(Path(filename), 'rb') as file_obj:
            yield file_obj
    else:
        yield string if file_obj is None else file_obj


# Circular imports.
from .css import preprocess_stylesheet  # noqa: I001, E402
from .html import HTML5_UA_STYLESHEET  # noqa: E402
from .document import Document  # noqa: E402
