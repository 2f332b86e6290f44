"""Cascade stylesheets and compute the styles of elements and pages.

Declarations come from the user agent stylesheet, from ``<style>`` elements
and ``style`` attributes of the document, and from user stylesheets. Only
the properties needed to build boxes, stacking nodes and pages are
supported.

https://www.w3.org/TR/CSS21/cascade.html

"""

from collections import namedtuple

import cssselect2
import tinycss2

from .. import CSS
from ..logger import LOGGER, PROGRESS_LOGGER
from .computed_values import COMPUTER_FUNCTIONS
from .properties import INITIAL_VALUES
from .utils import remove_whitespace, split_on_comma
from .validation import preprocess_declarations

#: Type of a page: ``side`` is ``'left'`` or ``'right'``, ``first`` is set on
#: the first page, ``index`` is the 0-based page index and ``name`` is the
#: page name, an empty string for unnamed pages.
PageType = namedtuple('PageType', ['side', 'first', 'index', 'name'])

# Rank of declarations for each origin and importance.
# https://www.w3.org/TR/CSS21/cascade.html#cascading-order
ORIGIN_RANKS = {
    ('user agent', False): 1,
    ('user agent', True): 1,
    ('user', False): 2,
    ('author', False): 3,
    ('author', True): 4,
    ('user', True): 5,
}

# Specificity of declarations in ``style`` attributes.
STYLE_ATTRIBUTE_SPECIFICITY = (1, 0, 0)


class PageSelector(namedtuple('PageSelector', ['side', 'first', 'name'])):
    """Selector of a ``@page`` rule, ``None`` fields match any page."""
    def matches(self, page_type):
        return all(
            value is None or value == getattr(page_type, field)
            for field, value in zip(self._fields, self))


def cascade(cascaded, declarations, origin, specificity):
    """Add ``declarations`` to the ``cascaded`` values of an element.

    ``cascaded`` maps property names to ``(value, weight)``. With equal
    weights, the last declaration wins.

    """
    for name, value, important in declarations:
        weight = (ORIGIN_RANKS[origin, bool(important)], specificity)
        if name not in cascaded or cascaded[name][1] <= weight:
            cascaded[name] = (value, weight)


class StyleFor:
    """Computed styles of the elements and the pages of a document.

    Calling the object with an element returns its :class:`ComputedStyle`.

    """
    def __init__(self, html, sheets):
        #: ``(stylesheet, origin)`` tuples.
        self.sheets = sheets
        self._root = html.etree_element
        # keys: elements and page types, values: cascaded values
        self._cascaded = {}
        # keys: elements and page types, values: ComputedStyle
        self._computed = {}

        PROGRESS_LOGGER.info('Step 2 - Applying CSS')
        for element in self._root.iter():
            attribute = element.get('style')
            if attribute:
                cascade(
                    self._cascaded.setdefault(element, {}),
                    preprocess_declarations(
                        tinycss2.parse_blocks_contents(attribute)),
                    'author', STYLE_ATTRIBUTE_SPECIFICITY)

        # Parents are computed before their children.
        for wrapper in html.wrapper_element.iter_subtree():
            element = wrapper.etree_element
            cascaded = self._cascaded.setdefault(element, {})
            for sheet, origin in sheets:
                for match in sheet.matcher.match(wrapper):
                    specificity, _order, _pseudo_type, declarations = match
                    cascade(cascaded, declarations, origin, specificity)
            parent_style = None
            if wrapper.parent is not None:
                parent_style = self._computed[wrapper.parent.etree_element]
            self._computed[element] = ComputedStyle(parent_style, cascaded)

    def __call__(self, element):
        return self._computed.get(element)

    def page_style(self, page_type):
        """Return the computed style of pages of the given ``page_type``.

        Page styles are cached, they inherit from the root element.

        """
        if page_type not in self._computed:
            cascaded = self._cascaded[page_type] = {}
            for sheet, origin in self.sheets:
                for selector, specificity, declarations in sheet.page_rules:
                    if selector.matches(page_type):
                        cascade(cascaded, declarations, origin, specificity)
            self._computed[page_type] = ComputedStyle(
                self._computed[self._root], cascaded)
        return self._computed[page_type]


class ComputedStyle(dict):
    """Computed values of an element or of a page.

    Values are computed when they are first requested.

    """
    def __init__(self, parent_style, cascaded):
        self.parent_style = parent_style
        self.cascaded = cascaded
        self.is_root_element = parent_style is None

    def __missing__(self, name):
        value = self.cascaded[name][0] if name in self.cascaded else 'initial'
        if value == 'inherit' and self.parent_style is not None:
            # Parent values are already computed.
            self[name] = self.parent_style[name]
            return self[name]
        if value in ('initial', 'inherit'):
            value = INITIAL_VALUES[name]

        if name == 'page' and value == 'auto':
            # The used value comes from the nearest ancestor with a page
            # name, see https://www.w3.org/TR/css-page-3/#using-named-pages
            parent_style = self.parent_style
            value = '' if parent_style is None else parent_style['page']
        elif name in COMPUTER_FUNCTIONS:
            value = COMPUTER_FUNCTIONS[name](self, name, value)
        self[name] = value
        return value


def parse_page_selectors(rule):
    """Parse the selectors of the ``@page`` ``rule``.

    Return a list of dicts with the ``'side'``, ``'first'``, ``'name'`` and
    ``'specificity'`` keys, or ``None`` for invalid and unsupported
    selectors.

    """
    # https://drafts.csswg.org/css-page-3/#syntax-page-selector
    tokens = remove_whitespace(rule.prelude)
    if not tokens:
        return [{
            'side': None, 'first': None, 'name': None,
            'specificity': [0, 0, 0]}]

    selectors = []
    for part in split_on_comma(tokens):
        selector = {
            'side': None, 'first': None, 'name': None,
            'specificity': [0, 0, 0]}
        if part and part[0].type == 'ident':
            selector['name'] = part.pop(0).value
            selector['specificity'][0] = 1
        elif not part:
            return None
        if len(part) % 2:
            return None
        for colon, pseudo_class in zip(part[::2], part[1::2]):
            if colon.type != 'literal' or colon.value != ':':
                return None
            elif pseudo_class.type != 'ident':
                return None
            keyword = pseudo_class.lower_value
            if keyword == 'first':
                selector['first'] = True
                selector['specificity'][1] += 1
            elif keyword in ('left', 'right') and selector['side'] in (
                    None, keyword):
                selector['side'] = keyword
                selector['specificity'][2] += 1
            else:
                return None
        selectors.append(selector)
    return selectors


def parse_media_query(tokens):
    """Return the list of media types of a media query, or ``None``.

    Media features are not supported.

    """
    tokens = remove_whitespace(tokens)
    if not tokens:
        return ['all']
    media_types = []
    for part in split_on_comma(tokens):
        if len(part) != 1 or part[0].type != 'ident':
            return None
        media_types.append(part[0].lower_value)
    return media_types


def evaluate_media_query(media_types, device_media_type):
    return 'all' in media_types or device_media_type in media_types


def _add_selector_rule(rule, matcher):
    try:
        selectors = cssselect2.compile_selector_list(rule.prelude)
    except cssselect2.SelectorError as exception:
        LOGGER.warning('Invalid or unsupported selector, %s', exception)
        return
    for selector in selectors:
        if selector.pseudo_element is not None:
            LOGGER.warning(
                'Invalid or unsupported selector, %r, '
                'unsupported pseudo-element: %s',
                tinycss2.serialize(rule.prelude), selector.pseudo_element)
            return
    declarations = list(preprocess_declarations(
        tinycss2.parse_blocks_contents(rule.content)))
    if declarations:
        for selector in selectors:
            matcher.add_selector(selector, declarations)


def _add_page_rule(rule, page_rules):
    selectors = parse_page_selectors(rule)
    if selectors is None:
        LOGGER.warning(
            'Unsupported @page selector %r, '
            'the whole @page rule was ignored at %d:%d.',
            tinycss2.serialize(rule.prelude),
            rule.source_line, rule.source_column)
        return
    declarations = list(preprocess_declarations(
        tinycss2.parse_blocks_contents(rule.content)))
    if declarations:
        for selector in selectors:
            specificity = tuple(selector.pop('specificity'))
            page_rules.append(
                (PageSelector(**selector), specificity, declarations))


def preprocess_stylesheet(device_media_type, rules, matcher, page_rules):
    """Validate the ``rules`` of a stylesheet once, before it is used.

    Style rules are added to the cssselect2 ``matcher``, ``@page`` rules to
    the ``page_rules`` list as ``(selector, specificity, declarations)``.

    """
    for rule in rules:
        if rule.type in ('whitespace', 'comment'):
            continue
        elif rule.type == 'error':
            LOGGER.warning(
                'Parse error at %d:%d: %s',
                rule.source_line, rule.source_column, rule.message)
        elif rule.content is None:
            LOGGER.warning(
                'Unknown empty rule %s at %d:%d',
                rule, rule.source_line, rule.source_column)
        elif rule.type == 'qualified-rule':
            _add_selector_rule(rule, matcher)
        elif rule.lower_at_keyword == 'page':
            _add_page_rule(rule, page_rules)
        elif rule.lower_at_keyword == 'media':
            media_types = parse_media_query(rule.prelude)
            if media_types is None:
                LOGGER.warning(
                    'Invalid media type %r '
                    'the whole @media rule was ignored at %d:%d.',
                    tinycss2.serialize(rule.prelude),
                    rule.source_line, rule.source_column)
            elif evaluate_media_query(media_types, device_media_type):
                preprocess_stylesheet(
                    device_media_type, tinycss2.parse_rule_list(rule.content),
                    matcher, page_rules)
        else:
            LOGGER.warning(
                'Unknown rule %s at %d:%d',
                rule, rule.source_line, rule.source_column)


def find_stylesheets(wrapper_element, device_media_type):
    """Yield the stylesheets of ``<style>`` elements, in tree order."""
    for wrapper in wrapper_element.query_all('style'):
        element = wrapper.etree_element
        mime_type = element.get('type', 'text/css').split(';')[0].strip()
        media_types = [
            media_type.strip() for media_type in
            (element.get('media', '').strip() or 'all').split(',')]
        if mime_type != 'text/css' or not evaluate_media_query(
                media_types, device_media_type):
            continue
        # Only the text directly in the element is used.
        text = (element.text or '') + ''.join(
            child.tail or '' for child in element)
        yield CSS(string=text, media_type=device_media_type)


def get_all_computed_styles(html, user_stylesheets=None):
    """Return the :class:`StyleFor` object of the ``html`` document."""
    sheets = [(sheet, 'user agent') for sheet in html._ua_stylesheets()]
    sheets.extend(
        (sheet, 'author') for sheet in
        find_stylesheets(html.wrapper_element, html.media_type))
    sheets.extend((sheet, 'user') for sheet in user_stylesheets or ())
    return StyleFor(html, sheets)
