"""Validators of longhand properties.

Validators take the list of tokens of a declaration, whitespace removed, and
return the specified value or ``None`` if the tokens are invalid.

"""

from ..properties import KNOWN_PROPERTIES, PAGE_SIZES, ZERO_PIXELS, Dimension
from ..utils import (
    InvalidValues, get_angle, get_keyword, get_length, get_number,
    get_single_keyword, parse_function, remove_whitespace)

PREFIX = '-folio-'
PROPRIETARY = set()

# keys: property names with hyphens, values: validators
PROPERTIES = {}

# Keyword-only properties and their allowed values.
KEYWORDS = {
    'display': ('inline', 'block', 'inline-block', 'none'),
    'float': ('none', 'left', 'right'),
    'overflow': ('visible', 'hidden', 'clip', 'scroll', 'auto'),
    'isolation': ('auto', 'isolate'),
    'break-before': (
        'auto', 'avoid', 'avoid-page', 'page', 'left', 'right', 'recto',
        'verso'),
    'break-inside': ('auto', 'avoid', 'avoid-page'),
    'page-sequence': ('auto', 'start'),
}

FIFTY_PERCENT = Dimension(50, '%')
HORIZONTAL_POSITIONS = {
    'left': Dimension(0, '%'),
    'center': FIFTY_PERCENT,
    'right': Dimension(100, '%'),
}
VERTICAL_POSITIONS = {
    'top': Dimension(0, '%'),
    'center': FIFTY_PERCENT,
    'bottom': Dimension(100, '%'),
}


def property(name=None, proprietary=False):
    """Decorator registering a validator for the property ``name``.

    The name is taken from the function name if not given. Proprietary
    properties are only accepted with the ``-folio-`` prefix.

    """
    def decorator(function):
        property_name = name or function.__name__.replace('_', '-')
        assert property_name in KNOWN_PROPERTIES, property_name
        assert property_name not in PROPERTIES, property_name
        PROPERTIES[property_name] = function
        if proprietary:
            PROPRIETARY.add(property_name)
        return function
    return decorator


def validate_non_shorthand(tokens, name):
    """Return ``((name, value),)`` for a longhand declaration.

    The returned name uses underscores. Raise :exc:`InvalidValues` for
    unknown properties and invalid values.

    """
    if name not in PROPERTIES:
        raise InvalidValues('unknown property')
    value = get_single_keyword(tokens)
    if value not in ('initial', 'inherit'):
        value = PROPERTIES[name](tokens)
        if value is None:
            raise InvalidValues
    return ((name.replace('-', '_'), value),)


def keywords_validator(keywords):
    def validator(tokens):
        keyword = get_single_keyword(tokens)
        if keyword in keywords:
            return keyword
    return validator


def length_validator(negative=True, auto=True):
    """Return a validator of a single length, percentage or ``auto``."""
    def validator(tokens):
        if len(tokens) != 1:
            return None
        if auto and get_keyword(tokens[0]) == 'auto':
            return 'auto'
        return get_length(tokens[0], negative, percentage=True)
    return validator


for _name, _keywords in KEYWORDS.items():
    property(_name, proprietary=_name == 'page-sequence')(
        keywords_validator(_keywords))

for _side in ('top', 'right', 'bottom', 'left'):
    property(_side)(length_validator())
    property(f'margin-{_side}')(length_validator())
    property(f'padding-{_side}')(length_validator(negative=False, auto=False))

for _name in ('width', 'height'):
    property(_name)(length_validator(negative=False))


@property()
def position(tokens):
    """Validate ``position``, running elements give ``('running()', name)``.

    See https://www.w3.org/TR/css-gcpm-3/#running-elements

    """
    if len(tokens) != 1:
        return None
    token, = tokens
    if token.type == 'function' and token.lower_name == 'running':
        arguments = remove_whitespace(token.arguments)
        if len(arguments) == 1 and arguments[0].type == 'ident':
            return ('running()', arguments[0].value)
    elif get_keyword(token) in ('static', 'relative', 'absolute', 'fixed'):
        return token.lower_value


@property()
def z_index(tokens):
    if get_single_keyword(tokens) == 'auto':
        return 'auto'
    if len(tokens) == 1 and tokens[0].type == 'number':
        return tokens[0].int_value


@property()
def page(tokens):
    """Validate ``page``, names are case-sensitive."""
    if len(tokens) == 1 and tokens[0].type == 'ident':
        if tokens[0].lower_value == 'auto':
            return 'auto'
        return tokens[0].value


@property()
def size(tokens):
    """Validate ``size`` as ``(width, height)``.

    See https://www.w3.org/TR/css-page-3/#page-size-prop

    """
    lengths = [get_length(token, negative=False) for token in tokens]
    if all(lengths) and len(lengths) in (1, 2):
        return (lengths[0], lengths[-1])

    page_size = orientation = None
    for keyword in map(get_keyword, tokens):
        if keyword in ('portrait', 'landscape') and orientation is None:
            orientation = keyword
        elif keyword in PAGE_SIZES and page_size is None:
            page_size = keyword
        elif not (keyword == 'auto' and len(tokens) == 1):
            return None
    width, height = PAGE_SIZES[page_size or 'a4']
    return (height, width) if orientation == 'landscape' else (width, height)


def _position(token, keywords):
    if token is None:
        return FIFTY_PERCENT
    return get_length(token, percentage=True) or keywords.get(
        get_keyword(token))


@property()
def transform_origin(tokens):
    """Validate ``transform-origin`` as ``(x, y)``, the depth is ignored."""
    if len(tokens) not in (1, 2, 3):
        return None
    first, second = tokens[0], tokens[1] if len(tokens) > 1 else None
    x = _position(first, HORIZONTAL_POSITIONS)
    y = _position(second, VERTICAL_POSITIONS)
    if x and y:
        return x, y
    if any(get_length(token, percentage=True) for token in tokens[:2]):
        return None
    # Keywords can be given in (vertical, horizontal) order.
    x = _position(second, HORIZONTAL_POSITIONS)
    y = _position(first, VERTICAL_POSITIONS)
    if x and y:
        return x, y


# Transform functions with one value per axis: argument parser and value
# leaving the axis unchanged.
AXIS_FUNCTIONS = {
    'translate': (lambda token: get_length(token, percentage=True),
                  ZERO_PIXELS),
    'scale': (get_number, 1),
    'skew': (get_angle, 0),
}


def parse_transform_function(token):
    """Return ``(name, arguments)`` for a 2D transform function token."""
    function = parse_function(token)
    if function is None:
        return None
    name, arguments = function
    if name == 'matrix':
        values = tuple(map(get_number, arguments))
        if len(values) == 6 and None not in values:
            return name, values
        return None
    if name == 'rotate':
        if len(arguments) == 1 and get_angle(arguments[0]) is not None:
            return name, get_angle(arguments[0])
        return None

    axis = None
    if name not in AXIS_FUNCTIONS and name[-1:] in ('x', 'y'):
        name, axis = name[:-1], name[-1]
    if name not in AXIS_FUNCTIONS:
        return None
    parse, unchanged = AXIS_FUNCTIONS[name]
    values = [parse(argument) for argument in arguments]
    if None in values or len(values) not in ((1,) if axis else (1, 2)):
        return None
    if len(values) == 2:
        return name, tuple(values)
    value, = values
    if axis == 'y':
        return name, (unchanged, value)
    elif axis is None and name == 'scale':
        return name, (value, value)
    return name, (value, unchanged)


@property()
def transform(tokens):
    """Validate ``transform`` as a tuple of ``(name, arguments)``."""
    if get_single_keyword(tokens) == 'none':
        return ()
    transforms = tuple(map(parse_transform_function, tokens))
    if None not in transforms:
        return transforms
