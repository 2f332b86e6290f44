"""Helpers reading tinycss2 tokens as CSS values."""

import math

from .properties import Dimension

# Radians in one angle unit.
# https://drafts.csswg.org/css-values-3/#angles
ANGLE_TO_RADIANS = {
    'deg': math.pi / 180,
    'grad': math.pi / 200,
    'rad': 1,
    'turn': 2 * math.pi,
}

# CSS pixels in one absolute length unit.
# https://www.w3.org/TR/CSS21/syndata.html#length-units
LENGTHS_TO_PIXELS = {
    'px': 1,
    'in': 96,
    'cm': 96 / 2.54,
    'mm': 96 / 25.4,
    'q': 96 / 25.4 / 4,
    'pt': 96 / 72,
    'pc': 96 / 6,
}

# Text is not laid out: font-relative units are relative to a fixed 16px
# font, with glyphs half as wide as high.
FONT_SIZE = 16
FONT_RELATIVE_UNITS = {'em': 1, 'rem': 1, 'ex': 0.5, 'ch': 0.5}


class InvalidValues(ValueError):  # noqa: N818
    """Invalid or unsupported values for a known CSS property."""


def remove_whitespace(tokens):
    """Return ``tokens`` without top-level whitespace and comments."""
    return tuple(
        token for token in tokens
        if token.type not in ('whitespace', 'comment'))


def split_on_comma(tokens):
    """Return the lists of tokens separated by top-level commas."""
    parts = [[]]
    for token in tokens:
        if token.type == 'literal' and token.value == ',':
            parts.append([])
        else:
            parts[-1].append(token)
    return parts


def get_keyword(token):
    """Return the lowercase name of the ``token`` identifier, or ``None``."""
    if token is not None and token.type == 'ident':
        return token.lower_value


def get_single_keyword(tokens):
    """Return the lowercase keyword if ``tokens`` is a single identifier."""
    if len(tokens) == 1:
        return get_keyword(tokens[0])


def get_length(token, negative=True, percentage=False):
    """Return the ``Dimension`` of a <length> or <percentage> token.

    Unitless zero is a length with no unit. Return ``None`` for other tokens
    and for negative values if ``negative`` is not set.

    """
    if token.type == 'number' and token.value == 0:
        return Dimension(0, None)
    if token.type == 'percentage' and percentage:
        length = Dimension(token.value, '%')
    elif token.type == 'dimension' and (
            token.lower_unit in LENGTHS_TO_PIXELS or
            token.lower_unit in FONT_RELATIVE_UNITS):
        length = Dimension(token.value, token.lower_unit)
    else:
        return None
    if negative or length.value >= 0:
        return length


def get_angle(token):
    """Return the value of an <angle> token in radians, or ``None``."""
    if token.type == 'number' and token.value == 0:
        return 0
    if token.type == 'dimension' and token.lower_unit in ANGLE_TO_RADIANS:
        return token.value * ANGLE_TO_RADIANS[token.lower_unit]


def get_number(token):
    """Return the value of a <number> token, or ``None``."""
    if token.type == 'number':
        return token.value


def parse_function(token):
    """Return ``(name, arguments)`` for a function ``token``.

    The name is lowercase, arguments are separated by commas or whitespace.
    Return ``None`` for other tokens, nested functions and misplaced commas.

    """
    if token.type != 'function':
        return None
    arguments = []
    after_comma = True
    for argument in remove_whitespace(token.arguments):
        is_comma = argument.type == 'literal' and argument.value == ','
        if argument.type == 'function' or (is_comma and after_comma):
            return None
        if not is_comma:
            arguments.append(argument)
        after_comma = is_comma
    if arguments and after_comma:
        return None
    return token.lower_name, arguments


def to_pixels(value):
    """Return the number of pixels of a length ``Dimension``."""
    if value.unit in FONT_RELATIVE_UNITS:
        return value.value * FONT_RELATIVE_UNITS[value.unit] * FONT_SIZE
    return value.value * LENGTHS_TO_PIXELS.get(value.unit, 1)
