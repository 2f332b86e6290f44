"""Expanders of shorthand and legacy properties into longhands."""

from ..utils import InvalidValues, get_single_keyword
from .properties import validate_non_shorthand

EXPANDERS = {}

# Legacy page break properties: longhand and values of the legacy keywords.
# https://www.w3.org/TR/css-break-3/#page-break-properties
LEGACY_PAGE_BREAKS = {
    'page-break-before': (
        'break-before', {'auto': 'auto', 'avoid': 'avoid', 'always': 'page'}),
    'page-break-inside': ('break-inside', {'auto': 'auto', 'avoid': 'avoid'}),
}

# Indexes of the top, right, bottom and left values in 1 to 4 values.
BOX_SIDES_INDEXES = {
    1: (0, 0, 0, 0),
    2: (0, 1, 0, 1),
    3: (0, 1, 2, 1),
    4: (0, 1, 2, 3),
}


def expander(*names):
    """Decorator registering the expander of the properties ``names``."""
    def decorator(function):
        for name in names:
            assert name not in EXPANDERS, name
            EXPANDERS[name] = function
        return function
    return decorator


@expander('margin', 'padding')
def expand_box_sides(tokens, name):
    """Expand ``margin`` and ``padding`` into the four sides of the box."""
    if len(tokens) not in BOX_SIDES_INDEXES:
        raise InvalidValues(
            f'Expected 1 to 4 token components got {len(tokens)}')
    indexes = BOX_SIDES_INDEXES[len(tokens)]
    for side, index in zip(('top', 'right', 'bottom', 'left'), indexes):
        yield from validate_non_shorthand([tokens[index]], f'{name}-{side}')


@expander(*LEGACY_PAGE_BREAKS)
def expand_legacy_page_break(tokens, name):
    """Expand ``page-break-before`` and ``page-break-inside``."""
    longhand, values = LEGACY_PAGE_BREAKS[name]
    keyword = get_single_keyword(tokens)
    if keyword in ('initial', 'inherit'):
        yield longhand, keyword
    elif keyword in values:
        yield longhand, values[keyword]
    else:
        raise InvalidValues
