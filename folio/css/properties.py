"""Supported CSS properties and their initial values."""

import collections

#: A CSS length or percentage: ``unit`` is a length unit, ``'%'`` or
#: ``None`` for unitless zero.
Dimension = collections.namedtuple('Dimension', ['value', 'unit'])

ZERO_PIXELS = Dimension(0, 'px')

# Page size keywords, as (width, height) in portrait orientation.
# https://www.w3.org/TR/css-page-3/#page-size
PAGE_SIZES = {
    'a3': (Dimension(297, 'mm'), Dimension(420, 'mm')),
    'a4': (Dimension(210, 'mm'), Dimension(297, 'mm')),
    'a5': (Dimension(148, 'mm'), Dimension(210, 'mm')),
    'b4': (Dimension(250, 'mm'), Dimension(353, 'mm')),
    'b5': (Dimension(176, 'mm'), Dimension(250, 'mm')),
    'ledger': (Dimension(11, 'in'), Dimension(17, 'in')),
    'legal': (Dimension(8.5, 'in'), Dimension(14, 'in')),
    'letter': (Dimension(8.5, 'in'), Dimension(11, 'in')),
}

# No supported property is inherited. The used value of 'page' comes from
# ancestors, see ``ComputedStyle.__missing__``.
INITIAL_VALUES = {
    # Box model and positioning, CSS 2.1
    'display': 'inline',
    'position': 'static',
    'float': 'none',
    'z_index': 'auto',
    'overflow': 'visible',
    'top': 'auto',
    'right': 'auto',
    'bottom': 'auto',
    'left': 'auto',
    'width': 'auto',
    'height': 'auto',
    **{f'{box}_{side}': ZERO_PIXELS
       for box in ('margin', 'padding')
       for side in ('top', 'right', 'bottom', 'left')},

    # Paged Media 3 and Fragmentation 3
    'size': PAGE_SIZES['a4'],
    'page': 'auto',
    'break_before': 'auto',
    'break_inside': 'auto',

    # Transforms 1 and Compositing 1
    'transform': (),
    'transform_origin': (Dimension(50, '%'), Dimension(50, '%')),
    'isolation': 'auto',

    # Proprietary, ``-folio-page-sequence``
    'page_sequence': 'auto',
}

KNOWN_PROPERTIES = {name.replace('_', '-') for name in INITIAL_VALUES}
