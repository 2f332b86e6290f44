"""Computed values of CSS properties.

Lengths are converted into pixels, percentages are kept as they depend on
the layout. Boxes taken out of the flow are blockified.

"""

from .properties import Dimension
from .utils import to_pixels

COMPUTER_FUNCTIONS = {}


def register_computer(*names):
    """Decorator registering ``function`` as computer of ``names``."""
    def decorator(function):
        for name in names:
            COMPUTER_FUNCTIONS[name.replace('-', '_')] = function
        return function
    return decorator


def compute_length(value):
    """Return ``value`` in pixels, percentages and keywords are kept."""
    if value == 'auto' or value.unit == '%':
        return value
    return Dimension(to_pixels(value), 'px')


@register_computer(
    'top', 'right', 'bottom', 'left', 'width', 'height',
    *(f'{box}-{side}' for box in ('margin', 'padding')
      for side in ('top', 'right', 'bottom', 'left')))
def length(style, name, value):
    return compute_length(value)


@register_computer('transform-origin')
def lengths(style, name, value):
    return tuple(compute_length(item) for item in value)


@register_computer('size')
def page_size(style, name, value):
    """Compute the page size as ``(width, height)`` in pixels."""
    return tuple(to_pixels(item) for item in value)


@register_computer('transform')
def transform(style, name, value):
    """Compute the lengths of ``translate`` functions."""
    return tuple(
        (function, lengths(style, name, arguments))
        if function == 'translate' else (function, arguments)
        for function, arguments in value)


def is_out_of_flow(style):
    """Whether ``position`` takes the box out of the flow."""
    position = style['position']
    return position in ('absolute', 'fixed') or position[0] == 'running()'


@register_computer('float')
def compute_float(style, name, value):
    # https://www.w3.org/TR/CSS21/visuren.html#dis-pos-flo
    return 'none' if is_out_of_flow(style) else value


@register_computer('display')
def display(style, name, value):
    """Blockify inline-level boxes that are out of the flow, floated or
    root."""
    # https://www.w3.org/TR/CSS21/visuren.html#dis-pos-flo
    if value in ('inline', 'inline-block') and (
            style.is_root_element or is_out_of_flow(style) or
            style['float'] != 'none'):
        return 'block'
    return value
