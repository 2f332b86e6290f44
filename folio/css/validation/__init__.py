"""Validate declarations and expand shorthand properties."""

from tinycss2 import serialize

from ...logger import LOGGER
from ..utils import InvalidValues, remove_whitespace
from .expanders import EXPANDERS
from .properties import PREFIX, PROPRIETARY, validate_non_shorthand


def standard_name(name):
    """Return the property name without the ``-folio-`` prefix.

    Raise :exc:`InvalidValues` if the prefix is missing on a proprietary
    property or given on a standard one.

    """
    if name.startswith(PREFIX):
        unprefixed = name[len(PREFIX):]
        if unprefixed not in PROPRIETARY:
            raise InvalidValues(
                'prefix on this attribute is not supported, '
                f'use {unprefixed!r} instead')
        return unprefixed
    elif name in PROPRIETARY:
        raise InvalidValues(f'use {PREFIX}{name} instead')
    return name


def preprocess_declarations(declarations):
    """Yield ``(name, value, important)`` for the valid ``declarations``.

    Shorthand properties are expanded and names use underscores. Ignored
    declarations are logged.

    """
    for declaration in declarations:
        if declaration.type == 'error':
            LOGGER.warning(
                'Error: %s at %d:%d.', declaration.message,
                declaration.source_line, declaration.source_column)
            continue
        elif declaration.type != 'declaration':
            continue

        log, reason = LOGGER.warning, None
        name = declaration.lower_name
        tokens = remove_whitespace(declaration.value)
        if name.startswith('-') and not name.startswith(PREFIX):
            log, reason = LOGGER.debug, 'vendor prefixes are ignored'
        else:
            try:
                name = standard_name(name)
                if not tokens:
                    raise InvalidValues('no value')
                validator = EXPANDERS.get(name, validate_non_shorthand)
                longhands = list(validator(tokens, name))
            except InvalidValues as exception:
                reason = (
                    exception.args[0] if exception.args else 'invalid value')

        if reason is not None:
            log(
                'Ignored `%s:%s` at %d:%d, %s.',
                declaration.name, serialize(declaration.value),
                declaration.source_line, declaration.source_column, reason)
            continue
        for longhand, value in longhands:
            yield longhand.replace('-', '_'), value, declaration.important
