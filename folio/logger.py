"""Loggers of folio.

``LOGGER`` gets warnings for ignored CSS (unknown properties, invalid values,
unsupported selectors and rules) and debug messages for layout constraints
that cannot be honored, such as boxes still broken by a page break.
``PROGRESS_LOGGER`` gets an info message for each rendering step.

Other modules get the loggers from here, to make sure they are configured.

"""

import contextlib
import logging

LOGGER = logging.getLogger('folio')
if not LOGGER.handlers:  # pragma: no cover
    LOGGER.setLevel(logging.WARNING)
    LOGGER.addHandler(logging.NullHandler())

PROGRESS_LOGGER = logging.getLogger('folio.progress')

MESSAGE_FORMAT = '%(levelname)s: %(message)s'
DEBUG_FORMAT = (
    '%(levelname)s: %(filename)s:%(lineno)d (%(funcName)s): %(message)s')


def log_to_stderr(verbose=False, debug=False):
    """Show the messages of ``LOGGER`` on stderr.

    Warnings are shown by default, information messages if ``verbose`` is
    set, debug messages with their location in the code if ``debug`` is set.

    """
    if debug:
        LOGGER.setLevel(logging.DEBUG)
    elif verbose:
        LOGGER.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(DEBUG_FORMAT if debug else MESSAGE_FORMAT))
    LOGGER.addHandler(handler)
    return handler


class MessageList(logging.Handler):
    """Handler keeping the formatted messages of the records it gets.

    Rendering steps are not kept.

    """
    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self.messages = []
        self.setFormatter(logging.Formatter(MESSAGE_FORMAT))
        self.addFilter(
            lambda record: not record.name.startswith(PROGRESS_LOGGER.name))

    def emit(self, record):
        self.messages.append(self.format(record))


@contextlib.contextmanager
def capture_logs(logger='folio', level=logging.INFO):
    """Give the list of messages logged with at least ``level`` severity.

    The other handlers of the logger are removed while messages are
    captured.

    """
    logger = logging.getLogger(logger)
    handler = MessageList(level)
    previous_handlers, previous_level = logger.handlers, logger.level
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.messages
    finally:
        logger.handlers = previous_handlers
        logger.setLevel(previous_level)
