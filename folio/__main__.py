"""Command-line interface to folio.

The ``folio`` program lays a document out and writes a report of its pages
and of its stacking nodes in paint order.

"""

import argparse
import platform
import sys

from . import DEFAULT_OPTIONS, HTML, __version__
from .logger import log_to_stderr


class PrintInfo(argparse.Action):
    """Print information about the system and exit."""
    def __call__(self, parser, namespace, values, option_string=None):
        uname = platform.uname()
        sys.stdout.write(
            f'System: {uname.system} {uname.release} ({uname.machine})\n'
            f'Folio version: {__version__}\n'
            f'Python version: {platform.python_version()}\n')
        parser.exit()


PARSER = argparse.ArgumentParser(
    prog='folio',
    description='Lay out an HTML document, then report its pages and the '
    'paint order of its positioned boxes.')
PARSER.add_argument(
    'input', help='HTML document to lay out, - to read standard input')
PARSER.add_argument(
    'output', nargs='?', default='-',
    help='file where the report is written, - for standard output')
PARSER.add_argument(
    '--version', action='version', version=f'Folio version {__version__}')
PARSER.add_argument(
    '-i', '--info', action=PrintInfo, nargs=0,
    help='print information about the system and exit')

_layout = PARSER.add_argument_group('layout')
_layout.add_argument('-e', '--encoding', help='character encoding of input')
_layout.add_argument(
    '-s', '--stylesheet', action='append', dest='stylesheets',
    metavar='CSS', help='user stylesheet, can be given more than once')
_layout.add_argument(
    '-m', '--media-type',
    help='media type of the layout, print gives pages (default: print)')
_layout.add_argument(
    '-n', '--initial-page-number', type=int, metavar='NUMBER',
    help='number given to the first page')
_layout.add_argument(
    '-p', '--presentation', choices=('print', 'screen'),
    help='paint page content areas only, or whole pages')
_layout.add_argument(
    '-c', '--page-clearance', type=float, metavar='PIXELS',
    help='space kept around painted pages')

_logging = PARSER.add_argument_group('logging').add_mutually_exclusive_group()
_logging.add_argument(
    '-v', '--verbose', action='store_true',
    help='show rendering steps with warnings')
_logging.add_argument(
    '-d', '--debug', action='store_true',
    help='show debug messages about layout')
_logging.add_argument(
    '-q', '--quiet', action='store_true', help='show no message')

PARSER.set_defaults(**DEFAULT_OPTIONS)


def write_report(document, output):
    """Write the pages and the paint order of ``document`` to ``output``."""
    for page in document.pages:
        output.write(
            f'Page {document.page_number(page)}/{document.page_count(page)} '
            f'{page.pseudo_page} {page.name!r}: '
            f'{page.top:g} to {page.bottom:g}, '
            f'painted at {page.painting_top:g}\n')
    output.write('Paint order:\n')
    for layer in document.paint_order():
        box = layer.box
        kind = 'context' if layer.is_stacking_context else 'layer'
        output.write(
            f'  {box.element_tag} {kind} z-index={box.style["z_index"]} '
            f'at {box.position_x:g},{box.position_y:g}\n')


def main(argv=None, stdout=None, stdin=None, HTML=HTML):  # noqa: N803
    """Run the ``folio`` program.

    .. code-block:: sh

        folio [options] <input> [<output>]

    ``stdout``, ``stdin`` and ``HTML`` replace the standard streams and the
    document class, for tests.

    """
    args = PARSER.parse_args(argv)
    if not args.quiet:
        log_to_stderr(verbose=args.verbose, debug=args.debug)

    source = (stdin or sys.stdin.buffer) if args.input == '-' else args.input
    html = HTML(
        source, encoding=args.encoding, media_type=args.media_type or 'print')
    document = html.render(
        **{name: getattr(args, name) for name in DEFAULT_OPTIONS})

    if args.output == '-':
        write_report(document, stdout or sys.stdout)
    else:
        with open(args.output, 'w', encoding='utf-8') as output:
            write_report(document, output)


if __name__ == '__main__':  # pragma: no cover
    main()
