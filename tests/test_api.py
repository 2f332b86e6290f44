"""Test the public API."""

import io
import os
from pathlib import Path

import pytest

from folio import CSS, DEFAULT_OPTIONS, __main__
from folio.document import Document

from .testing_utils import (
    FakeHTML, assert_no_logs, capture_logs, render, resource_path)


def _test_resource(class_, name, check, **kwargs):
    """Common code for testing the HTML and CSS classes."""
    absolute_path = resource_path(name)
    absolute_filename = str(absolute_path)
    check(class_(absolute_path, **kwargs))
    check(class_(absolute_filename, **kwargs))
    check(class_(guess=absolute_path, **kwargs))
    check(class_(filename=absolute_filename, **kwargs))
    with absolute_path.open('rb') as fd:
        check(class_(fd, **kwargs))
    with absolute_path.open('rb') as fd:
        check(class_(file_obj=fd, **kwargs))
    content = absolute_path.read_bytes()
    check(class_(string=content.decode('utf-8'), **kwargs))
    cwd = os.getcwd()
    os.chdir(Path(__file__).parent)
    try:
        check(class_(Path('resources') / name, **kwargs))
    finally:
        os.chdir(cwd)
    with pytest.raises(TypeError):
        class_(filename='foo', string='bar')


def _check_doc1(html):
    """Check that a parsed HTML document looks like resources/doc1.html"""
    root = html.etree_element
    assert root.tag == 'html'
    assert [child.tag for child in root] == ['head', 'body']
    _head, body = root
    assert [child.tag for child in body] == ['div', 'section']
    assert html.media_type == 'print'


def _run(args, stdin=b''):
    stdin = io.BytesIO(stdin)
    stdout = io.StringIO()
    __main__.main(args.split(), stdin=stdin, stdout=stdout, HTML=FakeHTML)
    return stdout.getvalue()


@assert_no_logs
def test_html_parsing():
    _test_resource(FakeHTML, 'doc1.html', _check_doc1)


@assert_no_logs
def test_css_parsing():
    def check_css(css):
        assert css.page_rules == []
        section_rule, = css.matcher.lower_local_name_selectors['section']
        declarations = section_rule[4]
        assert ('z_index', 2, False) in declarations

    _test_resource(CSS, 'style.css', check_css)


@assert_no_logs
@pytest.mark.parametrize('kwargs', (
    {},
    {'filename': 'foo.html', 'string': '<p>'},
    {'guess': 'foo.html', 'file_obj': io.BytesIO(b'<p>')},
))
def test_source_errors(kwargs):
    with pytest.raises(TypeError, match='Expected exactly one source'):
        FakeHTML(**kwargs)
    with pytest.raises(TypeError, match='Expected exactly one source'):
        CSS(**kwargs)


@assert_no_logs
def test_user_stylesheets():
    html = '<div></div>'
    css = '@page { size: 100px } div { height: 250px }'
    for stylesheet in (CSS(string=css), io.BytesIO(css.encode())):
        document = render(html, stylesheets=[stylesheet])
        assert len(document.pages) == 3


def test_unknown_render_option():
    with capture_logs() as logs:
        document = render('<div></div>', unknown_option=True)
    assert logs == ['WARNING: Unknown rendering option: unknown_option.']
    assert isinstance(document, Document)


@assert_no_logs
def test_default_options():
    document = render('<style>@page { size: 100px }</style><div></div>')
    assert DEFAULT_OPTIONS['presentation'] == 'print'
    page, = document.pages
    assert (page.top, page.bottom) == (0, 99)
    assert document.page_number(page) == 1
    assert document.page_count(page) == 1
    assert document.max_page_width() == 100


@assert_no_logs
def test_media_type():
    html = '''
      <style>
        @page { size: 100px }
        div { height: 50px }
        @media print { div { height: 150px } }
      </style>
      <div></div>'''
    assert len(render(html).pages) == 2
    screen = FakeHTML(string=html, media_type='screen').render()
    assert screen.pages == []
    div = screen.root_box.children[0].children[0]
    assert div.height == 50
    # The media type given to render only changes layout.
    continuous = FakeHTML(string=html).render(media_type='screen')
    assert continuous.pages == []
    div = continuous.root_box.children[0].children[0]
    assert div.height == 150


@assert_no_logs
def test_initial_page_number():
    document = render(
        '<style>@page { size: 100px } div { height: 250px }</style>'
        '<div></div>', initial_page_number=5)
    assert [document.page_number(page) for page in document.pages] == [
        5, 6, 7]
    assert document.page_count(document.pages[0]) == 7


@assert_no_logs
@pytest.mark.parametrize('presentation, clearance, tops, width', (
    ('print', 0, [0, 80], 200),
    ('print', 5, [5, 90], 210),
    ('screen', 0, [0, 100], 200),
    ('screen', 10, [10, 120], 220),
))
def test_presentation(presentation, clearance, tops, width):
    document = render('''
      <style>
        @page { size: 200px 100px; margin: 10px 20px }
        div { height: 100px }
      </style>
      <div></div>''', presentation=presentation, page_clearance=clearance)
    assert [page.painting_top for page in document.pages] == tops
    assert document.max_page_width() == width


@assert_no_logs
def test_command_line_render(tmp_path):
    html = b'''
      <style>
        @page { size: 100px }
        div { height: 150px }
        section { position: relative; z-index: 2 }
      </style>
      <div></div><section></section>'''
    (tmp_path / 'doc.html').write_bytes(html)
    expected = (
        "Page 1/2 first '': 0 to 99, painted at 0\n"
        "Page 2/2 left '': 100 to 199, painted at 100\n"
        'Paint order:\n'
        '  html context z-index=auto at 0,0\n'
        '  section context z-index=2 at 0,150\n')

    assert _run(str(tmp_path / 'doc.html')) == expected
    assert _run('-', stdin=html) == expected
    assert _run('- --quiet', stdin=html) == expected

    _run(f'{tmp_path / "doc.html"} {tmp_path / "out.txt"}')
    assert (tmp_path / 'out.txt').read_text('utf-8') == expected

    stylesheet = tmp_path / 'style.css'
    stylesheet.write_text('div { height: 50px !important }', 'utf-8')
    output = _run(f'{tmp_path / "doc.html"} -s {stylesheet} -n 3')
    assert output.startswith("Page 3/3 first '': 0 to 99, painted at 0\n")

    output = _run(f'{tmp_path / "doc.html"} -p screen -c 10 -m print')
    assert "Page 2/2 left '': 100 to 199, painted at 120\n" in output

    assert _run(f'{tmp_path / "doc.html"} -m screen') == (
        'Paint order:\n'
        '  html context z-index=auto at 0,0\n'
        '  section context z-index=2 at 0,150\n')


def test_command_line_version(capsys):
    with pytest.raises(SystemExit):
        __main__.main(['--version'])
    captured = capsys.readouterr()
    assert captured.out.startswith('Folio version')


def test_command_line_logging(capsys):
    html = b'''
      <style>section { color: red; position: relative; z-index: 1 }</style>
      <section></section>'''

    _run('- --quiet', stdin=html)
    assert capsys.readouterr().err == ''

    # Handlers are added by each run.
    _run('-', stdin=html)
    err = capsys.readouterr().err
    assert 'WARNING: Ignored `color: red` at 1:11, unknown property.' in err
    assert 'Step 2' not in err

    _run('- --verbose', stdin=html)
    assert 'INFO: Step 2 - Applying CSS' in capsys.readouterr().err

    _run('- --debug', stdin=html)
    err = capsys.readouterr().err
    assert '(create_stacking_nodes): New stacking context for' in err
