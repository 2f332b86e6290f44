"""Specific handling for HTML documents.

Only the user agent stylesheet is defined here, as elements are never
replaced and text is not rendered.

"""

from importlib.resources import files

from . import CSS, css


def read_text(package, resource):
    return (files(package) / resource).read_text('utf-8')


HTML5_UA = read_text(css, 'html5_ua.css')
HTML5_UA_STYLESHEET = CSS(string=HTML5_UA)
