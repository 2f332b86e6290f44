#!/usr/bin/env python

"""
    Folio
    =====

    Folio lays out HTML documents and builds their pages and stacking
    contexts.

"""

from setuptools import setup

setup()
