# Sphinx configuration file

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from scoped_execution import __version__  # noqa: E402

project = 'scoped-execution'
copyright = '2024, Trickl'
author = 'Trickl'
release = __version__
version = '.'.join(__version__.split('.')[:2])

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build']

html_theme = 'sphinx_rtd_theme'

# Module docstrings carry the run protocol; keep members in source order
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'show-inheritance': True,
}
autodoc_member_order = 'bysource'
typehints_defaults = 'comma'

# Google style only
napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
