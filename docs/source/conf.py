import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

from deduper import __version__  # noqa: E402

project = 'deduper'
copyright = '2026, deduper contributors'
author = 'deduper contributors'
release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_rtd_theme',
]

autodoc_member_order = 'bysource'
autodoc_typehints = 'description'

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'requests': ('https://requests.readthedocs.io/en/latest/', None),
}

templates_path = ['_templates']
exclude_patterns = []

html_theme = 'sphinx_rtd_theme'
