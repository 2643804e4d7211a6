# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------
import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

import trochia

# -- Project information -----------------------------------------------------

project = 'Trochia'
copyright = '2026, Trochia developers'
author = 'Trochia developers'
version = trochia.__version__
release = trochia.__version__

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',      # API pages from trochia docstrings
    'sphinx.ext.napoleon',     # trochia uses NumPy-style sections
    'sphinx.ext.mathjax',      # Kepler/Barker equations in docstrings
    'sphinx.ext.viewcode',     # [source] links into src/trochia
    'myst_parser',             # index.md and api.md are Markdown
]

source_suffix = {'.md': 'markdown', '.rst': 'restructuredtext'}
root_doc = 'index'
templates_path = ['_templates']
exclude_patterns = []

# NumPy docstrings only; the Notes/Raises sections render as admonitions
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_rtype = False

# keep the order of the source files (properties first, then methods)
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'
autodoc_default_options = {
    'members': True,
    'show-inheritance': True,
}

# pandas is imported lazily by Orbit.sample and is not needed to build docs
autodoc_mock_imports = ['pandas']

# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_title = f'Trochia {release}'
