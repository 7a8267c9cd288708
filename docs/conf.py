# Sphinx configuration for the Aether Swarm docs.
import os
import sys

sys.path.insert(0, os.path.abspath('../src'))

project = 'Aether Swarm'
copyright = '2025, Or Muller'
author = 'Or Muller'
release = '0.1.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'myst_parser',
]

source_suffix = {'.md': 'markdown'}
root_doc = 'index'
exclude_patterns = ['_build']

# mocked so the docs build without the provider SDKs installed
autodoc_mock_imports = ['anthropic', 'google', 'fastapi', 'uvicorn']
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'

# docstrings are Google style throughout
napoleon_google_docstring = True
napoleon_numpy_docstring = False

myst_heading_anchors = 2

html_theme = 'sphinx_rtd_theme'
html_title = 'Aether Swarm'
