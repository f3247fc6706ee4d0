# Sphinx configuration file

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

project = 'Workflow State Machine'
copyright = '2026, Workflow State Machine contributors'
author = 'Workflow State Machine contributors'
release = '0.1.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]

exclude_patterns = ['_build']

autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
}

napoleon_google_docstring = True
