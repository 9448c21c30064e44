"""Sphinx configuration for the Netminder documentation."""

from __future__ import annotations

import os
import sys
from datetime import datetime

# Autodoc imports the package straight from the checkout.
PROJECT_ROOT = os.path.abspath(os.path.join(__file__, "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

project = "Netminder"
author = "Richard Owen"
copyright = f"{datetime.now():%Y}, {author}"

try:
    from netminder import __version__ as version
except ImportError:  # pragma: no cover
    version = "0.1.0"
release = version

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.mathjax",
]

master_doc = "index"
autosummary_generate = True
# The visualiser is optional; document it without requiring a display stack.
autodoc_mock_imports = ["pygame"]
autodoc_member_order = "bysource"

templates_path = ["_templates"]
exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "sphinx_rtd_theme"
html_title = "Netminder goalie decision core"

autodoc_typehints = "description"
napoleon_google_docstring = False
napoleon_numpy_docstring = True
