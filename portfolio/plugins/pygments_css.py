"""Pelican plugin: Pygments stylesheet for highlighted code blocks.

``markdown.extensions.codehilite`` runs every fenced code block through
Pygments and wraps the result in ``<div class="highlight">``. The colours
come from a stylesheet, which this plugin writes into the output after the
theme's static files have been copied, replacing the theme's own copy.

Configuration (optional in pelicanconf.py):
    PYGMENTS_STYLE = 'default'                     # any Pygments style name
    PYGMENTS_CSS_PATH = 'theme/css/pygment.css'    # relative to OUTPUT_PATH

The CSS class is read from the codehilite ``css_class`` option in ``MARKDOWN``.
"""
from __future__ import annotations

import logging
from pathlib import Path

from pelican import signals
from pygments.formatters import HtmlFormatter
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = 'default'
DEFAULT_CSS_PATH = 'theme/css/pygment.css'


def highlight_class(settings) -> str:
    markdown = settings.get('MARKDOWN') or {}
    configs = markdown.get('extension_configs', {})
    codehilite = configs.get('markdown.extensions.codehilite', {})
    return codehilite.get('css_class', 'highlight')


def build_stylesheet(style_name: str, css_class: str = 'highlight') -> str:
    try:
        get_style_by_name(style_name)
    except ClassNotFound:
        logger.warning("Unknown Pygments style %r, falling back to %r", style_name, DEFAULT_STYLE)
        style_name = DEFAULT_STYLE
    formatter = HtmlFormatter(style=style_name)
    return formatter.get_style_defs(f'.{css_class}') + '\n'


def write_stylesheet(pelican):
    settings = pelican.settings
    css_path = Path(pelican.output_path) / settings.get('PYGMENTS_CSS_PATH', DEFAULT_CSS_PATH)
    css_path.parent.mkdir(parents=True, exist_ok=True)
    css_path.write_text(
        build_stylesheet(settings.get('PYGMENTS_STYLE', DEFAULT_STYLE), highlight_class(settings)),
        encoding='utf-8',
    )
    logger.debug("Wrote Pygments stylesheet to %s", css_path)


def register():  # Pelican entry point
    signals.finalized.connect(write_stylesheet)
