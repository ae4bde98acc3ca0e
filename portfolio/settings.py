"""Pelican configuration shared by ``pelicanconf.py``, ``publishconf.py`` and
:func:`portfolio.publish.publish`.

The upper-case constants below are the site-independent part of the
configuration; :meth:`SiteDescriptor.to_settings` supplies the rest.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from pelican.settings import read_settings

from portfolio.site import SiteDescriptor, Theme

# --- Paths ---
PATH = 'content'
OUTPUT_PATH = 'output'
PAGE_PATHS = ['pages']
STATIC_PATHS = ['resources']

# --- Content Settings ---
TIMEZONE = 'UTC'
USE_FOLDER_AS_CATEGORY = True
DELETE_OUTPUT_DIRECTORY = False

# --- URL Settings ---
RELATIVE_URLS = True
ARTICLE_URL = '{category}/{slug}/'
ARTICLE_SAVE_AS = '{category}/{slug}/index.html'
CATEGORY_URL = '{slug}/'
CATEGORY_SAVE_AS = '{slug}/index.html'
PAGE_URL = '{slug}/'
PAGE_SAVE_AS = '{slug}/index.html'
TAG_URL = 'tags/{slug}/'
TAG_SAVE_AS = 'tags/{slug}/index.html'
TAGS_SAVE_AS = 'tags/index.html'

# --- Feed Settings ---
FEED_ALL_RSS = 'feed.rss'
FEED_MAX_ITEMS = 20
FEED_ALL_ATOM = None
CATEGORY_FEED_ATOM = None
TRANSLATION_FEED_ATOM = None
AUTHOR_FEED_ATOM = None
AUTHOR_FEED_RSS = None

# --- Pagination ---
DEFAULT_PAGINATION = 10

# --- Plugins ---
PLUGINS = [
    'portfolio.plugins.item_metadata',
    'portfolio.plugins.pygments_css',
    'portfolio.plugins.sitemap',
]
PYGMENTS_STYLE = 'default'
PYGMENTS_CSS_PATH = 'theme/css/pygment.css'
SITEMAP_SAVE_AS = 'sitemap.xml'

# --- Markdown Extensions ---
MARKDOWN = {
    'extensions': [
        'markdown.extensions.codehilite',
        'markdown.extensions.extra',
        'markdown.extensions.meta',
    ],
    'extension_configs': {
        'markdown.extensions.codehilite': {'css_class': 'highlight', 'guess_lang': False},
    },
    'output_format': 'html5',
}

# --- Theme-Specific Settings ---
# Adds description and social-preview meta tags to the theme's base.html
THEME_TEMPLATES_OVERRIDES = [str(Path(__file__).parent / 'templates')]
DISPLAY_PAGES_ON_MENU = True
DISPLAY_CATEGORIES_ON_MENU = True

# Applied on top of everything else for the deployed build.
PRODUCTION_OVERRIDES = {
    'RELATIVE_URLS': False,
    'FEED_ALL_ATOM': 'feeds/all.atom.xml',
    'CATEGORY_FEED_ATOM': 'feeds/{slug}.atom.xml',
    'DELETE_OUTPUT_DIRECTORY': True,
}

_EXCLUDED = {'PRODUCTION_OVERRIDES'}


def _module_settings() -> dict:
    return {
        key: value
        for key, value in globals().items()
        if key.isupper() and key not in _EXCLUDED
    }


def theme_setting(theme: Union[Theme, str, os.PathLike]) -> str:
    """Pelican's ``THEME`` value for a bundled theme or a theme folder."""
    if isinstance(theme, Theme):
        return theme.value
    return os.fspath(theme)


def site_settings(site: SiteDescriptor, theme: Union[Theme, str, os.PathLike] = Theme.FOUNDATION) -> dict:
    """Settings for a ``pelicanconf.py``: the module constants plus the site."""
    settings = _module_settings()
    settings.update(site.to_settings())
    settings['THEME'] = theme_setting(theme)
    return settings


def build_settings(
    site: SiteDescriptor,
    theme: Union[Theme, str, os.PathLike] = Theme.FOUNDATION,
    content_path: Union[str, os.PathLike] = PATH,
    output_path: Union[str, os.PathLike] = OUTPUT_PATH,
    production: bool = False,
    overrides: Optional[dict] = None,
) -> dict:
    """Fully resolved Pelican settings, ready for ``Pelican(settings)``."""
    settings = site_settings(site, theme)
    settings['PATH'] = str(Path(content_path).resolve())
    settings['OUTPUT_PATH'] = str(Path(output_path).resolve())
    if production:
        settings.update(PRODUCTION_OVERRIDES)
    if overrides:
        settings.update(overrides)
    return read_settings(override=settings)
