"""Pelican plugin writing ``sitemap.xml`` for the generated site.

Entries:
    - the index and every section (category) page: ``daily``, priority 1.0
    - every post and page: ``monthly``, priority 0.5, ``lastmod`` from the
      ``modified`` metadata or the item date

URLs are absolute, built from ``SITEURL``. The file name comes from the
``SITEMAP_SAVE_AS`` setting (default ``sitemap.xml``); set it to an empty
string to disable the sitemap.

Entries are collected once every generator has built its context and written
when Pelican has finished, after the output directory may have been cleaned.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Dict, List, Optional

from pelican import signals

NAMESPACE = 'http://www.sitemaps.org/schemas/sitemap/0.9'

_pending: Dict[str, List['SitemapEntry']] = {}


@dataclass
class SitemapEntry:
    loc: str
    changefreq: str
    priority: float
    lastmod: Optional[datetime] = None


def _absolute(siteurl: str, url: str) -> str:
    return f"{siteurl.rstrip('/')}/{url.lstrip('/')}"


def _lastmod(item) -> Optional[datetime]:
    return getattr(item, 'modified', None) or getattr(item, 'date', None)


def collect_entries(generators) -> List[SitemapEntry]:
    siteurl = generators[0].settings.get('SITEURL', '') if generators else ''
    entries = [SitemapEntry(_absolute(siteurl, ''), 'daily', 1.0)]
    for generator in generators:
        for category, _articles in getattr(generator, 'categories', []):
            entries.append(SitemapEntry(_absolute(siteurl, category.url), 'daily', 1.0))
        for attr in ('articles', 'pages'):
            for item in getattr(generator, attr, []):
                entries.append(SitemapEntry(_absolute(siteurl, item.url), 'monthly', 0.5, _lastmod(item)))
    return entries


def render_sitemap(entries: List[SitemapEntry]) -> str:
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', f'<urlset xmlns="{NAMESPACE}">']
    for entry in entries:
        lines.append('  <url>')
        lines.append(f'    <loc>{escape(entry.loc)}</loc>')
        lines.append(f'    <changefreq>{entry.changefreq}</changefreq>')
        lines.append(f'    <priority>{entry.priority:.1f}</priority>')
        if entry.lastmod:
            lines.append(f'    <lastmod>{entry.lastmod.strftime("%Y-%m-%d")}</lastmod>')
        lines.append('  </url>')
    lines.append('</urlset>')
    return '\n'.join(lines) + '\n'


def remember_entries(generators):
    if not generators:
        return
    output_path = str(generators[0].output_path)
    _pending[output_path] = collect_entries(generators)


def write_sitemap(pelican):
    entries = _pending.pop(str(pelican.output_path), [])
    save_as = pelican.settings.get('SITEMAP_SAVE_AS', 'sitemap.xml')
    if not save_as:
        return
    path = Path(pelican.output_path) / save_as
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_sitemap(entries), encoding='utf-8')


def register():  # Pelican entry point
    signals.all_generators_finalized.connect(remember_entries)
    signals.finalized.connect(write_sitemap)
