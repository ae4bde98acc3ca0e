"""Pelican plugin attaching the site's typed item metadata to posts and pages.

Each Article and Page gains an ``item_metadata`` attribute built from its
Markdown front matter by the class named in the ``ITEM_METADATA_CLASS``
setting (``portfolio.site.ItemMetadata`` unless configured otherwise), so
templates can rely on ``article.item_metadata`` being present.
"""
from __future__ import annotations

from pelican import signals
from pelican.contents import Article, Page

from portfolio.site import ItemMetadata


def attach_item_metadata(instance):
    if not isinstance(instance, (Article, Page)):
        return
    metadata_class = instance.settings.get('ITEM_METADATA_CLASS') or ItemMetadata
    instance.item_metadata = metadata_class.from_metadata(getattr(instance, 'metadata', {}))


def register():  # Pelican entry point
    signals.content_object_init.connect(attach_item_metadata)
