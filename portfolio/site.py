"""The site descriptor: everything Pelican needs to know about the site itself.

A ``SiteDescriptor`` is built once at start-up and handed to
:func:`portfolio.publish.publish`. It is frozen, so the settings derived from
it are fully determined by the values given at construction::

    SITE = SiteDescriptor(
        url='https://example.com',
        name="Morgan's Portfolio",
        description='A description',
    )

Sections map to Pelican article folders (``content/posts`` for ``posts``)
and, through ``USE_FOLDER_AS_CATEGORY``, to the category each item lands in.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Type
from urllib.parse import urlparse

from portfolio.exceptions import SiteConfigError


class SectionID(str, Enum):
    POSTS = 'posts'


class Language(str, Enum):
    ENGLISH = 'en'
    FRENCH = 'fr'
    GERMAN = 'de'
    SPANISH = 'es'
    SWEDISH = 'sv'


class Theme(str, Enum):
    """Themes bundled with Pelican, looked up by name in its ``themes`` folder."""

    FOUNDATION = 'notmyidea'
    SIMPLE = 'simple'


@dataclass(frozen=True)
class ItemMetadata:
    """Site-specific metadata attached to every post and page.

    Add fields here to make them available to templates as
    ``article.item_metadata.<field>``. Unknown metadata keys are ignored.
    """

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> 'ItemMetadata':
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in metadata.items() if key in known})


def _check_url(raw_url: str) -> str:
    url = (raw_url or '').strip()
    if not url:
        raise SiteConfigError('site url must not be empty')
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise SiteConfigError(f'site url must be absolute, got {raw_url!r}')
    return url.rstrip('/')


def _check_language(language) -> Language:
    try:
        return Language(language)
    except ValueError as err:
        raise SiteConfigError(f'unknown language {language!r}') from err


def _unique_sections(sections) -> Tuple[SectionID, ...]:
    unique = []
    for section in sections:
        try:
            section = SectionID(section)
        except ValueError as err:
            raise SiteConfigError(f'unknown section {section!r}') from err
        if section not in unique:
            unique.append(section)
    return tuple(unique)


@dataclass(frozen=True)
class SiteDescriptor:
    url: str
    name: str
    description: str
    language: Language = Language.ENGLISH
    image_path: Optional[str] = None
    sections: Tuple[SectionID, ...] = tuple(SectionID)
    item_metadata: Type[ItemMetadata] = field(default=ItemMetadata, repr=False)

    def __post_init__(self):
        # frozen: assign normalised values through object.__setattr__
        object.__setattr__(self, 'url', _check_url(self.url))
        object.__setattr__(self, 'language', _check_language(self.language))
        object.__setattr__(self, 'sections', _unique_sections(self.sections))
        if not self.sections:
            raise SiteConfigError('a site needs at least one section')

    @property
    def image_url(self) -> Optional[str]:
        """Absolute URL of the social-preview image, if there is one."""
        if not self.image_path:
            return None
        if urlparse(self.image_path).scheme:
            return self.image_path
        return f"{self.url}/{self.image_path.lstrip('/')}"

    def to_settings(self) -> dict:
        """Pelican settings that describe this site."""
        return {
            'SITENAME': self.name,
            'SITEURL': self.url,
            'SITESUBTITLE': self.description,
            'DESCRIPTION': self.description,
            'DEFAULT_LANG': self.language.value,
            'SITEIMAGE': self.image_path,
            'SITEIMAGE_URL': self.image_url,
            'ARTICLE_PATHS': [section.value for section in self.sections],
            'DEFAULT_CATEGORY': self.sections[0].value,
            'FEED_DOMAIN': self.url,
            'ITEM_METADATA_CLASS': self.item_metadata,
        }
