"""Morgan's Portfolio: site configuration and publishing for the Pelican build."""
from portfolio.publish import PublishReport, publish
from portfolio.site import ItemMetadata, Language, SectionID, SiteDescriptor, Theme

__all__ = [
    'ItemMetadata',
    'Language',
    'PublishReport',
    'SectionID',
    'SiteDescriptor',
    'Theme',
    'publish',
]
