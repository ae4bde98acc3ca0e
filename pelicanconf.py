# Settings for `pelican content`; `portfolio` builds from the same source.
from portfolio.settings import site_settings
from portfolio.website import SITE, THEME

# Site information, paths, URLs, feeds, plugins and Markdown
globals().update(site_settings(SITE, THEME))
