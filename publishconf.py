import dataclasses
import os, sys
sys.path.insert(0, os.path.dirname(__file__))
from pelicanconf import *  # noqa

from portfolio.settings import PRODUCTION_OVERRIDES

# SITEURL, FEED_DOMAIN and the image URL all follow the deployed URL
if os.getenv('PORTFOLIO_SITEURL'):
    SITE = dataclasses.replace(SITE, url=os.environ['PORTFOLIO_SITEURL'])
    globals().update(SITE.to_settings())

# Production settings overrides
globals().update(PRODUCTION_OVERRIDES)
