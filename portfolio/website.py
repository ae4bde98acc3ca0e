"""The configuration of morganzellers.github.io."""
from portfolio.deploy import GitHubDeployment
from portfolio.site import Language, SectionID, SiteDescriptor, Theme

# Update these properties to configure the website:
SITE = SiteDescriptor(
    url='https://your-website-url.com',
    name="Morgan's Portfolio",
    description='A description',
    language=Language.ENGLISH,
    image_path=None,
    sections=(SectionID.POSTS,),
)

THEME = Theme.FOUNDATION

DEPLOYMENT = GitHubDeployment(
    'morganzellers/morganzellers.github.io',
    branch='refs/remotes/origin/gh-pages',
)
