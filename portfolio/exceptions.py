from __future__ import annotations


class PortfolioError(Exception):
    """Base class for failures raised while building or deploying the site."""


class SiteConfigError(PortfolioError, ValueError):
    """The site descriptor was given an unusable value."""


class ContentNotFoundError(PortfolioError):
    pass


class OutputValidationError(PortfolioError):
    """Generated output references files that do not exist."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        total = sum(len(v) for v in errors.values())
        super().__init__(f"{total} broken reference(s) in {len(errors)} file(s)")


class DeploymentError(PortfolioError):
    pass


class BuildError(PortfolioError):
    """Pelican reported errors while generating the site."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(f"{len(messages)} error(s) while generating the site: {messages[0]}")
