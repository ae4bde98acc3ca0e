"""Build the site with Pelican and, on request, deploy it."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from pelican import Pelican

from portfolio.deploy import DEFAULT_WORK_PATH, DeploymentResult, GitDeployment
from portfolio.exceptions import BuildError, ContentNotFoundError, OutputValidationError
from portfolio.settings import build_settings
from portfolio.site import SiteDescriptor, Theme
from portfolio.validate import validate_output

logger = logging.getLogger(__name__)


@dataclass
class PublishReport:
    output_path: Path
    validation_errors: Dict[str, List[str]] = field(default_factory=dict)
    deployment: Optional[DeploymentResult] = None


class ErrorCollector(logging.Handler):
    """Keeps the message of every ERROR record Pelican logs during a build."""

    def __init__(self):
        super().__init__(level=logging.ERROR)
        self.messages: List[str] = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def generate(settings: dict) -> None:
    """Run the Pelican build described by ``settings``.

    Pelican logs unreadable content and template failures and carries on;
    any such error fails the build with ``BuildError`` instead.
    """
    collector = ErrorCollector()
    pelican_logger = logging.getLogger('pelican')
    pelican_logger.addHandler(collector)
    try:
        Pelican(settings).run()
    finally:
        pelican_logger.removeHandler(collector)
    if collector.messages:
        raise BuildError(collector.messages)


def publish(
    site: SiteDescriptor,
    theme: Union[Theme, str, os.PathLike] = Theme.FOUNDATION,
    deployment: Optional[GitDeployment] = None,
    *,
    content_path: Union[str, os.PathLike] = 'content',
    output_path: Union[str, os.PathLike] = 'output',
    production: bool = False,
    validate: bool = True,
    check_external: bool = False,
    dry_run: bool = False,
    work_path: Union[str, os.PathLike] = DEFAULT_WORK_PATH,
    settings_overrides: Optional[dict] = None,
) -> PublishReport:
    """Generate ``site`` with ``theme`` and deploy it when ``deployment`` is given.

    Every failure propagates: a missing content folder raises
    ``ContentNotFoundError``, errors logged by Pelican raise ``BuildError``,
    broken references in the output raise ``OutputValidationError`` and git
    failures raise ``DeploymentError``.
    Nothing is deployed unless the build and the checks succeeded.
    """
    content_path = Path(content_path)
    if not content_path.is_dir():
        raise ContentNotFoundError(f"content directory not found: {content_path}")

    settings = build_settings(
        site,
        theme,
        content_path=content_path,
        output_path=output_path,
        production=production,
        overrides=settings_overrides,
    )
    logger.info("Generating %s into %s", site.name, settings['OUTPUT_PATH'])
    generate(settings)

    report = PublishReport(output_path=Path(settings['OUTPUT_PATH']))

    if validate:
        report.validation_errors = validate_output(report.output_path, check_external=check_external)
        if report.validation_errors:
            raise OutputValidationError(report.validation_errors)

    if deployment is not None:
        report.deployment = deployment.deploy(report.output_path, work_path=Path(work_path), dry_run=dry_run)

    return report
