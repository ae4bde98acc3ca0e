"""Build (and optionally deploy) morganzellers.github.io.

Usage:
    portfolio                       # build content/ into output/
    portfolio --deploy              # build, validate, push to the pages branch
    portfolio --deploy --dry-run    # build, validate, report where it would go
    portfolio --production          # absolute URLs and Atom feeds

Environment:
    PORTFOLIO_SITEURL   overrides the configured site URL

Exit codes:
    0 = success
    1 = publish failed (missing content, build errors, broken output, deployment error)
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys

from pelican.log import init as init_logging

from portfolio.exceptions import OutputValidationError, PortfolioError
from portfolio.publish import publish
from portfolio.website import DEPLOYMENT, SITE, THEME


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='portfolio', description=f"Build and deploy {SITE.name}")
    parser.add_argument('--content', default='content', help='Content directory (default: content)')
    parser.add_argument('--output', default='output', help='Output directory (default: output)')
    parser.add_argument('--deploy', action='store_true', help=f'Deploy to {DEPLOYMENT.branch} after building')
    parser.add_argument('--dry-run', action='store_true', help='Report the deployment target instead of pushing')
    parser.add_argument('--production', action='store_true', help='Use publish settings (absolute URLs, feeds)')
    parser.add_argument('--skip-validation', action='store_true', help='Do not check the output for broken references')
    parser.add_argument('--check-external', action='store_true', help='Also check external HTTP(S) links (slow)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        site = SITE
        if os.getenv('PORTFOLIO_SITEURL'):
            site = dataclasses.replace(SITE, url=os.environ['PORTFOLIO_SITEURL'])

        report = publish(
            site,
            THEME,
            DEPLOYMENT if args.deploy else None,
            content_path=args.content,
            output_path=args.output,
            production=args.production,
            validate=not args.skip_validation,
            check_external=args.check_external,
            dry_run=args.dry_run,
        )
    except OutputValidationError as err:
        print(f"[ERROR] Validation failed: {err}", file=sys.stderr)
        for source, issues in sorted(err.errors.items()):
            print(f"  {source}:", file=sys.stderr)
            for issue in issues:
                print(f"    - {issue}", file=sys.stderr)
        return 1
    except PortfolioError as err:
        print(f"[ERROR] {err}", file=sys.stderr)
        return 1

    print(f"[INFO] Site generated in {report.output_path}")
    if report.deployment is not None:
        print(f"[INFO] {report.deployment.message}")
    return 0
