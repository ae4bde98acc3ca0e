"""Post-build validator for the generated site.

Checks every internal link, media reference and stylesheet in the output
directory before it is deployed. External links are only checked on request
because every one of them costs an HTTP round trip.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

REFERENCE_KINDS = ('links', 'images', 'videos', 'posters', 'audio', 'css', 'external')


def normalize_path(href: str, source_html: Path, output_dir: Path) -> Path | None:
    """Convert href to absolute filesystem path, or None if external/anchor."""
    href = href.strip()

    if not href or href.startswith(('#', 'mailto:', 'http://', 'https://', '//')):
        return None

    # Drop query string and fragment, then URL decode
    href = unquote(urlparse(href).path)
    if not href:
        return None

    if href.startswith('/'):
        # Root-relative: /posts/hello/
        abs_path = (output_dir / href.lstrip('/')).resolve()
    else:
        # Relative: ../theme/css/main.css or ./posts/
        abs_path = (source_html.parent / href).resolve()

    if abs_path.is_dir():
        abs_path = abs_path / 'index.html'
    return abs_path


def extract_references(html_file: Path) -> dict[str, list[str]]:
    """Extract all href/src references from HTML file."""
    refs: dict[str, list[str]] = {kind: [] for kind in REFERENCE_KINDS}

    soup = BeautifulSoup(html_file.read_text(encoding='utf-8'), 'html.parser')

    for a in soup.find_all('a', href=True):
        href = a['href'].strip()
        if href.startswith(('http://', 'https://', '//')):
            refs['external'].append(href)
        elif not href.startswith(('#', 'mailto:')):
            refs['links'].append(href)

    for img in soup.find_all('img', src=True):
        refs['images'].append(img['src'])

    for video in soup.find_all('video'):
        if video.get('poster'):
            refs['posters'].append(video['poster'])
        for source in video.find_all('source', src=True):
            refs['videos'].append(source['src'])

    for audio in soup.find_all('audio', src=True):
        refs['audio'].append(audio['src'])

    for link in soup.find_all('link', href=True, rel='stylesheet'):
        refs['css'].append(link['href'])

    return refs


_MESSAGES = {
    'links': 'Broken link',
    'images': 'Missing image',
    'videos': 'Missing video',
    'posters': 'Missing poster',
    'audio': 'Missing audio',
    'css': 'Missing CSS',
}


def validate_internal_references(output_dir: Path) -> dict[str, list[str]]:
    """Validate all internal links, media and stylesheets, keyed by source file."""
    output_dir = Path(output_dir).resolve()
    errors: dict[str, list[str]] = defaultdict(list)
    html_files = sorted(output_dir.rglob('*.html'))

    logger.info("Validating %d HTML files in %s", len(html_files), output_dir)

    for html_file in html_files:
        refs = extract_references(html_file)
        rel_source = html_file.relative_to(output_dir).as_posix()

        for kind, message in _MESSAGES.items():
            for href in refs[kind]:
                target = normalize_path(href, html_file, output_dir)
                if target is None:
                    continue
                if not target.exists():
                    errors[rel_source].append(f"{message}: {href}")

    return dict(errors)


def check_external_links(output_dir: Path, timeout: float = 10) -> dict[str, list[str]]:
    """Validate external HTTP(S) links with a HEAD request each (slow)."""
    errors: dict[str, list[str]] = defaultdict(list)
    external_links: set[str] = set()

    for html_file in Path(output_dir).rglob('*.html'):
        external_links.update(extract_references(html_file)['external'])

    logger.info("Checking %d unique external links", len(external_links))

    for url in sorted(external_links):
        if url.startswith('//'):
            url = f"https:{url}"
        try:
            resp = requests.head(url, timeout=timeout, allow_redirects=True)
            if resp.status_code >= 400:
                errors['external'].append(f"{url} -> HTTP {resp.status_code}")
        except requests.RequestException as e:
            errors['external'].append(f"{url} -> {type(e).__name__}: {e}")

    return dict(errors)


def validate_output(output_dir: Path, check_external: bool = False) -> dict[str, list[str]]:
    """Run every enabled check and merge the errors, keyed by source file."""
    errors = validate_internal_references(output_dir)
    if check_external:
        errors.update(check_external_links(output_dir))
    return errors
