"""End-to-end tests: build the site with Pelican, check and deploy it."""

import dataclasses
import logging
from pathlib import Path

import pytest

from portfolio.deploy import GitHubDeployment
from portfolio.exceptions import BuildError, ContentNotFoundError, OutputValidationError
from portfolio.publish import ErrorCollector, publish
from portfolio.site import Theme
from portfolio.website import DEPLOYMENT, SITE


class TestPublish:
    def test_builds_site(self, content_dir, tmp_path):
        output = tmp_path / 'output'
        report = publish(SITE, content_path=content_dir, output_path=output, validate=False)

        assert report.output_path == output.resolve()
        assert report.deployment is None
        assert (output / 'index.html').exists()
        assert (output / 'posts' / 'index.html').exists()
        assert (output / 'posts' / 'my-first-post' / 'index.html').exists()
        assert (output / 'about' / 'index.html').exists()
        assert (output / 'tags' / 'first' / 'index.html').exists()
        assert (output / 'feed.rss').exists()

        index = (output / 'index.html').read_text(encoding='utf-8')
        assert 'Portfolio' in index

    def test_code_is_highlighted(self, content_dir, tmp_path):
        output = tmp_path / 'output'
        publish(SITE, content_path=content_dir, output_path=output, validate=False)

        post = (output / 'posts' / 'my-first-post' / 'index.html').read_text(encoding='utf-8')
        assert 'class="highlight"' in post
        css = (output / 'theme' / 'css' / 'pygment.css').read_text(encoding='utf-8')
        assert '.highlight' in css

    def test_sitemap(self, content_dir, tmp_path):
        output = tmp_path / 'output'
        publish(SITE, content_path=content_dir, output_path=output, validate=False)

        xml = (output / 'sitemap.xml').read_text(encoding='utf-8')
        assert '<loc>https://your-website-url.com/</loc>' in xml
        assert '<loc>https://your-website-url.com/posts/</loc>' in xml
        assert '<loc>https://your-website-url.com/posts/my-first-post/</loc>' in xml
        assert '<loc>https://your-website-url.com/about/</loc>' in xml
        assert '<lastmod>2021-01-04</lastmod>' in xml

    def test_simple_theme(self, content_dir, tmp_path):
        output = tmp_path / 'output'
        publish(SITE, Theme.SIMPLE, content_path=content_dir, output_path=output, validate=False)
        assert (output / 'posts' / 'my-first-post' / 'index.html').exists()

    def test_dry_run_deployment(self, content_dir, tmp_path):
        report = publish(
            SITE,
            deployment=DEPLOYMENT,
            content_path=content_dir,
            output_path=tmp_path / 'output',
            validate=False,
            dry_run=True,
            work_path=tmp_path / 'work',
        )
        assert report.deployment.message == (
            'would deploy to branch gh-pages of repo git@github.com:morganzellers/morganzellers.github.io.git'
        )
        assert not (tmp_path / 'work').exists()

    def test_missing_content(self, tmp_path):
        with pytest.raises(ContentNotFoundError):
            publish(SITE, content_path=tmp_path / 'content', output_path=tmp_path / 'output')
        assert not (tmp_path / 'output').exists()

    def test_broken_output_is_not_deployed(self, content_dir, tmp_path, monkeypatch):
        (content_dir / 'pages' / 'broken.md').write_text(
            'Title: Broken\n\n[Nowhere](/does-not-exist.html)\n', encoding='utf-8',
        )

        def deploy(*args, **kwargs):
            raise AssertionError('deployment must not run')

        deployment = GitHubDeployment('owner/site')
        monkeypatch.setattr(deployment, 'deploy', deploy)

        with pytest.raises(OutputValidationError) as excinfo:
            publish(SITE, deployment=deployment, content_path=content_dir, output_path=tmp_path / 'output')
        assert excinfo.value.errors['broken/index.html'] == ['Broken link: /does-not-exist.html']


class TestDefaultBuild:
    def test_content_builds_cleanly_with_validation(self, content_dir, tmp_path):
        report = publish(SITE, content_path=content_dir, output_path=tmp_path / 'output')
        assert report.validation_errors == {}
        assert (tmp_path / 'output' / 'index.html').exists()

    def test_description_and_social_preview(self, content_dir, tmp_path):
        site = dataclasses.replace(SITE, image_path='images/preview.png')
        output = tmp_path / 'output'
        publish(site, content_path=content_dir, output_path=output)

        index = (output / 'index.html').read_text(encoding='utf-8')
        assert '<meta name="description" content="A description" />' in index
        assert '<meta property="og:image" content="https://your-website-url.com/images/preview.png" />' in index
        assert '<meta name="twitter:image" content="https://your-website-url.com/images/preview.png" />' in index
        post = (output / 'posts' / 'my-first-post' / 'index.html').read_text(encoding='utf-8')
        assert 'og:image' in post

    def test_no_image_means_no_preview(self, content_dir, tmp_path):
        output = tmp_path / 'output'
        publish(SITE, content_path=content_dir, output_path=output)
        index = (output / 'index.html').read_text(encoding='utf-8')
        assert 'og:image' not in index
        assert '<meta name="twitter:card" content="summary" />' in index

    def test_simple_theme_keeps_a_single_description(self, content_dir, tmp_path):
        output = tmp_path / 'output'
        publish(SITE, Theme.SIMPLE, content_path=content_dir, output_path=output)
        index = (output / 'index.html').read_text(encoding='utf-8')
        assert index.count('name="description"') == 1


class TestBuildErrors:
    def test_unreadable_post_aborts_before_deployment(self, content_dir, tmp_path, monkeypatch):
        (content_dir / 'posts' / 'bad.md').write_text(
            'Title: Bad\nDate: not-a-date\n\nBody\n', encoding='utf-8',
        )

        def deploy(*args, **kwargs):
            raise AssertionError('deployment must not run')

        deployment = GitHubDeployment('owner/site')
        monkeypatch.setattr(deployment, 'deploy', deploy)

        with pytest.raises(BuildError) as excinfo:
            publish(
                SITE,
                deployment=deployment,
                content_path=content_dir,
                output_path=tmp_path / 'output',
                dry_run=True,
            )
        assert any('bad.md' in message for message in excinfo.value.messages)

    def test_collector_is_detached_after_build(self, content_dir, tmp_path):
        publish(SITE, content_path=content_dir, output_path=tmp_path / 'output')
        handlers = logging.getLogger('pelican').handlers
        assert not any(isinstance(handler, ErrorCollector) for handler in handlers)
