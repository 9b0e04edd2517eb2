"""Tests for server module."""

from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from pageserve.app_keys import cache_key, default_category_key, renderer_key
from pageserve.assets import get_default_template
from pageserve.config import Config
from pageserve.core.cache import SeedError
from pageserve.server import build_cache, create_app


class TestCreateApp:
    """Tests for create_app()."""

    def test__valid_config__returns_seeded_app(self, test_config: Config) -> None:
        """Create app with a seeded cache and default template."""
        app = create_app(test_config)

        assert app[cache_key].keys() == ["docs"]
        assert app[renderer_key].template_path == get_default_template()
        assert app[default_category_key] == "docs"

    def test__missing_index_page__raises_seed_error(self, test_config: Config) -> None:
        """Refuse to create the app when a seeded page is missing."""
        pages = replace(test_config.pages, index={"docs": "defaults/missing.html"})

        with pytest.raises(SeedError, match="defaults/missing.html"):
            create_app(replace(test_config, pages=pages))

    def test__no_categories__raises_value_error(self, test_config: Config) -> None:
        """Refuse to create the app without categories."""
        pages = replace(test_config.pages, index={}, default=None)

        with pytest.raises(ValueError, match="No page categories configured"):
            create_app(replace(test_config, pages=pages))

    def test__custom_template__used(self, test_config: Config, tmp_path: Path) -> None:
        """Use the configured template instead of the bundled one."""
        template = tmp_path / "layout.html"
        template.write_text("{{ body }}")
        pages = replace(test_config.pages, template=template)

        app = create_app(replace(test_config, pages=pages))

        assert app[renderer_key].template_path == template


class TestBuildCache:
    """Tests for build_cache()."""

    def test__seeds_every_category(self, test_config: Config, content_dir: Path) -> None:
        """Seed one entry per configured category."""
        (content_dir / "defaults" / "blog.html").write_text("<p>Blog</p>")
        pages = replace(
            test_config.pages,
            index={"docs": "defaults/docs.html", "blog": "defaults/blog.html"},
        )

        cache = build_cache(replace(test_config, pages=pages))

        assert cache.keys() == ["docs", "blog"]
        assert cache.lookup("blog").body == "<p>Blog</p>"


class TestPageRoutes:
    """Tests for page routes."""

    @pytest.fixture
    def app(self, test_config: Config) -> web.Application:
        return create_app(test_config)

    @pytest.mark.asyncio
    async def test__root__redirects_to_default_category(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        """Bare root redirects to the default category index."""
        client = await aiohttp_client(app)
        response = await client.get("/", allow_redirects=False)

        assert response.status == 302
        assert response.headers["Location"] == "/docs/"

    @pytest.mark.asyncio
    async def test__unknown_category__redirects(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        """Paths outside configured categories redirect to the default."""
        client = await aiohttp_client(app)
        response = await client.get("/blog/post", allow_redirects=False)

        assert response.status == 302
        assert response.headers["Location"] == "/docs/"

    @pytest.mark.asyncio
    async def test__category_index__serves_seeded_page(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        """Category root serves the seeded index page."""
        client = await aiohttp_client(app)
        response = await client.get("/docs/")

        assert response.status == 200
        assert "text/html" in response.headers["Content-Type"]
        text = await response.text()
        assert "<title>docs</title>" in text
        assert "<p>Docs index</p>" in text

    @pytest.mark.asyncio
    async def test__subpage__loaded_and_cached(
        self, aiohttp_client: Any, app: web.Application, content_dir: Path
    ) -> None:
        """Sub-page is loaded from disk once and then served from cache."""
        client = await aiohttp_client(app)

        first = await client.get("/docs/intro")
        (content_dir / "docs" / "intro.html").unlink()
        second = await client.get("/docs/intro")

        assert first.status == 200
        assert second.status == 200
        assert "<p>Introduction</p>" in await first.text()
        assert "<p>Introduction</p>" in await second.text()
        assert "<title>intro</title>" in await second.text()
        assert "docs/intro" in app[cache_key]

    @pytest.mark.asyncio
    async def test__missing_subpage__returns_not_found_page(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        """Missing sub-page renders the placeholder with 404 and is not cached."""
        client = await aiohttp_client(app)
        response = await client.get("/docs/missing")

        assert response.status == 404
        text = await response.text()
        assert "<title>Resource not found</title>" in text
        assert "404, resource not found" in text
        assert "docs/missing" not in app[cache_key]

    @pytest.mark.asyncio
    async def test__missing_then_created__served(
        self, aiohttp_client: Any, app: web.Application, content_dir: Path
    ) -> None:
        """A page created after a failed lookup is served on retry."""
        client = await aiohttp_client(app)

        before = await client.get("/docs/later")
        (content_dir / "docs" / "later.html").write_text("<p>Later</p>")
        after = await client.get("/docs/later")

        assert before.status == 404
        assert after.status == 200
        assert "<p>Later</p>" in await after.text()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/docs/intro.html", "/docs/a/b", "/docs/hello_world"])
    async def test__invalid_subpath__ignored(
        self, aiohttp_client: Any, app: web.Application, path: str
    ) -> None:
        """Sub-paths outside letters, digits and hyphens never reach the cache."""
        client = await aiohttp_client(app)
        response = await client.get(path, allow_redirects=False)

        assert response.status == 404
        assert await response.text() == ""
        assert app[cache_key].keys() == ["docs"]

    @pytest.mark.asyncio
    async def test__render_failure__returns_500(
        self, aiohttp_client: Any, test_config: Config, tmp_path: Path
    ) -> None:
        """Template errors become internal server errors."""
        template = tmp_path / "broken.html"
        template.write_text("{{ missing.attr }}")
        app = create_app(replace(test_config, pages=replace(test_config.pages, template=template)))

        client = await aiohttp_client(app)
        response = await client.get("/docs/intro")

        assert response.status == 500
        assert "intro" in await response.text()
        assert "docs/intro" in app[cache_key]

    @pytest.mark.asyncio
    async def test__non_utf8_subpage__served(
        self, aiohttp_client: Any, app: web.Application, content_dir: Path
    ) -> None:
        """A readable page with non-UTF-8 bytes is served rather than reported missing."""
        (content_dir / "docs" / "cafe.html").write_bytes(b"<p>caf\xe9</p>")

        client = await aiohttp_client(app)
        response = await client.get("/docs/cafe")

        assert response.status == 200
        assert "<p>caf" in await response.text()
