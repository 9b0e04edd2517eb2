"""aiohttp server for pageserve.

Application factory and route registration.
"""

import logging

from aiohttp import web

from pageserve.api.pages import create_pages_routes
from pageserve.app_keys import cache_key, default_category_key, renderer_key
from pageserve.assets import get_default_template
from pageserve.config import Config
from pageserve.core.cache import PageCache
from pageserve.core.renderer import PageRenderer
from pageserve.core.store import DiskFileStore

logger = logging.getLogger(__name__)


def build_cache(config: Config) -> PageCache:
    """Create a page cache and seed it with every configured category.

    Args:
        config: Application configuration

    Returns:
        Seeded PageCache

    Raises:
        ValueError: If no categories are configured
        SeedError: If any index page cannot be loaded
    """
    if not config.pages.index:
        raise ValueError("No page categories configured (pages.index is empty)")

    cache = PageCache(DiskFileStore(config.pages.root))
    for category, path in config.pages.index.items():
        cache.seed(category, path)

    logger.info(f"Seeded {len(cache)} categories from {config.pages.root}")
    return cache


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Seeds the page cache before returning, so a misconfigured content
    directory fails here rather than on the first request.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        ValueError: If no categories are configured
        SeedError: If any index page cannot be loaded
        FileNotFoundError: If the page template doesn't exist
    """
    cache = build_cache(config)
    renderer = PageRenderer(config.pages.template or get_default_template())

    default = config.pages.default or next(iter(config.pages.index))

    app = web.Application()
    app[cache_key] = cache
    app[renderer_key] = renderer
    app[default_category_key] = default

    app.router.add_routes(create_pages_routes(list(config.pages.index)))

    return app


def run_app(app: web.Application, config: Config) -> None:
    """Run the server until interrupted.

    Args:
        app: Application created by create_app()
        config: Application configuration
    """
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
