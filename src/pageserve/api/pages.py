"""Pages endpoint.

Resolves "/<category>/<subpath>" requests through the page cache and
returns the rendered HTML.
"""

import asyncio
import logging

from aiohttp import web

from pageserve.app_keys import cache_key, default_category_key, renderer_key
from pageserve.core.page import NotFound
from pageserve.core.renderer import RenderError

logger = logging.getLogger(__name__)

SUBPATH_PATTERN = "[A-Za-z0-9-]*"


def create_pages_routes(categories: list[str]) -> list[web.RouteDef]:
    """Create routes for the configured categories.

    Order matters: valid page paths first, then other paths under a
    category (ignored), then everything else (redirected to the default
    category).

    Args:
        categories: Configured top-level categories

    Returns:
        List of route definitions
    """
    alternatives = "|".join(categories)
    return [
        web.get(f"/{{category:{alternatives}}}/{{subpath:{SUBPATH_PATTERN}}}", get_page),
        web.get(f"/{{category:{alternatives}}}/{{tail:.*}}", ignore_request),
        web.get("/{path:.*}", index_redirect),
    ]


async def get_page(request: web.Request) -> web.Response:
    category = request.match_info["category"]
    subpath = request.match_info["subpath"]
    cache = request.app[cache_key]
    renderer = request.app[renderer_key]

    # Lookup may read from disk on a miss
    result = await asyncio.to_thread(cache.lookup, category, subpath)

    if isinstance(result, NotFound):
        page, status = result.page, 404
    else:
        page, status = result, 200

    try:
        html = renderer.render(page)
    except RenderError as e:
        logger.error(f"{request.path}: {e}")
        raise web.HTTPInternalServerError(text=str(e)) from e

    return web.Response(text=html, status=status, content_type="text/html")


async def ignore_request(request: web.Request) -> web.Response:
    """Drop requests under a category that don't name a valid page."""
    logger.debug(f"Ignoring unmatched path: {request.path}")
    return web.Response(status=404)


async def index_redirect(request: web.Request) -> web.Response:
    """Redirect to the default category's index page."""
    default = request.app[default_category_key]
    raise web.HTTPFound(f"/{default}/")
