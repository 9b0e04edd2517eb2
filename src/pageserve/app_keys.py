"""Application keys for type-safe app configuration access."""

from aiohttp import web

from pageserve.core.cache import PageCache
from pageserve.core.renderer import PageRenderer

cache_key = web.AppKey("cache", PageCache)
renderer_key = web.AppKey("renderer", PageRenderer)
default_category_key = web.AppKey("default_category", str)
