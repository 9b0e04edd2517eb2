"""HTML rendering of pages.

Wraps a single Jinja2 template that receives the page title and body.
"""

from pathlib import Path

import jinja2
from markupsafe import Markup

from pageserve.core.page import Page


class RenderError(Exception):
    """Raised when a page cannot be rendered through the template."""


class PageRenderer:
    """Renders pages through an HTML template.

    The title is HTML-escaped. The body is page content loaded from disk and
    is inserted as-is.
    """

    def __init__(self, template_path: Path) -> None:
        """Initialize renderer.

        Args:
            template_path: Path to the Jinja2 template file

        Raises:
            FileNotFoundError: If the template file doesn't exist
        """
        if not template_path.is_file():
            raise FileNotFoundError(f"Template not found: {template_path}")

        self._template_path = template_path
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(template_path.parent),
            autoescape=True,
            undefined=jinja2.StrictUndefined,
        )

    @property
    def template_path(self) -> Path:
        """Template file used for rendering."""
        return self._template_path

    def render(self, page: Page) -> str:
        """Render a page to HTML.

        Args:
            page: Page to render

        Returns:
            Rendered HTML document

        Raises:
            RenderError: If the template fails to load or render
        """
        try:
            template = self._env.get_template(self._template_path.name)
            return template.render(title=page.title, body=Markup(page.body))
        except jinja2.TemplateError as e:
            raise RenderError(f"Failed to render '{page.title}': {e}") from e
