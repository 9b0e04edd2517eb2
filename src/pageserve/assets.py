"""Asset discovery for bundled templates.

Locates the default page template shipped inside the pageserve package.
"""

from importlib.resources import files
from pathlib import Path

DEFAULT_TEMPLATE = "page.html"


def get_default_template() -> Path:
    """Return path to the bundled page template.

    Returns:
        Path to the default template file.

    Raises:
        FileNotFoundError: If the template is not bundled.
    """
    template = files("pageserve").joinpath("templates", DEFAULT_TEMPLATE)
    if not template.is_file():
        msg = "Bundled page template not found. Reinstall the pageserve package."
        raise FileNotFoundError(msg)
    return Path(str(template))
