"""Template rendering using Jinja2.

The dispatcher only chooses a template key and hands over a PageView; this
module turns that into bytes. Template keys resolve to ``<key>.html`` or,
for feeds, ``<key>.xml`` under the templates directory.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound, select_autoescape

from frontend.errors import TemplateRenderError
from frontend.presenters.schemas import PageView

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
SCHEMA_NAMES_FILE = Path(__file__).parent / "definitions" / "schema_names.yaml"

ERROR_TEMPLATE = "error.html"


def load_schema_names(path: Path) -> dict[str, dict[str, str]]:
    """Load per-locale schema labels: ``{locale: {schema_name: label}}``."""
    if not path.exists():
        logger.warning(f"Schema name translations not found: {path}")
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return {
        str(locale): {str(k): str(v) for k, v in (labels or {}).items()}
        for locale, labels in data.items()
    }


class TemplateRenderer:
    """Renders PageViews and error pages through a shared Jinja2 environment."""

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        schema_names_file: Optional[Path] = None,
        default_locale: str = "en",
    ):
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.default_locale = default_locale
        self.schema_names = load_schema_names(schema_names_file or SCHEMA_NAMES_FILE)

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(enabled_extensions=("html", "xml")),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["schema_label"] = self.schema_label

    def schema_label(self, schema_name: str, locale: Optional[str] = None) -> str:
        """Human label for a schema in ``locale``, falling back to the default locale."""
        for code in (locale, self.default_locale):
            if code and schema_name in self.schema_names.get(code, {}):
                return self.schema_names[code][schema_name]
        return schema_name.replace("_", " ").capitalize()

    def render(self, template_key: str, locale: str, view: PageView) -> bytes:
        """Render a page view.

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            template = self.env.select_template([f"{template_key}.html", f"{template_key}.xml"])
            rendered = template.render(view=view, locale=locale)
        except TemplateNotFound as e:
            raise TemplateRenderError(f"Template not found for key '{template_key}': {e}")
        except TemplateError as e:
            raise TemplateRenderError(f"Template rendering error for '{template_key}': {e}")
        return rendered.encode("utf-8")

    def render_error(self, status_code: int, title: str, message: str = "", **context: Any) -> bytes:
        """Render the schema-independent error page."""
        template = self.env.get_template(ERROR_TEMPLATE)
        rendered = template.render(
            status_code=status_code,
            title=title,
            message=message,
            locale=self.default_locale,
            **context,
        )
        return rendered.encode("utf-8")

