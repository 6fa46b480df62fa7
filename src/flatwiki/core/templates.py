"""Page templates and their schemes.

A template is a Jinja2 file ``<templates_dir>/<name>.html``. Its scheme is
an optional YAML file ``<schemes_dir>/<name>.yaml`` declaring default
field values and ordering options::

    title: Blog post
    num: date
    fields:
      published:
        default: false
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from jinja2 import Environment, FileSystemLoader, select_autoescape

if TYPE_CHECKING:
    from flatwiki.core.page import Page
    from flatwiki.core.site import SiteContext

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = ".html"
SCHEME_EXTENSION = ".yaml"


@dataclass
class TemplateScheme:
    """Declared fields and options of a template."""

    name: str
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, name: str, path: Path) -> "TemplateScheme":
        """Load a scheme from a YAML file.

        Raises:
            ValueError: If the file does not hold a YAML mapping.
        """
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Scheme {path} must be a mapping")
        return cls(name=name, options=data)

    @property
    def title(self) -> str:
        return self.options.get("title", self.name)

    @property
    def fields(self) -> dict[str, dict[str, Any]]:
        return self.options.get("fields") or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return a top-level scheme option."""
        return self.options.get(key, default)

    def default_field_values(self) -> dict[str, Any]:
        """Return default values of the fields that declare one."""
        return {
            name: options["default"]
            for name, options in self.fields.items()
            if isinstance(options, dict) and "default" in options
        }


class Template:
    """A named page template bound to a registry."""

    def __init__(self, name: str, registry: "TemplateRegistry"):
        self.name = name
        self.registry = registry

    @property
    def scheme(self) -> TemplateScheme:
        return self.registry.scheme(self.name)

    def render(self, page: "Page", site: "SiteContext", **variables: Any) -> str:
        """Render the template for a page.

        The template receives ``page`` and ``site`` plus any extra
        variables.
        """
        jinja_template = self.registry.environment.get_template(
            self.name + TEMPLATE_EXTENSION
        )
        return jinja_template.render(page=page, site=site, **variables)

    def __repr__(self) -> str:
        return f"Template({self.name!r})"


class TemplateRegistry:
    """Lookup of available templates and their schemes."""

    def __init__(self, templates_dir: Path, schemes_dir: Path | None = None):
        self.templates_dir = Path(templates_dir)
        self.schemes_dir = Path(schemes_dir) if schemes_dir is not None else None
        self._names: list[str] | None = None
        self._schemes: dict[str, TemplateScheme] = {}
        self._environment: Environment | None = None

    def names(self) -> list[str]:
        """Names of all templates found in the templates directory."""
        if self._names is None:
            if self.templates_dir.is_dir():
                self._names = sorted(
                    path.stem
                    for path in self.templates_dir.glob("*" + TEMPLATE_EXTENSION)
                    if path.is_file()
                )
            else:
                logger.warning("Templates directory not found: %s", self.templates_dir)
                self._names = []
        return self._names

    def has(self, name: str) -> bool:
        return name in self.names()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def get(self, name: str) -> Template:
        """Return the template with the given name.

        Raises:
            KeyError: If no such template exists.
        """
        if not self.has(name):
            raise KeyError(f"Unknown template: {name}")
        return Template(name, self)

    def scheme(self, name: str) -> TemplateScheme:
        """Return the scheme of a template, empty if it declares none."""
        if name not in self._schemes:
            path = None
            if self.schemes_dir is not None:
                path = self.schemes_dir / (name + SCHEME_EXTENSION)
            if path is not None and path.is_file():
                self._schemes[name] = TemplateScheme.from_file(name, path)
            else:
                logger.debug("No scheme for template %s, using defaults", name)
                self._schemes[name] = TemplateScheme(name=name)
        return self._schemes[name]

    @property
    def environment(self) -> Environment:
        if self._environment is None:
            self._environment = Environment(
                loader=FileSystemLoader(str(self.templates_dir)),
                autoescape=select_autoescape(["html"]),
            )
        return self._environment
