"""PR title and body rendering with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .actions import debug
from .errors import ConfigurationError
from .inputs import PROptions

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "default.md.j2"

# Output is Markdown, not HTML: no autoescaping.
_env = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def render(template: str, variables: dict[str, Any]) -> str:
    """Render ``template`` with ``variables``.

    Raises:
        ConfigurationError: If the template is malformed or uses an unknown
            variable.
    """
    try:
        return _env.from_string(template).render(variables)
    except jinja2.TemplateError as exc:
        raise ConfigurationError(f"failed to render template: {exc}") from exc


def default_template() -> str:
    return (TEMPLATES_DIR / DEFAULT_TEMPLATE).read_text()


def body_template(pr: PROptions) -> str:
    """Pick the PR body template: file, then inline, then the bundled default."""
    if pr.template_file:
        debug(f"reading template from file: {pr.template_file}")
        try:
            template = Path(pr.template_file).read_text()
        except OSError as exc:
            raise ConfigurationError(
                f"cannot read pr-template-file {pr.template_file}: {exc}"
            ) from exc
    else:
        debug("using template from input")
        template = pr.template or ""

    if not template.strip():
        debug("using default template")
        template = default_template()
    return template
