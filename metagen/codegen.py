"""Render templates, format the result and write generated output.

Each output unit (a group of entities sharing a name prefix) becomes one Go
file: <output_root>/<kind>/<lowercase group>.go
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import jinja2

from .errors import FormatError, RenderError, WriteError
from .logging_config import get_logger
from .models import Entity
from .naming import (
    go_doc,
    qualify_foreign_type,
    sanitize_identifier,
    strip_delimiters,
    strip_namespace,
    title_case,
    translate_primitive,
)

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
FILE_EXTENSION = ".go"

DATATYPES = "datatypes"
SERVICE = "service"

# Output unit kind -> template
TEMPLATES: dict[str, str] = {
    DATATYPES: "datatypes.go.j2",
    SERVICE: "service.go.j2",
}


def _prefix_with_package(name: str, package_alias: str) -> str:
    # Filter form: {{ type|prefix_with_package("datatypes") }}
    return qualify_foreign_type(package_alias, name)


def default_helpers() -> dict[str, Callable[..., str]]:
    """Helper functions exposed to templates as filters."""
    return {
        "convert_type": translate_primitive,
        "prefix_with_package": _prefix_with_package,
        "remove_prefix": strip_namespace,
        "remove_reserved": sanitize_identifier,
        "title_case": title_case,
        "desnake": strip_delimiters,
        "go_doc": go_doc,
    }


def _build_environment(
    template_dir: Path,
    helpers: dict[str, Callable[..., str]],
) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update(helpers)
    return env


def entity_context(entity: Entity) -> dict[str, Any]:
    """Template view of an entity with members sorted by name."""
    return {
        "name": entity.name,
        "base": entity.base_name,
        "type_doc": entity.type_doc,
        "service_doc": entity.service_doc or entity.type_doc,
        "properties": [entity.properties[k] for k in sorted(entity.properties)],
        "methods": [entity.methods[k] for k in sorted(entity.methods)],
    }


def render_unit(
    template_name: str,
    entities: Sequence[Entity],
    helpers: dict[str, Callable[..., str]] | None = None,
    template_dir: Path = TEMPLATE_DIR,
) -> str:
    """Render one output unit.

    ``helpers`` replaces the default helper table for this call only.
    """
    env = _build_environment(template_dir, default_helpers() if helpers is None else helpers)
    try:
        template = env.get_template(template_name)
        return template.render(types=[entity_context(e) for e in entities])
    except (jinja2.TemplateError, TypeError, ValueError) as err:
        raise RenderError(f"Failed to render template {template_name}: {err}") from err


def format_source(source: str, command: Sequence[str]) -> str:
    """Pipe ``source`` through the formatter (goimports by default)."""
    try:
        result = subprocess.run(
            list(command),
            input=source,
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as err:
        raise FormatError(f"Formatter {command[0]!r} not found") from err
    except OSError as err:
        raise FormatError(f"Formatter {command[0]!r} could not be run: {err}") from err
    except subprocess.CalledProcessError as err:
        raise FormatError(f"Error while formatting source: {err.stderr.strip()}") from err
    return result.stdout


def output_path(output_root: Path, kind: str, group: str) -> Path:
    return Path(output_root) / kind / (group.lower() + FILE_EXTENSION)


def write_unit(output_root: Path, kind: str, group: str, text: str) -> Path:
    """Write the rendered, formatted text for one output unit."""
    path = output_path(output_root, kind, group)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as err:
        raise WriteError(f"Error creating file {path}: {err}") from err
    return path
