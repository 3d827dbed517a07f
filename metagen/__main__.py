"""Entry point: python -m metagen [-o OUTPUT_ROOT]

Fetches the SoftLayer metadata, generates OUTPUT_ROOT/datatypes/*.go and
OUTPUT_ROOT/service/*.go.
"""

from __future__ import annotations

import functools
import sys
from collections.abc import Callable
from pathlib import Path

from .codegen import DATATYPES, SERVICE, TEMPLATES, format_source, render_unit, write_unit
from .config import GeneratorConfig, load_config, parse_args
from .errors import FormatError, GeneratorError, WriteError
from .loader import load_schema
from .logging_config import configure_logging, get_logger
from .models import Entity
from .partition import partition
from .resolver import resolve_services, synthesize_accessors

logger = get_logger(__name__)

Formatter = Callable[[str], str]
Writer = Callable[[Path, str, str, str], Path]


def build_entity_lists(schema: dict[str, Entity]) -> tuple[list[Entity], list[Entity]]:
    """Return (datatypes, services), both sorted by entity name.

    Sorting here keeps the emitted code in a stable order between runs.
    """
    names = sorted(schema)
    types = [schema[name] for name in names]

    # Getters are added before resolution so subclasses inherit them
    expanded = {
        name: entity if entity.is_data_only else synthesize_accessors(entity)
        for name, entity in schema.items()
    }
    services = resolve_services([expanded[name] for name in names], expanded)
    return types, services


def generate(
    schema: dict[str, Entity],
    output_root: Path,
    formatter: Formatter,
    writer: Writer = write_unit,
) -> list[str]:
    """Render and write every output unit; return the groups that failed.

    Render errors propagate. Formatting and write errors are logged and the
    remaining units are still generated.
    """
    types, services = build_entity_lists(schema)
    logger.info("Generating %d datatypes and %d services", len(types), len(services))

    failed: list[str] = []
    for kind, entities in ((DATATYPES, types), (SERVICE, services)):
        for unit in partition(entities):
            source = render_unit(TEMPLATES[kind], unit.entities)
            try:
                path = writer(output_root, kind, unit.name, formatter(source))
            except (FormatError, WriteError) as err:
                logger.error("%s/%s: %s", kind, unit.name, err)
                failed.append(f"{kind}/{unit.name}")
                continue
            logger.info("Wrote %s (%d types)", path, len(unit.entities))

    return failed


def run(config: GeneratorConfig, formatter: Formatter | None = None) -> int:
    """Run the whole pipeline; return the process exit status."""
    if formatter is None:
        formatter = functools.partial(format_source, command=config.formatter)

    schema = load_schema(config.metadata_url, timeout=config.timeout)
    failed = generate(schema, config.output_root, formatter)
    if failed:
        logger.error("%d file(s) failed: %s", len(failed), ", ".join(failed))
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        config = load_config(args)
        configure_logging(config.log_level)
        status = run(config)
    except GeneratorError as err:
        print(f"Error: {err}", file=sys.stderr)
        raise SystemExit(1) from err

    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
