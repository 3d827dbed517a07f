"""Compute the effective method set of every service.

Services can subclass other services. A service exposes its own methods plus
every method of its base chain that it does not redeclare.

Relational properties additionally get a generated accessor:

  property "virtualGuests" (relational, SoftLayer_Virtual_Guest[])
    -> method "getVirtualGuests" returning SoftLayer_Virtual_Guest[]
"""

from __future__ import annotations

import dataclasses
from collections.abc import Container

from .errors import CyclicInheritanceError, UnknownBaseError
from .logging_config import get_logger
from .models import Entity, Method
from .naming import title_case

logger = get_logger(__name__)


def accessor_name(property_name: str) -> str:
    """Name of the accessor generated for a relational property."""
    return "get" + title_case(property_name)


def synthesize_accessors(entity: Entity) -> Entity:
    """Return a copy of ``entity`` with a getter for each relational property.

    A method the entity declares itself is never replaced by a getter of the
    same name.
    """
    methods = dict(entity.methods)
    for prop in entity.properties.values():
        if not prop.is_relational:
            continue

        name = accessor_name(prop.name)
        if name in entity.methods:
            logger.debug("%s declares %s; skipping generated accessor", entity.name, name)
            continue

        methods[name] = Method(
            name=name,
            return_type=prop.type,
            return_is_array=prop.is_array,
            doc="Retrieve " + prop.doc,
        )

    return dataclasses.replace(entity, methods=methods)


def base_chain(
    entity: Entity,
    schema: dict[str, Entity],
    stop_at: Container[str] = (),
) -> list[Entity]:
    """Return ``entity`` followed by its ancestors, nearest first.

    The walk ends at the root, or early at the first entity named in
    ``stop_at`` (which is included).

    Raises CyclicInheritanceError when the chain revisits a name and
    UnknownBaseError when a base is missing from the schema.
    """
    chain = [entity]
    visited = [entity.name]
    seen = {entity.name}
    current = entity

    while not current.is_root and current.name not in stop_at:
        if current.base_name in seen:
            raise CyclicInheritanceError(visited + [current.base_name])
        if current.base_name not in schema:
            raise UnknownBaseError(current.name, current.base_name)

        current = schema[current.base_name]
        visited.append(current.name)
        seen.add(current.name)
        chain.append(current)

    return chain


def resolve_methods(
    entity: Entity,
    schema: dict[str, Entity],
    cache: dict[str, dict[str, Method]] | None = None,
) -> dict[str, Method]:
    """Merge the methods of the base chain; a subclass overrides its parents.

    ``cache`` maps entity names to their effective method sets. The walk
    stops at the first cached ancestor, and every entity merged on the way
    down is added to it.
    """
    if cache is None:
        cache = {}

    chain = base_chain(entity, schema, stop_at=cache)
    top = chain[-1]
    if top.name in cache:
        methods = dict(cache[top.name])
        chain = chain[:-1]
    else:
        methods = {}

    for ancestor in reversed(chain):
        methods.update(ancestor.methods)
        cache[ancestor.name] = dict(methods)
    return methods


def resolve_services(entities: list[Entity], schema: dict[str, Entity]) -> list[Entity]:
    """Replace each service's methods with its effective method set.

    Data-only entities are dropped; they produce no service wrapper.
    ``schema`` must already contain the accessor-expanded entities so that
    inherited getters are visible to subclasses.
    """
    cache: dict[str, dict[str, Method]] = {}
    services = []

    for entity in entities:
        if entity.is_data_only:
            continue
        methods = resolve_methods(entity, schema, cache)
        services.append(dataclasses.replace(entity, methods=methods))

    return services
