"""Group entities into output files by their leading name segment.

  SoftLayer_Account, SoftLayer_Account_Address  -> account
  SoftLayer_Virtual_Guest, SoftLayer_Virtual_Disk_Image -> virtual
"""

from __future__ import annotations

from typing import NamedTuple

from .models import Entity
from .naming import DELIMITER, strip_namespace


class OutputUnit(NamedTuple):
    name: str
    entities: list[Entity]


def group_prefix(name: str) -> str:
    """First segment of the namespace-stripped name."""
    return strip_namespace(name).split(DELIMITER, 1)[0]


def partition(entities: list[Entity]) -> list[OutputUnit]:
    """Split a name-sorted entity list into contiguous same-prefix groups."""
    units: list[OutputUnit] = []
    if not entities:
        return units

    current = group_prefix(entities[0].name)
    start = 0
    for i, entity in enumerate(entities[1:], start=1):
        prefix = group_prefix(entity.name)
        if prefix != current:
            units.append(OutputUnit(current, entities[start:i]))
            current = prefix
            start = i

    units.append(OutputUnit(current, entities[start:]))
    return units
