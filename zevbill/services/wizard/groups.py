"""Complex (grouped building) expansion and building-type mixing rules."""

import json
import logging
from collections.abc import Iterable

from zevbill.schemas.building import BuildingResponse

logger = logging.getLogger(__name__)


def parse_id_list(value: list[int] | str | None) -> list[int] | None:
    """Decode an id list that may arrive as a list or as JSON text.

    Returns None when the value cannot be read as a list of integers. Callers
    decide how to treat such a record; nothing is raised.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if not isinstance(value, list):
        return None
    ids: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            return None
        ids.append(item)
    return ids


def group_members(building: BuildingResponse) -> list[int]:
    """Member building ids of a complex; empty if unreadable or not a complex."""
    if not building.is_group:
        return []
    members = parse_id_list(building.group_buildings)
    if members is None:
        logger.warning("Ignoring unreadable member list of complex %s", building.id)
        return []
    return members


def expand(building: BuildingResponse) -> list[int]:
    """Physical building ids a selected building stands for."""
    if building.is_group:
        return group_members(building)
    return [building.id]


def would_conflict(
    selected: Iterable[BuildingResponse],
    candidate: BuildingResponse,
) -> bool:
    """Check whether adding candidate would mix complexes and standalone buildings."""
    return any(b.is_group != candidate.is_group for b in selected if b.id != candidate.id)
