"""Resolve the administrator whose sender and bank details prefill invoices."""

import logging
from collections.abc import Iterable, Sequence

from zevbill.schemas.user import AdministratorResponse
from zevbill.services.wizard.groups import parse_id_list
from zevbill.services.wizard.reference import ReferenceData

logger = logging.getLogger(__name__)


def _members(reference: ReferenceData, building_id: int) -> list[int] | None:
    """Members of a complex, [] for standalone or unknown buildings, None if unreadable."""
    building = reference.get_building(building_id)
    if building is None or not building.is_group:
        return []
    return parse_id_list(building.group_buildings)


def manages(
    managed_ids: Sequence[int],
    building_id: int,
    reference: ReferenceData,
) -> bool | None:
    """Check whether a managed-building list covers building_id.

    Matches the building itself, any member of it when it is a complex, or
    any managed complex that contains it. Returns None when a group list
    needed for the decision cannot be read.
    """
    if building_id in managed_ids:
        return True

    members = _members(reference, building_id)
    if members is None:
        return None
    if any(member in managed_ids for member in members):
        return True

    for managed_id in managed_ids:
        managed_members = _members(reference, managed_id)
        if managed_members is None:
            return None
        if building_id in managed_members:
            return True
    return False


def resolve_administrator(
    building_ids: Iterable[int],
    administrators: Iterable[AdministratorResponse],
    reference: ReferenceData,
) -> AdministratorResponse | None:
    """First active administrator, in roster order, managing any selected building.

    Administrators whose building lists cannot be parsed are skipped.
    """
    selected = list(building_ids)
    for admin in administrators:
        if not admin.is_active:
            continue
        managed_ids = parse_id_list(admin.managed_buildings)
        if managed_ids is None:
            logger.warning("Skipping administrator %s: unreadable managed buildings", admin.id)
            continue
        for building_id in selected:
            match = manages(managed_ids, building_id, reference)
            if match is None:
                logger.warning(
                    "Skipping administrator %s: unreadable complex membership", admin.id
                )
                break
            if match:
                return admin
    return None
