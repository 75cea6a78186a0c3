"""Tests for administrator resolution."""

import logging

from zevbill.schemas.building import BuildingResponse
from zevbill.schemas.user import AdministratorResponse
from zevbill.services.wizard.administrators import manages, resolve_administrator


def _admin(admin_id: int, managed, is_active: bool = True) -> AdministratorResponse:
    return AdministratorResponse(
        id=admin_id,
        first_name="Admin",
        last_name=str(admin_id),
        is_active=is_active,
        managed_buildings=managed,
    )


def test_member_building_matches_admin_of_its_complex(reference) -> None:
    admin = _admin(60, [2])
    assert resolve_administrator([3], [admin], reference) is admin


def test_direct_match(reference) -> None:
    assert manages([1], 1, reference) is True


def test_complex_matches_admin_of_a_member(reference) -> None:
    assert manages([4], 2, reference) is True


def test_unrelated_building(reference) -> None:
    assert manages([2], 1, reference) is False
    assert manages([], 1, reference) is False


def test_managed_list_as_json_text(reference) -> None:
    admin = _admin(61, "[1]")
    assert resolve_administrator([1], [admin], reference) is admin


def test_first_active_parsable_admin_in_roster_order(reference, source) -> None:
    # 40 is inactive, 41 has an unreadable list, 50 manages complex 2
    admin = resolve_administrator([3], source.administrators, reference)
    assert admin.id == 50

    admin = resolve_administrator([1], source.administrators, reference)
    assert admin.id == 51


def test_any_selected_building_can_match(reference, source) -> None:
    admin = resolve_administrator([5, 1], source.administrators, reference)
    assert admin.id == 51


def test_no_match_returns_none(reference) -> None:
    assert resolve_administrator([5], [_admin(62, [1])], reference) is None
    assert resolve_administrator([], [_admin(63, [1])], reference) is None


def test_unreadable_managed_list_skipped(reference, caplog) -> None:
    broken = _admin(64, "not json")
    fallback = _admin(65, [1])
    with caplog.at_level(logging.WARNING):
        assert resolve_administrator([1], [broken, fallback], reference) is fallback
    assert "administrator 64" in caplog.text


def test_unreadable_complex_membership_skips_admin(make_reference) -> None:
    reference = make_reference(
        buildings=[
            BuildingResponse(id=2, name="Solarpark", is_group=True, group_buildings="[3,"),
            BuildingResponse(id=3, name="Solarpark A"),
        ]
    )
    assert manages([2], 3, reference) is None
    assert resolve_administrator([3], [_admin(66, [2])], reference) is None
