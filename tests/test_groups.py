"""Tests for complex expansion and building-type mixing."""

import logging

import pytest

from zevbill.schemas.building import BuildingResponse
from zevbill.services.wizard.groups import expand, group_members, parse_id_list, would_conflict

STANDALONE = BuildingResponse(id=1, name="Sonnenhof")
COMPLEX = BuildingResponse(id=2, name="Solarpark", is_group=True, group_buildings=[3, 4])


class TestParseIdList:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ([3, 4], [3, 4]),
            ("[3, 4]", [3, 4]),
            (None, []),
            ("", []),
            ("[]", []),
        ],
    )
    def test_readable_values(self, value, expected) -> None:
        assert parse_id_list(value) == expected

    @pytest.mark.parametrize("value", ["[3,", '{"id": 3}', '["3"]', "3", [True], [1.5]])
    def test_unreadable_values_return_none(self, value) -> None:
        assert parse_id_list(value) is None


class TestExpand:
    def test_standalone_expands_to_itself(self) -> None:
        assert expand(STANDALONE) == [1]

    def test_complex_expands_to_members_in_order(self) -> None:
        assert expand(COMPLEX) == [3, 4]

    def test_complex_members_stored_as_json_text(self) -> None:
        building = BuildingResponse(id=6, name="Hof", is_group=True, group_buildings="[5, 1]")
        assert expand(building) == [5, 1]

    def test_unreadable_members_expand_to_nothing(self, caplog) -> None:
        building = BuildingResponse(id=7, name="Broken", is_group=True, group_buildings="[5,")
        with caplog.at_level(logging.WARNING):
            assert expand(building) == []
        assert "complex 7" in caplog.text

    def test_standalone_has_no_members(self) -> None:
        assert group_members(STANDALONE) == []


class TestWouldConflict:
    def test_empty_selection_never_conflicts(self) -> None:
        assert not would_conflict([], COMPLEX)
        assert not would_conflict([], STANDALONE)

    def test_mixing_kinds_conflicts(self) -> None:
        assert would_conflict([STANDALONE], COMPLEX)
        assert would_conflict([COMPLEX], STANDALONE)

    def test_same_kind_does_not_conflict(self) -> None:
        other = BuildingResponse(id=5, name="Lindenweg")
        assert not would_conflict([STANDALONE], other)

    def test_candidate_already_selected_is_ignored(self) -> None:
        assert not would_conflict([COMPLEX], COMPLEX)
