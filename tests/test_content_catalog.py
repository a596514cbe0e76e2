"""Tests for content entity parsing and field registries."""

import logging

import pytest

from conftest import make_reason, make_solution, make_variation
from content_catalog.fields import (
    ScoreFieldRegistry,
    governance_field_name,
    variant_note,
)
from content_catalog.schema import (
    ContentSnapshot,
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
    PickupPreference,
    TrafficType,
    numeric_value,
)


class TestTrafficType:
    """Parsing traffic types from content text."""

    @pytest.mark.parametrize("text,expected", [
        ("woon-werkverkeer", TrafficType.COMMUTER),
        ("Woon-werk", TrafficType.COMMUTER),
        ("zakelijk verkeer", TrafficType.BUSINESS),
        ("Bezoekers verkeer", TrafficType.VISITOR),
        ("visitor", TrafficType.VISITOR),
        ("vrachtverkeer", None),
        ("", None),
    ])
    def test_from_string(self, text, expected):
        assert TrafficType.from_string(text) == expected

    def test_parse_list_drops_unknown(self):
        parsed = TrafficType.parse_list(["woon-werkverkeer", "vracht", 3, TrafficType.VISITOR])
        assert parsed == [TrafficType.COMMUTER, TrafficType.VISITOR]

    def test_parse_combined_string(self):
        parsed = TrafficType.parse_list("Woon-werkverkeer en zakelijk verkeer")
        assert parsed == [TrafficType.COMMUTER, TrafficType.BUSINESS]

    def test_parse_empty(self):
        assert TrafficType.parse_list(None) == []


class TestPickupPreference:
    def test_from_string(self):
        assert PickupPreference.from_string(" Thuis ") == PickupPreference.THUIS
        assert PickupPreference.from_string("ov") == PickupPreference.OV

    def test_unknown_is_none(self):
        assert PickupPreference.from_string("fiets") is None
        assert PickupPreference.from_string(None) is None


class TestNumericValue:
    @pytest.mark.parametrize("value,expected", [
        (5, 5.0),
        (2.5, 2.5),
        (True, 0.0),
        ("7", 0.0),
        (None, 0.0),
        (float("nan"), 0.0),
        (float("-inf"), 0.0),
    ])
    def test_numeric_value(self, value, expected):
        assert numeric_value(value) == expected


class TestMobilitySolution:
    """Parsing solutions from content payloads."""

    def test_content_payload(self):
        solution = MobilitySolution.model_validate({
            "id": "s1",
            "title": "Pendeldienst",
            "typeVervoer": ["woon-werkverkeer", "onbekend"],
            "ophalen": ["Vanaf thuis", None, 3],
            "implementationTime": "kort",
            "milieuverordening": 7,
            "imago": "hoog",
        })
        assert solution.type_vervoer == [TrafficType.COMMUTER]
        assert solution.ophalen == ["Vanaf thuis"]
        assert solution.implementation_time == "kort"
        assert solution.attribute("milieuverordening") == 7
        assert solution.numeric_attributes() == {"milieuverordening": 7.0}

    def test_attribute_falls_back_to_declared_fields(self):
        solution = make_solution("s1", category="fiets")
        assert solution.attribute("category") == "fiets"
        assert solution.attribute("nope") is None

    def test_single_pickup_string(self):
        assert make_solution("s1", ophalen="Vanaf locatie").ophalen == ["Vanaf locatie"]


class TestImplementationVariation:
    def test_solution_link_is_flattened(self):
        variation = ImplementationVariation.model_validate({
            "id": "v1",
            "mobiliteitsdienstVariant": {"sys": {"id": "s1"}},
            "governanceModelsMits": [{"sys": {"id": "g1"}}],
        })
        assert variation.mobiliteitsdienst_variant_id == "s1"
        assert variation.governance_models_mits[0].id == "g1"

    def test_text_field(self):
        variation = make_variation(vereniging=" Geschikt ", stichting="")
        assert variation.text_field("vereniging") == "Geschikt"
        assert variation.text_field("stichting") is None
        assert variation.text_field("missing") is None


class TestContentSnapshot:
    def test_lookups(self, repository):
        snapshot = repository.snapshot
        assert snapshot.get_solution("solution-4").title == "Pendeldienst"
        assert snapshot.get_reason("missing") is None
        assert [v.id for v in snapshot.variations_for_solution("solution-4")] == [
            "variation-1", "variation-2",
        ]

    def test_aliases_accepted(self):
        snapshot = ContentSnapshot.model_validate({
            "governanceModels": [{"id": "g1", "title": "Vereniging"}],
            "implementationVariations": [{"id": "v1", "mobiliteitsdienstVariantId": "s1"}],
        })
        assert snapshot.governance_models[0].id == "g1"
        assert snapshot.implementation_variations[0].mobiliteitsdienst_variant_id == "s1"


class TestScoreFieldRegistry:
    """Reason identifier to score field mapping."""

    def test_known_identifier(self):
        solutions = [make_solution("s1", milieu=4)]
        registry = ScoreFieldRegistry.build([make_reason("r1", identifier="milieu")], solutions)

        assert registry.is_known("milieu")
        assert registry.value(solutions[0], "milieu") == 4.0

    def test_case_insensitive_fallback(self):
        solutions = [make_solution("s1", milieu=4)]
        registry = ScoreFieldRegistry.build([make_reason("r1", identifier="Milieu")], solutions)
        assert registry.value(solutions[0], "Milieu") == 4.0

    def test_case_insensitive_fallback_without_solutions(self):
        registry = ScoreFieldRegistry.build([make_reason("r1", identifier="Milieu")])
        assert registry.value(make_solution("s1", milieu=4), "Milieu") == 4.0

    def test_exact_spelling_wins_over_lowercase(self):
        registry = ScoreFieldRegistry.build([make_reason("r1", identifier="Milieu")])
        assert registry.value(make_solution("s1", Milieu=7, milieu=4), "Milieu") == 7.0

    def test_unknown_identifier_is_zero_and_logged(self, caplog):
        solutions = [make_solution("s1", milieu=4)]
        with caplog.at_level(logging.WARNING, logger="content_catalog.fields"):
            registry = ScoreFieldRegistry.build([make_reason("r1", identifier="imago")], solutions)

        assert registry.unknown_identifiers == ["imago"]
        assert not registry.is_known("imago")
        assert registry.value(solutions[0], "imago") == 0.0
        assert "imago" in caplog.text

    def test_without_solutions_accepts_all(self):
        registry = ScoreFieldRegistry.build([make_reason("r1", identifier="imago")])
        assert registry.value(make_solution("s1", imago=6), "imago") == 6.0

    def test_empty_identifier(self):
        registry = ScoreFieldRegistry.build([])
        assert registry.value(make_solution("s1"), None) == 0.0
        assert not registry.is_known(None)


class TestGovernanceFieldName:
    @pytest.mark.parametrize("title,expected", [
        ("Vereniging", "vereniging"),
        ("Ondernemers BIZ", "ondernemersBiz"),
        ("Coöperatie U.A.", "cooperatieUa"),
        ("Geen rechtsvorm", "geenRechtsvorm"),
        ("", None),
        (None, None),
        ("...", None),
    ])
    def test_field_name(self, title, expected):
        assert governance_field_name(title) == expected

    def test_variant_note(self):
        variation = make_variation(ondernemersBiz="Alleen met BIZ-heffing.")
        model = GovernanceModel(id="g4", title="Ondernemers BIZ")
        assert variant_note(variation, model) == "Alleen met BIZ-heffing."
