"""End-to-end tests of the advisor engine on the bundled mock content."""

import pytest

from content_catalog.exceptions import EntityNotFoundError
from content_catalog.repository import ContentRepository
from content_catalog.schema import BusinessParkReason, ContentSnapshot, MobilitySolution
from mobility_advisor.config import AdvisorConfig
from mobility_advisor.engine import AdvisorEngine
from mobility_advisor.schema import WizardSelection
from mobility_advisor.scorer import SolutionScorer


def ids(models):
    return [m.id for m in models]


@pytest.fixture
def engine(repository) -> AdvisorEngine:
    return AdvisorEngine(repository)


class TestRankSolutions:
    """The solutions page: filter, score, order and group."""

    def test_full_selection(self, engine):
        selection = WizardSelection(
            selected_reasons=["reason-1"],
            business_park_info={
                "traffic_types": ["woon-werkverkeer", "zakelijk verkeer"],
                "employee_pickup_preference": "locatie",
            },
        )

        ranking = engine.rank_solutions(selection)

        assert ranking.solution_ids == ["solution-2", "solution-4", "solution-3", "solution-1"]
        assert list(ranking.grouped) == ["openbaar vervoer", "auto", "fiets"]
        assert [item.solution_id for item in ranking.grouped["openbaar vervoer"]] == [
            "solution-2", "solution-4",
        ]
        assert ranking.used_fallback is False
        assert ranking.active_reason_ids == ["reason-1"]

    def test_weighted_reason(self, engine):
        ranking = engine.rank_solutions(WizardSelection(selected_reasons=["reason-2"]))

        scores = {item.solution_id: item.score for item in ranking.ordered}
        assert scores == {"solution-1": 10, "solution-2": 16, "solution-3": 14, "solution-4": 14}
        assert ranking.solution_ids[0] == "solution-2"

    def test_no_reasons_ranks_everything_on_traffic(self, engine):
        selection = WizardSelection(business_park_info={"traffic_types": ["bezoekers verkeer"]})

        ranking = engine.rank_solutions(selection)

        assert ranking.solution_ids[0] == "solution-3"
        assert all(item.score == 0 for item in ranking.ordered)
        assert ranking.used_fallback is False

    def test_fallback_when_nothing_matches(self, engine):
        ranking = engine.rank_solutions(WizardSelection(selected_reasons=["reason-5"]))

        assert ranking.used_fallback is True
        assert ranking.active_reason_ids == []
        assert ranking.solution_ids == ["solution-1", "solution-2", "solution-3", "solution-4"]

    def test_fallback_disabled(self, repository):
        config = AdvisorConfig()
        config.scoring.fallback_to_all_solutions = False
        engine = AdvisorEngine(repository, config)

        ranking = engine.rank_solutions(WizardSelection(selected_reasons=["reason-5"]))

        assert ranking.ordered == []
        assert ranking.grouped == {}
        assert ranking.used_fallback is False

    def test_default_engine_uses_mock_content(self):
        engine = AdvisorEngine()
        assert len(engine.repository.solutions) == 4
        assert engine.content_issues() == []


class TestClassifyGovernance:
    """The governance page: active variation and classification."""

    def test_chosen_variation(self, engine):
        selection = WizardSelection(
            selected_solutions=["solution-4"],
            selected_variants={"solution-4": "variation-1"},
            current_governance_model_id="governance-2",
        )

        result = engine.classify_governance(selection)

        assert result.active_variation_id == "variation-1"
        assert ids(result.recommended) == ["governance-2", "governance-3"]
        assert ids(result.conditional) == ["governance-4"]
        assert ids(result.unsuitable) == ["governance-1"]
        assert ids(result.other) == ["governance-5"]
        assert result.current_model_is_recommended is True
        assert set(result.variant_notes) == {
            "governance-1", "governance-2", "governance-3", "governance-4",
        }

    def test_overlap_in_variation(self, engine):
        selection = WizardSelection(
            selected_solutions=["solution-4"],
            selected_variants={"solution-4": "variation-2"},
            current_governance_model_id="governance-2",
        )

        result = engine.classify_governance(selection)

        assert ids(result.recommended) == ["governance-1"]
        assert ids(result.conditional) == ["governance-2"]
        assert result.current_model_is_recommended is False

    def test_first_selected_solution_decides(self, engine):
        selection = WizardSelection(
            selected_solutions=["solution-3", "solution-4"],
            selected_variants={"solution-4": "variation-1", "solution-3": "variation-3"},
        )

        result = engine.classify_governance(selection)

        assert result.active_variation_id == "variation-3"
        assert ids(result.unsuitable) == ["governance-5"]
        assert ids(result.recommended) == ["governance-1"]
        assert result.variant_notes == {"governance-5": "Te zwaar voor een eenvoudig platform."}

    def test_no_variant_chosen(self, engine):
        selection = WizardSelection(
            selected_solutions=["solution-4"],
            selected_variants={"solution-4": None},
        )

        result = engine.classify_governance(selection)

        assert result.active_variation_id is None
        assert len(result.other) == 5

    def test_unknown_variant_id(self, engine):
        selection = WizardSelection(
            selected_solutions=["solution-4"],
            selected_variants={"solution-4": "variation-missing"},
        )
        result = engine.classify_governance(selection)
        assert result.active_variation_id is None

    def test_legacy_solution_path(self, engine):
        result = engine.classify_for_solution("solution-4", "governance-1")

        assert ids(result.recommended) == ["governance-2", "governance-3"]
        assert result.current_model.id == "governance-1"
        assert result.current_model_is_recommended is False

    def test_legacy_unknown_solution(self, engine):
        with pytest.raises(EntityNotFoundError):
            engine.classify_for_solution("missing")


class TestScorerAgreement:
    """The engine and a directly built scorer score the same content alike."""

    @pytest.mark.parametrize("identifier", ["milieu", "Milieu", "MILIEU", "imago"])
    def test_direct_scorer_matches_engine(self, identifier):
        reasons = [BusinessParkReason(id="r1", title="Milieu", identifier=identifier)]
        solutions = [
            MobilitySolution(id="s1", title="Een", milieu=5),
            MobilitySolution(id="s2", title="Twee", milieu=2),
        ]
        engine = AdvisorEngine(ContentRepository(ContentSnapshot(reasons=reasons, solutions=solutions)))

        direct = SolutionScorer(reasons).score(solutions, ["r1"], [])
        via_engine = engine.rank_solutions(WizardSelection(selected_reasons=["r1"])).ordered

        assert [(item.solution_id, item.score) for item in direct] == [
            (item.solution_id, item.score) for item in via_engine
        ]
