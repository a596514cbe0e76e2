"""Mobility Advisor: solution ranking and governance classification."""

from mobility_advisor.classifier import GovernanceClassifier, resolve_precedence
from mobility_advisor.config import AdvisorConfig, get_config, load_config
from mobility_advisor.eligibility_filter import EligibilityFilter
from mobility_advisor.engine import AdvisorEngine
from mobility_advisor.schema import (
    BusinessParkInfo,
    GovernanceClassification,
    ScoredSolution,
    SolutionRanking,
    WizardSelection,
)
from mobility_advisor.scorer import SolutionScorer, group_by_category, rank

__version__ = "1.0.0"

__all__ = [
    "AdvisorConfig",
    "AdvisorEngine",
    "BusinessParkInfo",
    "EligibilityFilter",
    "GovernanceClassification",
    "GovernanceClassifier",
    "ScoredSolution",
    "SolutionRanking",
    "SolutionScorer",
    "WizardSelection",
    "get_config",
    "group_by_category",
    "load_config",
    "rank",
    "resolve_precedence",
]
