"""Centralized configuration management for the mobility advisor."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MOBILITY_ADVISOR_CONFIG"
CONFIG_FILE_NAMES = ("advisor-config.yaml", "advisor-config.yml")

# A term is a substring; a list of terms is a group that must all occur in
# the same pickup option.
PickupTerm = Union[str, list[str]]

DEFAULT_PICKUP_TERMS: dict[str, list[PickupTerm]] = {
    "thuis": ["thuis"],
    "locatie": ["locatie"],
    "ov": [],
}


class ScoringConfig(BaseModel):
    """Settings for ranking mobility solutions."""
    traffic_full_match_bonus: int = Field(
        1000,
        description="Bonus added to the traffic match when a solution covers every selected traffic type"
    )
    default_reason_weight: float = Field(
        1.0,
        description="Weight used for reasons without a (non-zero) weight"
    )
    unknown_category_label: str = Field(
        "Onbekend",
        description="Group label for solutions without a category"
    )
    fallback_to_all_solutions: bool = Field(
        True,
        description="Show all solutions, unweighted, when the reason filter leaves none"
    )


class PickupConfig(BaseModel):
    """Terms matched against a solution's pickup options (case-insensitive).

    A preference matches when any of its terms occurs in an option. A term
    given as a list matches only when all of its parts occur in the same
    option. A preference with no terms always matches. Preferences left out
    of a config file keep their default terms.
    """
    match_terms: dict[str, list[PickupTerm]] = Field(
        default_factory=lambda: {key: list(terms) for key, terms in DEFAULT_PICKUP_TERMS.items()},
        description="Terms per pickup preference"
    )

    @field_validator("match_terms", mode="before")
    @classmethod
    def _merge_with_defaults(cls, value: Any) -> dict[str, Any]:
        merged: dict[str, Any] = {key: list(terms) for key, terms in DEFAULT_PICKUP_TERMS.items()}
        if value is None:
            return merged
        if not isinstance(value, dict):
            raise ValueError("match_terms must map pickup preferences to term lists")
        for key, terms in value.items():
            merged[str(key).lower().strip()] = [] if terms is None else terms
        return merged


class GovernanceConfig(BaseModel):
    """Settings for governance model classification."""
    warn_on_dangling_references: bool = Field(
        True,
        description="Log a warning for governance model ids missing from the catalog"
    )


class AdvisorConfig(BaseModel):
    """Complete configuration for the mobility advisor."""
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    pickup: PickupConfig = Field(default_factory=PickupConfig)
    governance: GovernanceConfig = Field(default_factory=GovernanceConfig)


# Active configuration; defaults until a file is loaded
_config: Optional[AdvisorConfig] = None


def get_config() -> AdvisorConfig:
    """Configuration used by the scorer, classifier and engine by default."""
    global _config
    if _config is None:
        _config = AdvisorConfig()
    return _config


def load_config(path: Path) -> AdvisorConfig:
    """Read an advisor config file and make it the active configuration.

    Sections and pickup preferences missing from the file keep their
    defaults.

    Raises:
        ValueError: When the file does not hold a YAML mapping.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Advisor config {path} must contain a mapping, got {type(data).__name__}")

    _config = AdvisorConfig.model_validate(data)
    pickup_overrides = sorted((data.get("pickup") or {}).get("match_terms") or {})
    logger.info(
        "Loaded advisor config from %s (pickup overrides: %s)",
        path,
        ", ".join(pickup_overrides) or "none",
    )
    return _config


def reset_config() -> None:
    """Drop any loaded file and go back to the built-in defaults."""
    global _config
    _config = AdvisorConfig()


def config_search_paths() -> list[Path]:
    """Candidate config locations, highest priority first.

    1. The file named by MOBILITY_ADVISOR_CONFIG
    2. advisor-config.yaml / advisor-config.yml in the working directory
    3. ~/.config/mobility-advisor/config.yaml
    """
    candidates = []
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path))
    candidates.extend(Path(name) for name in CONFIG_FILE_NAMES)
    candidates.append(Path.home() / ".config" / "mobility-advisor" / "config.yaml")
    return candidates


def find_config_file() -> Optional[Path]:
    """First existing file from ``config_search_paths``, or None."""
    return next((path for path in config_search_paths() if path.exists()), None)


_CONFIG_HEADER = """# Mobility Advisor Configuration
# ==============================
#
# scoring:     ranking of mobility solutions
# pickup:      terms matched against a solution's pickup options ("ophalen").
#              A term list matches when any entry occurs in an option; an
#              entry that is itself a list needs all its parts in one option,
#              e.g.  ov: [[aansluiting, ov]]
#              An empty list always matches. Preferences you leave out keep
#              these defaults.
# governance:  governance model classification
#
# Looked up via $MOBILITY_ADVISOR_CONFIG, ./advisor-config.yaml or
# ~/.config/mobility-advisor/config.yaml.

"""


def save_default_config(path: Path) -> None:
    """Write the built-in defaults, with usage notes, as a starting config."""
    data = AdvisorConfig().model_dump(mode="json")
    yaml_content = _CONFIG_HEADER + yaml.dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
