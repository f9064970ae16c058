"""Triage rules: keyword lists, score weights and SLA minutes, loaded from YAML.

Defaults reproduce the agency's historical behaviour; ``config/triage.yaml``
(or ``TRIAGE_RULES_PATH``) may override any subset of them.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from inbox_triage.config import TRIAGE_RULES_PATH
from inbox_triage.utils.logger import get_logger

logger = get_logger("inbox_triage.engine.rules")


class ScoreWeights(BaseModel):
    """Points added by each priority condition."""

    now_queue: int = 6
    unread: int = 3
    portal: int = 3
    overdue_task: int = 4
    due_soon_task: int = 2
    intent_sell: int = 4
    intent_buy_or_rent: int = 2
    high_budget: int = 2
    urgency: int = 3

    @field_validator("*")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        # Negative weights would break score monotonicity
        if value < 0:
            raise ValueError("score weights must be >= 0")
        return value

    @model_validator(mode="after")
    def _stronger_condition_scores_higher(self) -> "ScoreWeights":
        # Overdue replaces due-soon and sell replaces buy/rent; neither may lower the score
        if self.overdue_task < self.due_soon_task:
            raise ValueError("overdue_task must be >= due_soon_task")
        if self.intent_sell < self.intent_buy_or_rent:
            raise ValueError("intent_sell must be >= intent_buy_or_rent")
        return self


class PriorityThresholds(BaseModel):
    high: int = 10
    medium: int = 6


class SlaMinutes(BaseModel):
    """Response deadline after an inbound message arrives."""

    portal: int = 5
    standard: int = 60


class TriageRules(BaseModel):
    """All tunable constants of the triage engine."""

    portal_domains: list[str] = ["immotop.lu", "athome.lu", "immobilier.lu", "wortimmo.lu"]
    subject_prefixes: list[str] = ["re", "fw", "fwd", "aw", "tr"]
    due_soon_hours: int = 24
    high_budget_eur: int = 700_000
    actionable_keywords: list[str] = [
        "?",
        "question",
        "visite",
        "visit",
        "viewing",
        "interested",
        "intéress",
        "budget",
        "€",
        "eur",
        "parking",
        "rdv",
        "rendez-vous",
    ]
    urgency_keywords: list[str] = ["urgent", "asap", "rapid", "immédiat", "vite"]
    weights: ScoreWeights = ScoreWeights()
    thresholds: PriorityThresholds = PriorityThresholds()
    sla: SlaMinutes = SlaMinutes()

    model_config = {"extra": "forbid"}

    def actionable_pattern(self) -> re.Pattern[str]:
        return keyword_pattern(tuple(self.actionable_keywords))

    def urgency_pattern(self) -> re.Pattern[str]:
        return keyword_pattern(tuple(self.urgency_keywords))

    def prefix_pattern(self) -> re.Pattern[str]:
        return subject_prefix_pattern(tuple(self.subject_prefixes))


@lru_cache(maxsize=64)
def keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """Case-insensitive substring alternation; matches nothing when empty."""
    if not keywords:
        return re.compile(r"(?!)")
    return re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)


@lru_cache(maxsize=16)
def subject_prefix_pattern(prefixes: tuple[str, ...]) -> re.Pattern[str]:
    """One leading ``<prefix>:`` token with surrounding whitespace."""
    if not prefixes:
        return re.compile(r"(?!)")
    alternation = "|".join(re.escape(p) for p in prefixes)
    return re.compile(rf"^\s*(?:{alternation})\s*:\s*", re.IGNORECASE)


DEFAULT_RULES = TriageRules()

_rules: Optional[TriageRules] = None


def _get_rules_path() -> Path:
    return TRIAGE_RULES_PATH


def parse_rules(data: Any, source: str = "<memory>") -> TriageRules:
    """Validate a decoded YAML document; raise ValueError on bad shape."""
    if data is None:
        return TriageRules()
    if not isinstance(data, dict):
        raise ValueError(f"Triage rules must be a YAML object (dict), got {type(data)} in {source}")
    try:
        return TriageRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid triage rules in {source}: {e}") from e


def load_rules(path: Optional[Path] = None) -> TriageRules:
    """Read rules from ``path`` (default: TRIAGE_RULES_PATH). Missing file means defaults."""
    path = path or _get_rules_path()
    if not path.exists():
        logger.debug("triage_rules.file_missing", path=str(path))
        return TriageRules()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in triage rules {path}: {e}") from e
    rules = parse_rules(data, source=str(path))
    logger.info(
        "triage_rules.loaded",
        path=str(path),
        portal_domains=len(rules.portal_domains),
        actionable_keywords=len(rules.actionable_keywords),
    )
    return rules


def get_rules() -> TriageRules:
    """Return cached rules, loading them on first use."""
    global _rules
    if _rules is None:
        _rules = load_rules()
    return _rules


def reload_rules() -> TriageRules:
    """Re-read rules from disk (hot-reload via API).

    A file that fails to load raises ValueError and the previous rules stay active.
    """
    global _rules
    try:
        fresh = load_rules()
    except ValueError:
        logger.warning("triage_rules.reload_failed", kept_previous=_rules is not None, exc_info=True)
        raise
    _rules = fresh
    return _rules
