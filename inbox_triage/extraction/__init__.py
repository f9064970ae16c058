"""Lead signal extraction collaborators."""

from inbox_triage.extraction.lead_signals import (
    detect_intent,
    detect_reason,
    extract_budget_eur,
    extract_lead_signals,
    extract_phone,
    extract_property_reference,
    parse_money,
    parse_name,
)

__all__ = [
    "extract_lead_signals",
    "detect_intent",
    "detect_reason",
    "extract_budget_eur",
    "extract_phone",
    "extract_property_reference",
    "parse_money",
    "parse_name",
]
