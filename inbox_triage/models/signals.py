"""Lead signals extracted from an inbound message."""

from typing import Literal, Optional

from pydantic import BaseModel, PositiveInt

Intent = Literal["buy", "sell", "rent", "unknown"]


class LeadSignals(BaseModel):
    """Fixed-shape extractor output consumed by the triage engine."""

    intent: Intent = "unknown"
    budget_eur: Optional[PositiveInt] = None
    property_reference: Optional[str] = None
    reason: str = "New inbound email"
    tags: set[str] = set()


class LeadInsights(LeadSignals):
    """LeadSignals plus the contact-creation hints the rule-based extractor also produces."""

    from_email: str = ""
    from_name: str = ""
    suggested_first_name: str = "Lead"
    suggested_last_name: str = "Email"
    phone: Optional[str] = None
    notes: str = ""


NO_SIGNALS = LeadSignals()
