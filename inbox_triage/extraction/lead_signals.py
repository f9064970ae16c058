"""Rule-based lead signal extractor (intent, budget, property reference, phone).

No LLM; keyword and regex heuristics over subject + body, tuned for the
French/English mix the agency receives.
"""

import re
from typing import Optional

from inbox_triage.models.email import Message
from inbox_triage.models.signals import Intent, LeadInsights

_WHITESPACE = re.compile(r"\s+")
_PHONE = re.compile(r"(\+?\d[\d\s().-]{7,}\d)")
_PROPERTY_REF = re.compile(r"\b([A-Z]{2,6}-\d{2,6}(?:-\d{1,6})?)\b")

_AMOUNT = r"([0-9][0-9\s.,]*(?:k|m)?\s*(?:€|eur|euros)?)"
_BUDGET_PHRASES = [
    re.compile(r"budget[^0-9]{0,20}" + _AMOUNT, re.I),
    re.compile(r"up to[^0-9]{0,20}" + _AMOUNT, re.I),
    re.compile(r"max[^0-9]{0,20}" + _AMOUNT, re.I),
]
_EURO_AMOUNTS = [
    re.compile(r"([0-9][0-9\s.,]*(?:k|m)?)\s*(?:€|\beuros?\b|\beur\b)", re.I),
    re.compile(r"€\s*([0-9][0-9\s.,]*(?:k|m)?)", re.I),
]

# Checked in order; first hit wins
_INTENT_PATTERNS: list[tuple[Intent, re.Pattern[str]]] = [
    ("sell", re.compile(r"sell|vendeur|vendre|estimation|mandat")),
    ("rent", re.compile(r"rent|rental|location|louer|locataire")),
    ("buy", re.compile(r"buy|buyer|achat|acheter|acquéreur")),
    ("buy", re.compile(r"viewing|visit|visite|interested|intéress")),
]

_REASONS = [
    (re.compile(r"view|visite|viewing|visit"), "Scheduling a visit"),
    (re.compile(r"interested|intéress"), "Property interest"),
    (re.compile(r"parking|garage"), "Asked about parking"),
    (re.compile(r"budget|€|eur|euros"), "Budget discussed"),
]
DEFAULT_REASON = "New inbound email"


def clean_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()


def parse_name(name: str, fallback_email: str) -> tuple[str, str]:
    """Split a display name into first/last; derive one from the address when empty."""
    cleaned = clean_whitespace(name or "")
    if not cleaned:
        local = re.sub(r"[._-]+", " ", (fallback_email.split("@")[0] or "Lead"))
        parts = clean_whitespace(local).split(" ")
        first = parts[0] or "Lead"
        return first[:1].upper() + first[1:], " ".join(parts[1:]) or "Email"
    parts = cleaned.split(" ")
    if len(parts) == 1:
        return parts[0], "—"
    return parts[0], " ".join(parts[1:])


def extract_phone(text: str) -> Optional[str]:
    m = _PHONE.search(text)
    if not m:
        return None
    candidate = clean_whitespace(m.group(1))
    # Years and short numbers are not phone numbers
    if len(re.sub(r"\D", "", candidate)) < 8:
        return None
    return candidate


def parse_money(raw: str) -> Optional[int]:
    """``"750 000 €"`` -> 750000, ``"1,2m"`` -> 1200000, ``"450k"`` -> 450000."""
    cleaned = raw.lower()
    cleaned = re.sub(r"[€$]", "", cleaned)
    cleaned = re.sub(r"euros|euro|eur", "", cleaned)
    cleaned = re.sub(r"\s", "", cleaned)
    unit = cleaned[-1] if cleaned.endswith(("k", "m")) else None
    numeric = cleaned[:-1] if unit else cleaned
    normalized = re.sub(r"[^0-9.]", "", numeric.replace(",", "."))
    # "1.500.000" is ambiguous
    if not normalized or normalized.count(".") > 1:
        return None
    try:
        n = float(normalized)
    except ValueError:
        return None
    if unit == "k":
        return round(n * 1_000)
    if unit == "m":
        return round(n * 1_000_000)
    return round(n)


def extract_budget_eur(text: str) -> Optional[int]:
    """Prefer explicit budget phrasing; fall back to the first euro amount."""
    lower = text.lower()
    for pattern in _BUDGET_PHRASES:
        m = pattern.search(lower)
        if m:
            n = parse_money(m.group(1))
            if n:
                return n
            break
    for pattern in _EURO_AMOUNTS:
        m = pattern.search(text)
        if m:
            n = parse_money(m.group(1))
            if n:
                return n
            break
    return None


def extract_property_reference(text: str) -> Optional[str]:
    """References look like ``PROP-001`` or ``LUX-2024-001``."""
    m = _PROPERTY_REF.search(text)
    return m.group(1) if m else None


def detect_intent(text: str) -> Intent:
    lower = text.lower()
    for intent, pattern in _INTENT_PATTERNS:
        if pattern.search(lower):
            return intent
    return "unknown"


def detect_reason(text: str) -> str:
    lower = text.lower()
    parts = [label for pattern, label in _REASONS if pattern.search(lower)]
    return " • ".join(parts) if parts else DEFAULT_REASON


def extract_lead_signals(message: Message) -> LeadInsights:
    """Default extractor plugged into the worklist assembler."""
    combined = f"{message.subject}\n\n{message.body}"
    from_email = message.sender.email
    from_name = message.sender.name
    first_name, last_name = parse_name(from_name, from_email)
    phone = extract_phone(combined)
    budget = extract_budget_eur(combined)
    reference = extract_property_reference(combined)
    intent = detect_intent(combined)
    reason = detect_reason(combined)

    tags: set[str] = set()
    if intent != "unknown":
        tags.add(f"intent:{intent}")
    if budget:
        tags.add(f"budget:{budget}")
    if reference:
        tags.add(f"property:{reference}")
    if phone:
        tags.add("has:phone")

    notes = [
        "Inbound email summary",
        f"- From: {from_name} <{from_email}>",
        f"- Property ref: {reference}" if reference else None,
        f"- Budget: €{budget:,}".replace(",", " ") if budget else None,
        f"- Phone: {phone}" if phone else None,
        f"- Reason: {reason}",
        "",
        f"Email subject: {message.subject}",
    ]

    return LeadInsights(
        intent=intent,
        budget_eur=budget,
        property_reference=reference,
        reason=reason,
        tags=tags,
        from_email=from_email,
        from_name=from_name,
        suggested_first_name=first_name,
        suggested_last_name=last_name,
        phone=phone,
        notes="\n".join(line for line in notes if line is not None),
    )
