"""Ceremony resolver - map free-text event names to ceremony templates"""

from typing import Optional

from viah_budget.domain.catalog import CEREMONY_KEYWORDS, RECEPTION_ID
from viah_budget.domain.models import Catalog


def normalize_event_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def match_keywords(normalized_name: str) -> Optional[str]:
    """
    First-match-wins lookup against the ordered keyword table.

    An entry matches when the name equals one of its keywords or contains one.
    Entries are checked in table order, so "Mehndi & Sangeet" resolves to the
    mehndi template.
    """
    if not normalized_name:
        return None

    for ceremony_id, keywords in CEREMONY_KEYWORDS:
        if any(normalized_name == keyword or keyword in normalized_name for keyword in keywords):
            return ceremony_id

    return None


def resolve_ceremony(
    catalog: Catalog,
    name: Optional[str],
    event_type: Optional[str] = None,
    ceremony_id: Optional[str] = None,
) -> Optional[str]:
    """
    Resolve an event to a ceremony template id.

    Resolution order:
    1. Explicit ceremony_id known to the catalog
    2. Keyword table (equals or contains) against the event name,
       or against the type when the name is blank
    3. Reserved "reception" id for any name mentioning a reception
    4. Literal event type when the catalog has a template for it

    Returns None when nothing matches; callers fall back to the generic
    per-guest estimate. Never raises.
    """
    if ceremony_id and ceremony_id in catalog:
        return ceremony_id

    normalized_name = normalize_event_name(name)
    normalized_type = normalize_event_name(event_type)

    matched = match_keywords(normalized_name or normalized_type)
    if matched and matched in catalog:
        return matched

    if "reception" in normalized_name and RECEPTION_ID in catalog:
        return RECEPTION_ID

    if normalized_type and normalized_type in catalog:
        return normalized_type

    return None
