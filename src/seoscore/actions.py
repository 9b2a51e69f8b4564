"""Actionable items and implementation plans built from recommendations."""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from seoscore.constants import PLAN_SECTION_LIMIT, PRIORITY_FIXES_LIMIT
from seoscore.models import Category, Level, Recommendation

logger = logging.getLogger(__name__)

# Rank used for sorting; lower sorts first
_LEVEL_RANK = {Level.HIGH.value: 0, Level.MEDIUM.value: 1, Level.LOW.value: 2}

SORT_KEYS = ("priority", "effort", "impact")

# (keywords, category); first match wins
_CATEGORY_KEYWORDS: Tuple[Tuple[Tuple[str, ...], Category], ...] = (
    (("title tag", "meta description"), Category.META),
    (("heading", "content"), Category.CONTENT),
    (("image",), Category.MEDIA),
    (("mobile", "viewport"), Category.MOBILE),
    (("load", "speed"), Category.PERFORMANCE),
    (("link", "internal"), Category.LINKS),
    (("https", "canonical"), Category.TECHNICAL),
    (("alt text", "contrast"), Category.ACCESSIBILITY),
)

_HIGH_PRIORITY_KEYWORDS = ("https", "h1", "title tag", "meta description", "mobile")
_LOW_PRIORITY_KEYWORDS = ("open graph", "schema")
_LOW_EFFORT_KEYWORDS = ("title tag", "meta description", "alt text", "canonical")
_HIGH_EFFORT_KEYWORDS = ("restructure", "fix mobile", "improve page load", "https")


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_text(text: str, index: int) -> Recommendation:
    """Classify a free-text recommendation by keyword matching.

    Only for recommendations that exist as plain text (e.g. stored reports).
    Recommendations produced by the generator already carry their tags.

    Args:
        text: Recommendation sentence
        index: Position in its list; the first three are always high priority

    Returns:
        Recommendation with category, priority, effort and impact filled in
    """
    lowered = text.lower()

    category = Category.GENERAL
    for keywords, candidate in _CATEGORY_KEYWORDS:
        if _contains_any(lowered, keywords):
            category = candidate
            break

    if _contains_any(lowered, _HIGH_PRIORITY_KEYWORDS) or index < 3:
        priority = Level.HIGH
    elif _contains_any(lowered, _LOW_PRIORITY_KEYWORDS) or index > 8:
        priority = Level.LOW
    else:
        priority = Level.MEDIUM

    if _contains_any(lowered, _LOW_EFFORT_KEYWORDS):
        effort = Level.LOW
    elif _contains_any(lowered, _HIGH_EFFORT_KEYWORDS):
        effort = Level.HIGH
    else:
        effort = Level.MEDIUM

    return Recommendation(text=text, category=category, priority=priority, effort=effort, impact=priority)


def to_actionable_item(rec: Recommendation) -> Dict[str, str]:
    """Convert a recommendation into a presentation-ready item."""
    return {
        "title": rec.title,
        "description": rec.text,
        "category": rec.category.value,
        "priority": rec.priority.value,
        "effort": rec.effort.value,
        "impact": rec.impact.value,
    }


def priority_fixes(recs: Sequence[Recommendation], limit: int = PRIORITY_FIXES_LIMIT) -> List[Dict[str, str]]:
    """The leading recommendations, with the first two marked high impact."""
    return [
        {
            "title": rec.title,
            "description": rec.text,
            "impact": Level.HIGH.value if index < 2 else Level.MEDIUM.value,
            "effort": rec.effort.value,
        }
        for index, rec in enumerate(recs[:limit])
    ]


def filter_items(items: Sequence[Dict[str, str]], category: str = "all") -> List[Dict[str, str]]:
    """Keep the items of one category; "all" keeps everything."""
    if category == "all":
        return list(items)
    return [item for item in items if item["category"] == category]


def sort_items(items: Sequence[Dict[str, str]], by: str = "priority") -> List[Dict[str, str]]:
    """Sort actionable items.

    Args:
        items: Actionable item dicts
        by: "priority" (highest first), "effort" (lowest first) or
            "impact" (highest first)

    Returns:
        New sorted list; ties keep their original order

    Raises:
        ValueError: If ``by`` is not a supported key
    """
    if by not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key: {by}. Expected one of {', '.join(SORT_KEYS)}")

    if by == "effort":
        return sorted(items, key=lambda item: -_LEVEL_RANK.get(item["effort"], 1))
    return sorted(items, key=lambda item: _LEVEL_RANK.get(item[by], 1))


def implementation_plan(items: Sequence[Dict[str, str]]) -> Dict[str, List[Dict[str, str]]]:
    """Split high-impact items into quick wins and strategic improvements."""
    high_impact = [item for item in items if item["impact"] == Level.HIGH.value]

    quick_wins = [item for item in high_impact if item["effort"] == Level.LOW.value]
    strategic = [
        item for item in high_impact
        if item["effort"] in (Level.MEDIUM.value, Level.HIGH.value)
    ]

    logger.debug(f"Plan: {len(quick_wins)} quick wins, {len(strategic)} strategic improvements")

    return {
        "quick_wins": quick_wins[:PLAN_SECTION_LIMIT],
        "strategic_improvements": strategic[:PLAN_SECTION_LIMIT],
    }
