"""Tests for actionable items and plans."""

import pytest

from seoscore.actions import (
    classify_text,
    filter_items,
    implementation_plan,
    priority_fixes,
    sort_items,
    to_actionable_item,
)
from seoscore.models import Category, Level, Recommendation


def item(title, priority="medium", effort="medium", impact="medium", category="general"):
    return {
        "title": title,
        "description": title,
        "category": category,
        "priority": priority,
        "effort": effort,
        "impact": impact,
    }


class TestClassifyText:
    """Test cases for keyword classification of free-text recommendations."""

    def test_title_tag(self):
        rec = classify_text("Add a title tag to your page.", 5)

        assert rec.category == Category.META
        assert rec.priority == Level.HIGH
        assert rec.effort == Level.LOW
        assert rec.impact == Level.HIGH

    def test_open_graph_is_low_priority(self):
        rec = classify_text("Add Open Graph meta tags to improve social media sharing.", 4)

        assert rec.category == Category.GENERAL
        assert rec.priority == Level.LOW
        assert rec.effort == Level.MEDIUM

    def test_load_speed(self):
        rec = classify_text("Improve page load speed. Current load time: 4.50 seconds.", 0)

        assert rec.category == Category.PERFORMANCE
        assert rec.priority == Level.HIGH
        assert rec.effort == Level.HIGH

    def test_first_match_wins(self):
        # "image" is matched before "alt text"
        rec = classify_text("Add alt text to 3 images.", 5)

        assert rec.category == Category.MEDIA
        assert rec.priority == Level.MEDIUM
        assert rec.effort == Level.LOW

    @pytest.mark.parametrize("index,expected", [
        (0, Level.HIGH),
        (2, Level.HIGH),
        (3, Level.MEDIUM),
        (8, Level.MEDIUM),
        (9, Level.LOW),
    ])
    def test_position_sets_priority(self, index, expected):
        rec = classify_text("Include relevant keywords naturally.", index)
        assert rec.priority == expected


class TestActionableItems:
    """Test cases for actionable item conversion."""

    def test_to_actionable_item(self):
        rec = Recommendation(
            text="Add an H1 heading to your page. It helps.",
            category=Category.CONTENT,
            priority=Level.HIGH,
            effort=Level.LOW,
            impact=Level.HIGH,
        )

        assert to_actionable_item(rec) == {
            "title": "Add an H1 heading to your page.",
            "description": "Add an H1 heading to your page. It helps.",
            "category": "content",
            "priority": "high",
            "effort": "low",
            "impact": "high",
        }

    def test_priority_fixes(self):
        recs = [Recommendation(text=f"Fix number {i}.", effort=Level.LOW) for i in range(7)]
        fixes = priority_fixes(recs)

        assert len(fixes) == 5
        assert [fix["impact"] for fix in fixes] == ["high", "high", "medium", "medium", "medium"]
        assert fixes[0] == {
            "title": "Fix number 0.",
            "description": "Fix number 0.",
            "impact": "high",
            "effort": "low",
        }


class TestFilterItems:
    """Test cases for filter_items."""

    def test_all_keeps_everything(self):
        items = [item("a", category="meta"), item("b", category="media")]
        result = filter_items(items, "all")
        assert result == items
        assert result is not items

    def test_default_is_all(self):
        items = [item("a", category="meta")]
        assert filter_items(items) == items

    def test_filter_by_category_keeps_order(self):
        items = [
            item("a", category="meta"),
            item("b", category="media"),
            item("c", category="meta"),
        ]
        assert [i["title"] for i in filter_items(items, "meta")] == ["a", "c"]

    def test_unknown_category_is_empty(self):
        assert filter_items([item("a")], "nonexistent") == []


class TestSortItems:
    """Test cases for sort_items."""

    def test_sort_by_priority(self):
        items = [item("a", priority="low"), item("b", priority="high"), item("c", priority="medium")]
        assert [i["title"] for i in sort_items(items, "priority")] == ["b", "c", "a"]

    def test_sort_by_effort_lowest_first(self):
        items = [item("a", effort="high"), item("b", effort="low"), item("c", effort="medium")]
        assert [i["title"] for i in sort_items(items, "effort")] == ["b", "c", "a"]

    def test_sort_is_stable(self):
        items = [item("a", impact="high"), item("b"), item("c", impact="high")]
        assert [i["title"] for i in sort_items(items, "impact")] == ["a", "c", "b"]

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            sort_items([], "category")


class TestImplementationPlan:
    """Test cases for implementation_plan."""

    def test_quick_wins_and_strategic(self):
        items = [
            item("q1", impact="high", effort="low"),
            item("s1", impact="high", effort="high"),
            item("m1", impact="medium", effort="low"),
            item("q2", impact="high", effort="low"),
            item("s2", impact="high", effort="medium"),
            item("q3", impact="high", effort="low"),
            item("q4", impact="high", effort="low"),
        ]

        plan = implementation_plan(items)

        assert [i["title"] for i in plan["quick_wins"]] == ["q1", "q2", "q3"]
        assert [i["title"] for i in plan["strategic_improvements"]] == ["s1", "s2"]

    def test_empty_plan(self):
        assert implementation_plan([]) == {"quick_wins": [], "strategic_improvements": []}
