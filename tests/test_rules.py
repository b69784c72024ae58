"""Tests for classification rule management."""

import pytest

from ledgerline.domain.errors import NotFoundError, ValidationError


def test_create_and_get_rule(rule_service, user_id):
    rule_id = rule_service.create_rule(user_id, pattern=" starbucks, peets ", category=" Dining ", priority=3)

    rule = rule_service.get_rule(user_id, rule_id)
    assert rule.pattern == "starbucks, peets"
    assert rule.category == "Dining"
    assert rule.priority == 3
    assert rule.is_active
    assert rule.keywords == ["starbucks", "peets"]


@pytest.mark.parametrize("pattern", ["", "   ", ", ,"])
def test_pattern_without_keywords_is_rejected(rule_service, user_id, pattern):
    with pytest.raises(ValidationError) as excinfo:
        rule_service.create_rule(user_id, pattern=pattern, category="Dining")
    assert "no keywords" in str(excinfo.value)


def test_blank_category_is_rejected(rule_service, user_id):
    with pytest.raises(ValidationError):
        rule_service.create_rule(user_id, pattern="coffee", category="  ")


def test_list_rules_by_priority(rule_service, user_id):
    low = rule_service.create_rule(user_id, pattern="a", category="A", priority=1)
    high = rule_service.create_rule(user_id, pattern="b", category="B", priority=9)
    tie = rule_service.create_rule(user_id, pattern="c", category="C", priority=1)

    assert [r.id for r in rule_service.list_rules(user_id)] == [high, low, tie]


def test_disable_and_enable(rule_service, user_id, ride_rules):
    rule_service.set_active(user_id, ride_rules["Travel"], False)

    active = rule_service.list_rules(user_id, active_only=True)
    assert [r.category for r in active] == ["Meals"]
    assert len(rule_service.list_rules(user_id)) == 2

    rule_service.set_active(user_id, ride_rules["Travel"], True)
    assert len(rule_service.list_rules(user_id, active_only=True)) == 2


def test_delete_rule(rule_service, user_id, ride_rules):
    rule_service.delete_rule(user_id, ride_rules["Meals"])

    assert rule_service.get_rule(user_id, ride_rules["Meals"]) is None
    assert [r.category for r in rule_service.list_rules(user_id)] == ["Travel"]


def test_rules_are_scoped_to_user(rule_service, user_id, ride_rules):
    assert rule_service.get_rule("someone-else", ride_rules["Travel"]) is None
    assert rule_service.list_rules("someone-else") == []

    with pytest.raises(NotFoundError):
        rule_service.delete_rule("someone-else", ride_rules["Travel"])
    with pytest.raises(NotFoundError):
        rule_service.set_active("someone-else", ride_rules["Travel"], False)


def test_missing_rule(rule_service, user_id):
    with pytest.raises(NotFoundError) as excinfo:
        rule_service.delete_rule(user_id, 999)
    assert "999" in str(excinfo.value)
