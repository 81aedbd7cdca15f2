"""Tests for filter tree conversion."""

import pytest

from txrules.domain.entities import Filter, GroupFilter, RuleAction
from txrules.domain.errors import ValidationError
from txrules.domain.filter_tree import (
    group_filter_from_dict,
    group_filter_to_dict,
    rule_action_from_dict,
    rule_action_to_dict,
)


def test_parse_nested_tree():
    """Nested filters and groups are converted to entities."""
    data = {
        "id": "root",
        "operator": "or",
        "filters": [{"id": "f1", "field": "description", "operator": "contains", "value": "uber"}],
        "groups": [
            {
                "id": "g1",
                "operator": "and",
                "filters": [{"id": "f2", "field": "amount", "operator": "lessThan", "value": "20"}],
            }
        ],
    }

    tree = group_filter_from_dict(data)

    assert tree.operator == "or"
    assert tree.filters == (Filter(id="f1", field="description", operator="contains", value="uber"),)
    assert tree.groups[0].id == "g1"
    assert tree.groups[0].groups == ()


def test_missing_lists_are_empty():
    """Groups may omit filters and groups."""
    tree = group_filter_from_dict({"id": "root", "operator": "and"})
    assert tree == GroupFilter(id="root", operator="and")


def test_unknown_comparison_operator_is_kept():
    """Unknown comparison operators load; the matcher rejects them later."""
    tree = group_filter_from_dict(
        {"id": "r", "operator": "and", "filters": [{"id": "f", "field": "x", "operator": "like", "value": "y"}]}
    )
    assert tree.filters[0].operator == "like"


@pytest.mark.parametrize(
    "data,message",
    [
        ([], "expected an object"),
        ({"id": "r", "operator": "xor"}, "'and' or 'or'"),
        ({"operator": "and"}, "'id' must be a string"),
        ({"id": "r", "operator": "and", "filters": {}}, "'filters' must be a list"),
        ({"id": "r", "operator": "and", "filters": [{"id": "f", "field": "amount", "operator": "equals", "value": 5}]}, "root.filters[0]"),
        ({"id": "r", "operator": "and", "groups": [{"id": "g", "operator": "nand"}]}, "root.groups[0]"),
    ],
)
def test_malformed_tree_raises(data, message):
    """Structural problems raise ValidationError with the node path."""
    with pytest.raises(ValidationError) as excinfo:
        group_filter_from_dict(data)
    assert message in str(excinfo.value)


def test_to_dict_uses_json_keys():
    """Serialized trees always carry both lists."""
    tree = GroupFilter(id="root", operator="and", filters=(Filter("f", "type", "equals", "debit"),))
    assert group_filter_to_dict(tree) == {
        "id": "root",
        "operator": "and",
        "filters": [{"id": "f", "field": "type", "operator": "equals", "value": "debit"}],
        "groups": [],
    }


def test_action_round_trip():
    """Actions use camelCase isInternal and drop unset values."""
    action = rule_action_from_dict({"category": "Transfer", "isInternal": "yes", "tags": ["home"]})

    assert action == RuleAction(category="Transfer", is_internal="yes", tags=("home",))
    assert rule_action_to_dict(action) == {"category": "Transfer", "isInternal": "yes", "tags": ["home"]}
    assert rule_action_to_dict(RuleAction()) == {}


def test_action_none_is_empty():
    assert rule_action_from_dict(None) == RuleAction()


@pytest.mark.parametrize(
    "data",
    [
        {"isInternal": "maybe"},
        {"category": 3},
        {"tags": "home"},
        "category",
    ],
)
def test_invalid_action_raises(data):
    with pytest.raises(ValidationError):
        rule_action_from_dict(data)
