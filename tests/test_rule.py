import pytest

from ssrkit.rule import Rule, RuleError, lookup_rule


def test_accept_arg_sets_pattern():
    rule = Rule()
    rule.accept_arg(r"\.example\.com$")
    assert rule.pattern == r"\.example\.com$"


def test_accept_arg_twice_raises():
    rule = Rule()
    rule.accept_arg("a")
    with pytest.raises(RuleError):
        rule.accept_arg("b")
    assert rule.pattern == "a"


def test_compile_bad_pattern_raises():
    rule = Rule("(unclosed")
    with pytest.raises(RuleError):
        rule.compile()


def test_compile_without_pattern_raises():
    with pytest.raises(RuleError):
        Rule().compile()


def test_matches_is_unanchored():
    rule = Rule("example")
    rule.compile()
    assert rule.matches("www.example.com") is True
    assert rule.matches("www.test.org") is False


def test_none_name_matches_as_empty():
    assert Rule("^$").matches(None) is True
    assert Rule("x").matches(None) is False


def test_lookup_returns_first_match():
    first = Rule(r"\.com$")
    second = Rule("example")
    rules = [first, second]
    assert lookup_rule(rules, "www.example.com") is first
    assert lookup_rule(rules, "example.org") is second


def test_lookup_no_match():
    rules = [Rule(r"^foo"), Rule(r"bar$")]
    assert lookup_rule(rules, "example.com") is None
    assert lookup_rule([], "example.com") is None