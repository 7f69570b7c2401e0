from render_core.css.selector import ClassSelector, IdSelector, TypeSelector, UniversalSelector
from render_core.css.values import Color, Keyword, Length, LengthUnit
from render_core.parser.css_parser import CSSParser, parse_css
from render_core.utils.diagnostics import (
    DROPPED_DECLARATION,
    DROPPED_RULE,
    DROPPED_SELECTOR,
    SKIPPED_AT_RULE,
    UNKNOWN_PROPERTY,
)


def test_rules_in_source_order():
    rules = parse_css("p { color: red; } .x { padding: 50% } #y { font-weight: bold; }")

    assert [rule.selector for rule in rules] == [TypeSelector("p"), ClassSelector("x"), IdSelector("y")]
    assert [rule.order for rule in rules] == [0, 1, 2]
    assert rules[0].get("color") == Color(255, 0, 0, 255)
    assert rules[1].get("padding") == Length(50, LengthUnit.PERCENT)
    assert rules[2].get("font-weight") == Keyword("bold")


def test_selector_group_becomes_separate_rules_sharing_order():
    rules = parse_css("p { color: red } h1, .x, * { margin: 1em }")

    assert [rule.selector for rule in rules] == [
        TypeSelector("p"), TypeSelector("h1"), ClassSelector("x"), UniversalSelector(),
    ]
    assert [rule.order for rule in rules] == [0, 1, 1, 1]
    assert rules[1].declarations == rules[2].declarations == rules[3].declarations


def test_invalid_selector_in_group_is_dropped_alone():
    rules, diagnostics = CSSParser().parse_with_diagnostics("p, div.x, a:hover, .y { color: red }")

    assert [rule.selector for rule in rules] == [TypeSelector("p"), ClassSelector("y")]
    assert diagnostics[DROPPED_SELECTOR] == 2


def test_declaration_details():
    (rule,) = parse_css("P { COLOR : RED ; Padding-Left:4px }")

    assert rule.selector == TypeSelector("p")
    assert [(d.name, d.raw) for d in rule.declarations] == [("color", "RED"), ("padding-left", "4px")]
    assert rule.declarations[0].value == Color(255, 0, 0, 255)


def test_unknown_property_is_dropped():
    rules, diagnostics = CSSParser().parse_with_diagnostics("p { float: left; color: blue }")

    assert [d.name for d in rules[0].declarations] == ["color"]
    assert diagnostics[UNKNOWN_PROPERTY] == 1


def test_bad_values_drop_only_their_declaration():
    rules, diagnostics = CSSParser().parse_with_diagnostics(
        "p { color: notacolor; padding: 10; margin: 2px; border-width }"
    )

    assert [d.name for d in rules[0].declarations] == ["margin"]
    assert diagnostics[DROPPED_DECLARATION] == 3


def test_rule_without_valid_declarations_is_kept():
    rules = parse_css("p { color: nope }")

    assert len(rules) == 1
    assert rules[0].declarations == ()


def test_functional_colors_with_spaces():
    (rule,) = parse_css("p { color: rgb(255, 0, 0); background-color: rgba(0,0,0,0.5) }")

    assert rule.get("color") == Color(255, 0, 0, 255)
    assert rule.get("background-color") == Color(0, 0, 0, 128)


def test_comments_are_ignored():
    rules = parse_css("/* lead */ p { /* inside */ color: red; /* tail */ }")

    assert len(rules) == 1
    assert [d.name for d in rules[0].declarations] == ["color"]


def test_at_rules_are_skipped():
    rules, diagnostics = CSSParser().parse_with_diagnostics(
        "@import url(print.css); @media screen { p { color: red } } div { color: blue } @font-face { x: y }"
    )

    assert [rule.selector for rule in rules] == [TypeSelector("div")]
    assert rules[0].order == 0
    assert diagnostics[SKIPPED_AT_RULE] == 3


def test_unclosed_block_at_end_of_input():
    (rule,) = parse_css("p { color: red")

    assert rule.get("color") == Color(255, 0, 0, 255)


def test_selector_without_block_is_dropped():
    rules, diagnostics = CSSParser().parse_with_diagnostics("p { color: red } div")

    assert len(rules) == 1
    assert diagnostics[DROPPED_RULE] == 1


def test_stray_closing_brace_is_skipped():
    rules = parse_css("} p { color: red }")

    assert [rule.selector for rule in rules] == [TypeSelector("p")]


def test_html_comment_delimiters_are_ignored():
    rules = parse_css("<!-- p { color: red } -->")

    assert [rule.selector for rule in rules] == [TypeSelector("p")]


def test_empty_stylesheet():
    assert parse_css("") == []
    assert parse_css("   \n ") == []


def test_later_duplicate_declaration_wins_within_rule():
    (rule,) = parse_css("p { color: red; color: green }")

    assert rule.get("color") == Color(0, 128, 0, 255)
