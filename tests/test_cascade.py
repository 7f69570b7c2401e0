import pytest

from render_core.css.cascade import ComputedStyle, StyleResolver, resolve_styles
from render_core.css.values import Color, Keyword, Length, LengthUnit
from render_core.dom import Element
from render_core.parser.css_parser import parse_css
from render_core.parser.html_parser import parse_html

RED = Color(255, 0, 0, 255)
BLUE = Color(0, 0, 255, 255)
GREEN = Color(0, 128, 0, 255)


def style_of(markup, css, tag_name):
    document = parse_html(markup)
    styles = resolve_styles(document, parse_css(css))
    (element,) = document.get_elements_by_tag_name(tag_name)
    return styles[element.node_id]


def test_class_beats_type_regardless_of_source_order():
    assert style_of('<p class="x">a</p>', "p { color: red; } .x { color: blue; }", "p")["color"] == BLUE
    assert style_of('<p class="x">a</p>', ".x { color: blue; } p { color: red; }", "p")["color"] == BLUE


def test_id_beats_class():
    style = style_of('<p id="y" class="x">a</p>', "#y { color: green } .x { color: blue }", "p")

    assert style["color"] == GREEN


def test_later_rule_wins_on_equal_specificity():
    assert style_of("<p>a</p>", "p { color: red; } p { color: green; }", "p")["color"] == GREEN


def test_universal_and_type_tie_on_source_order():
    assert style_of("<p>a</p>", "p { color: red } * { color: blue }", "p")["color"] == BLUE
    assert style_of("<p>a</p>", "* { color: blue } p { color: red }", "p")["color"] == RED


def test_same_group_keeps_per_selector_specificity():
    style = style_of('<p class="x">a</p>', ".x { color: blue } p, .x { color: red }", "p")

    assert style["color"] == RED


def test_properties_merge_across_rules():
    style = style_of(
        '<p class="x">a</p>',
        "* { margin: 1px; color: red } p { font-weight: bold } .x { color: blue }",
        "p",
    )

    assert dict(style) == {
        "margin": Length(1, LengthUnit.PX),
        "color": BLUE,
        "font-weight": Keyword("bold"),
    }


def test_percentages_stay_unresolved():
    assert style_of("<div>a</div>", "div { padding: 50% }", "div")["padding"] == Length(50, LengthUnit.PERCENT)


def test_no_inheritance():
    document = parse_html('<div class="x"><span>a</span></div>')
    styles = resolve_styles(document, parse_css(".x { color: red }"))
    (div,) = document.get_elements_by_tag_name("div")
    (span,) = document.get_elements_by_tag_name("span")

    assert styles[div.node_id]["color"] == RED
    assert "color" not in styles[span.node_id]


def test_every_element_has_an_entry_and_text_nodes_none():
    document = parse_html("<p>a</p>")
    styles = resolve_styles(document, [])

    assert sorted(styles) == [element.node_id for element in document.iter_elements()]
    assert all(len(style) == 0 for style in styles.values())


def test_custom_tags_match_type_selectors():
    assert style_of("<Fancy-Box>x</Fancy-Box>", "fancy-box { display: block }", "fancy-box")["display"] == Keyword("block")


def test_resolve_is_idempotent():
    document = parse_html('<div id="a" class="b"><p>x</p><span class="b">y</span></div>')
    rules = parse_css("* { margin: 0.5em } .b { color: red } #a { color: blue } p { padding: 50% }")
    resolver = StyleResolver()

    first = resolver.resolve(document, rules)
    second = resolver.resolve(document, rules)

    assert first == second
    assert first is not second
    assert {key: dict(style) for key, style in first.items()} == {key: dict(style) for key, style in second.items()}


def test_resolve_subtree():
    element = Element("p", [("class", "x")])
    styles = resolve_styles(element, parse_css(".x { color: red }"))

    assert list(styles.values()) == [ComputedStyle({"color": RED})]


def test_resolve_rejects_other_targets():
    with pytest.raises(TypeError):
        resolve_styles("<p>", [])


def test_computed_style_is_read_only():
    style = ComputedStyle({"color": RED})

    with pytest.raises(TypeError):
        style["color"] = BLUE
    assert style == {"color": RED}
    assert hash(style) == hash(ComputedStyle({"color": RED}))
