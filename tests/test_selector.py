import pytest

from render_core.css.selector import (
    ClassSelector,
    IdSelector,
    Specificity,
    TypeSelector,
    UniversalSelector,
    parse_selector,
)
from render_core.dom import Element, HtmlTag


@pytest.mark.parametrize("text, expected", [
    ("*", UniversalSelector()),
    ("p", TypeSelector("p")),
    ("H1", TypeSelector("h1")),
    ("my-widget", TypeSelector("my-widget")),
    (".note", ClassSelector("note")),
    ("#main", IdSelector("main")),
    ("  .padded  ", ClassSelector("padded")),
])
def test_parse_selector(text, expected):
    assert parse_selector(text) == expected


@pytest.mark.parametrize("text", ["", "  ", ".", "#", "div.x", "a:hover", "div p", "p > a", "[href]", "1p", "**"])
def test_parse_selector_rejects_anything_but_simple_selectors(text):
    assert parse_selector(text) is None


def test_specificity_order():
    assert IdSelector("a").specificity == Specificity(1, 0, 0)
    assert ClassSelector("a").specificity == Specificity(0, 1, 0)
    assert TypeSelector("p").specificity == Specificity(0, 0, 1)
    assert UniversalSelector().specificity == TypeSelector("p").specificity
    assert IdSelector("a").specificity > ClassSelector("a").specificity > TypeSelector("p").specificity


def test_matching():
    element = Element("p", [("class", "  note   wide "), ("id", "main")])

    assert UniversalSelector().matches(element)
    assert TypeSelector("p").matches(element)
    assert not TypeSelector("div").matches(element)
    assert ClassSelector("note").matches(element)
    assert ClassSelector("wide").matches(element)
    assert not ClassSelector("not").matches(element)
    assert IdSelector("main").matches(element)
    assert not IdSelector("Main").matches(element)


def test_type_selector_matches_custom_tags():
    element = Element("My-Widget")

    assert TypeSelector("my-widget").matches(element)


def test_selectors_render_as_css():
    assert [str(s) for s in (UniversalSelector(), TypeSelector("p"), ClassSelector("x"), IdSelector("y"))] == [
        "*", "p", ".x", "#y",
    ]


def test_element_accepts_tag_names_and_identities():
    by_name = Element("P")
    by_identity = Element(HtmlTag.P)

    assert by_name.tag is by_identity.tag is HtmlTag.P
    assert TypeSelector("p").matches(by_name)
