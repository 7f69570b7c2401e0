import logging

from render_core import RenderEngine, render_document
from render_core.css.values import Color, Length, LengthUnit
from render_core.utils.config import Config
from render_core.utils.logging import LOGGER_NAME, configure_from
from render_core.utils.diagnostics import STRAY_END_TAG, UNKNOWN_PROPERTY

PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Sample</title>
  <style>
    p { color: red; }
    .note { color: blue; padding: 50%; }
  </style>
</head>
<body>
  <p class="note">Hello</p>
  <p>World</p></span>
  <style>p { float: left; margin: 2px }</style>
</body>
</html>
"""


def test_pipeline_end_to_end():
    styled = render_document(PAGE)

    assert styled.title == "Sample"
    note, plain = styled.document.get_elements_by_tag_name("p")
    assert styled.style_for(note)["color"] == Color(0, 0, 255, 255)
    assert styled.style_for(note)["padding"] == Length(50, LengthUnit.PERCENT)
    assert styled.style_for(plain)["color"] == Color(255, 0, 0, 255)
    assert styled.style_for(plain)["margin"] == Length(2, LengthUnit.PX)


def test_rules_span_all_style_blocks_in_order():
    styled = render_document(PAGE)

    assert [rule.order for rule in styled.rules] == [0, 1, 2]


def test_diagnostics_combine_both_parsers():
    styled = render_document(PAGE)

    assert styled.diagnostics[STRAY_END_TAG] == 1
    assert styled.diagnostics[UNKNOWN_PROPERTY] == 1


def test_text_nodes_have_empty_style():
    styled = render_document("<p>x</p>")
    (p,) = styled.document.get_elements_by_tag_name("p")

    assert len(styled.style_for(p.child_nodes[0])) == 0


def test_restyle_matches_initial_styles():
    engine = RenderEngine()
    styled = engine.load_html(PAGE)

    assert engine.restyle(styled) == styled.styles


def test_stage_timings_are_recorded():
    engine = RenderEngine()
    engine.load_html(PAGE)

    assert set(engine.performance.durations) == {"parse_html", "parse_css", "resolve_styles"}


def test_engine_passes_config_to_markup_parser():
    engine = RenderEngine(Config(overrides={"html.decode_entities": False}))
    styled = engine.load_html("<p>&amp;</p>")

    assert styled.document.body.text_content == "&amp;"


def test_dump_includes_styles():
    styled = render_document("<style>p { color: red }</style><p>x</p>")

    assert "  color: rgba(255, 0, 0, 255)" in styled.dump()


def test_later_style_block_wins_even_when_relocated():
    styled = render_document(
        "<style>p { color: red }</style><head><style>p { color: green }</style></head><p>x</p>"
    )
    (p,) = styled.document.get_elements_by_tag_name("p")

    assert [rule.order for rule in styled.rules] == [0, 1]
    assert styled.style_for(p)["color"] == Color(0, 128, 0, 255)


def test_engine_applies_logging_config():
    logger = logging.getLogger(LOGGER_NAME)
    try:
        RenderEngine(Config(overrides={"logging.console_level": "ERROR"}))

        assert [handler.level for handler in logger.handlers] == [logging.ERROR]
    finally:
        configure_from(Config())
