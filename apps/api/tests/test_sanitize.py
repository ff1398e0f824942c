import pytest

from app.services.sanitize import sanitize

SAMPLES = [
    "Photosynthesis converts light energy into chemical energy.",
    "<p>Hello <b>world</b></p>",
    "<script>alert('x')</script>Visible text",
    "<img src=x onerror=alert(1)>caption",
    '<a href="javascript:alert(1)">click me</a>',
    "&lt;script&gt;alert(1)&lt;/script&gt;",
    "&amp;lt;script&amp;gt;alert(1)&amp;lt;/script&amp;gt;",
    "<scr<script>ipt>alert(1)</script>",
    "<iframe src='https://evil.example'></iframe>Body",
    "Tom &amp; Jerry",
    "5 < 6 and 7 > 3",
    "",
    "   padded   ",
]


def test_plain_text_is_untouched():
    text = "Photosynthesis converts light energy into chemical energy."
    assert sanitize(text) == text


def test_tags_are_removed_but_text_kept():
    assert sanitize("<p>Hello <b>world</b></p>") == "Hello world"


def test_script_blocks_are_dropped_with_their_content():
    out = sanitize("<script>alert('x')</script>Visible text")
    assert out == "Visible text"
    assert "alert" not in out


def test_event_handlers_and_js_links_do_not_survive():
    assert sanitize("<img src=x onerror=alert(1)>caption") == "caption"
    out = sanitize('<a href="javascript:alert(1)">click me</a>')
    assert out == "click me"


def test_bare_text_markers_are_stripped():
    out = sanitize("run javascript:alert(1) now onclick=go()")
    assert "javascript:" not in out.lower()
    assert "onclick=" not in out.lower()


def test_entity_encoded_script_is_neutralized():
    out = sanitize("&lt;script&gt;alert(1)&lt;/script&gt;")
    assert "<script" not in out.lower()
    assert "&lt;" not in out


def test_forbidden_embeds_are_removed():
    assert sanitize("<iframe src='https://evil.example'></iframe>Body") == "Body"


def test_entities_are_decoded():
    assert sanitize("Tom &amp; Jerry") == "Tom & Jerry"


def test_output_is_trimmed():
    assert sanitize("   padded   ") == "padded"
    assert sanitize("") == ""


@pytest.mark.parametrize("sample", SAMPLES)
def test_sanitize_is_idempotent(sample):
    once = sanitize(sample)
    assert sanitize(once) == once


@pytest.mark.parametrize("sample", SAMPLES)
def test_output_has_no_angle_brackets(sample):
    out = sanitize(sample)
    assert "<" not in out
    assert ">" not in out


def test_deeply_nested_js_protocol_is_fully_removed():
    nested = "java" * 11 + "script:" * 11 + " text here"

    once = sanitize(nested)

    assert once == "text here"
    assert sanitize(once) == once


def test_deeply_nested_entities_settle_in_one_call():
    nested = "hello &amp;" + "amp;" * 11 + "lt;world"

    once = sanitize(nested)

    assert sanitize(once) == once
    assert "&amp;" not in once
    assert "&lt;" not in once
