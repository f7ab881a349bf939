from task_relay.extraction.raw_html import extract_raw_html


def test_trailing_text_after_closing_tag_is_excluded() -> None:
    text = "<!DOCTYPE html><body>x</body></html> trailing"

    assert extract_raw_html(text) == "<!DOCTYPE html><body>x</body></html>"


def test_leading_prose_is_dropped_and_markers_are_case_insensitive() -> None:
    text = "Here you go:\n<!doctype HTML>\n<HTML><body>ok</body></HTML>\nEnjoy!"

    assert extract_raw_html(text) == "<!doctype HTML>\n<HTML><body>ok</body></HTML>"


def test_html_tag_without_closing_runs_to_end_of_text() -> None:
    text = "intro <html lang='en'><p>unterminated"

    assert extract_raw_html(text) == "<html lang='en'><p>unterminated"


def test_doctype_takes_precedence_over_earlier_html_tag() -> None:
    text = "<html>first</html> then <!DOCTYPE html><html>second</html>"

    assert extract_raw_html(text) == "<!DOCTYPE html><html>second</html>"


def test_code_fence_defers_to_fence_extractor() -> None:
    assert extract_raw_html("```html\n<html></html>\n```") is None


def test_no_markers_or_non_string() -> None:
    assert extract_raw_html("just words") is None
    assert extract_raw_html("") is None
    assert extract_raw_html(None) is None
