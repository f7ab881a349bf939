from task_relay.extraction.fences import extract_code_fence


def test_html_fence_round_trip() -> None:
    assert extract_code_fence("```html\n<p>hi</p>\n```", "html") == "<p>hi</p>"


def test_preferred_language_wins_over_document_order() -> None:
    text = 'Data:\n```json\n{"a": 1}\n```\nPage:\n```HTML\n<b>page</b>\n```'

    assert extract_code_fence(text, "html") == "<b>page</b>"
    assert extract_code_fence(text) == '{"a": 1}'


def test_first_block_used_when_preferred_language_missing() -> None:
    text = "```python\nprint('a')\n```\n```\nplain block\n```"

    assert extract_code_fence(text, "html") == "print('a')"


def test_untagged_block_is_trimmed() -> None:
    assert extract_code_fence("```\n\n  body text  \n\n```") == "body text"


def test_text_without_complete_fence_passes_through() -> None:
    assert extract_code_fence("no fences here") == "no fences here"
    assert extract_code_fence("```html\n<p>never closed") == "```html\n<p>never closed"


def test_non_string_input_is_string_converted() -> None:
    assert extract_code_fence(42) == "42"
