"""
Unit Tests for chat message formatting.
"""

from utils.formatting import format_message


def test_bullets_become_list_items():
    content = "Findings:\n• First\n• Second\nDone."

    assert format_message(content) == "Findings:\n\n- First\n- Second\n\nDone."


def test_single_newlines_become_hard_breaks():
    assert format_message("line one\nline two") == "line one  \nline two"


def test_paragraph_breaks_kept():
    assert format_message("first\n\nsecond") == "first\n\nsecond"


def test_code_blocks_untouched():
    content = "```python\n• not a bullet\nx = 1\n```"

    assert format_message(content) == content


def test_plain_text_unchanged():
    assert format_message("Just one line.") == "Just one line."
