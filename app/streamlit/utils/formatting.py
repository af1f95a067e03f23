"""
Message formatting for the chat transcript.

Streamlit renders markdown itself; this only fixes up what agents tend to send
that markdown would otherwise collapse.
"""
import re

_BULLET = re.compile(r"^\s*•\s+(.+)$")


def format_message(content: str) -> str:
    """
    Prepare an assistant message for ``st.markdown``.

    - ``• item`` lines become markdown list items
    - Single newlines outside code blocks become hard line breaks
    """
    lines = []
    in_code_block = False
    previous_was_bullet = False

    for line in content.split("\n"):
        if line.lstrip().startswith("```"):
            in_code_block = not in_code_block
            lines.append(line)
            previous_was_bullet = False
            continue

        if in_code_block:
            lines.append(line)
            continue

        bullet = _BULLET.match(line)
        if bullet:
            # A list needs a blank line before it to start
            if lines and lines[-1].strip() and not previous_was_bullet:
                lines.append("")
            lines.append(f"- {bullet.group(1)}")
            previous_was_bullet = True
            continue

        if previous_was_bullet and line.strip():
            lines.append("")
        lines.append(line)
        previous_was_bullet = False

    formatted = "\n".join(lines)
    return _hard_breaks(formatted)


def _hard_breaks(content: str) -> str:
    """Preserve single newlines (outside code blocks and lists) as line breaks."""
    parts = re.split(r"(```.*?```)", content, flags=re.DOTALL)
    for i, part in enumerate(parts):
        if part.startswith("```"):
            continue
        parts[i] = re.sub(r"(?<![\n])\n(?![\n]|- )", "  \n", part)
    return "".join(parts)
