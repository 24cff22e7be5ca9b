"""Character-budget text wrapping for table cells."""

from typing import List, Optional

CONTINUATION_MARKER = "-"


def wrap(text: Optional[str], max_chars: int) -> List[str]:
    """Wrap text into lines of at most max_chars characters.

    Explicit newlines are kept (empty paragraphs become empty lines). Words
    are packed greedily; a word longer than max_chars is cut into chunks of
    max_chars - 1 characters, each followed by CONTINUATION_MARKER except
    the last.

    Args:
        text: Text to wrap (None is treated as empty)
        max_chars: Line budget in characters

    Returns:
        Wrapped lines; never empty ([""] for empty input)

    Raises:
        ValueError: If max_chars < 2
    """
    if max_chars < 2:
        raise ValueError(f"max_chars must be >= 2, got {max_chars}")
    if not text:
        return [""]

    lines: List[str] = []
    for paragraph in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        lines.extend(_wrap_paragraph(paragraph, max_chars))
    return lines


def _wrap_paragraph(paragraph: str, max_chars: int) -> List[str]:
    lines: List[str] = []
    current = ""
    for word in paragraph.split():
        if current and len(current) + 1 + len(word) <= max_chars:
            current = f"{current} {word}"
            continue
        if current:
            lines.append(current)
            current = ""
        if len(word) <= max_chars:
            current = word
            continue
        chunk = max_chars - 1
        pieces = [word[i:i + chunk] for i in range(0, len(word), chunk)]
        lines.extend(piece + CONTINUATION_MARKER for piece in pieces[:-1])
        current = pieces[-1]

    if current or not lines:
        lines.append(current)
    return lines
