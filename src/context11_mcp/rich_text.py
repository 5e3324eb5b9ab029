"""Plain-text rendering of Tiptap (rich-text JSON) document content."""

from __future__ import annotations

import json
from typing import Any

from .models import RichTextNode


def extract_text(content: str | None) -> str:
    """Render serialized Tiptap JSON as plain text.

    Content that is not valid JSON (legacy plain-text documents) is returned
    unchanged. Paragraphs are set apart by a blank line: both the children of a
    ``paragraph`` node and any sequence of siblings that includes a paragraph.
    Children of every other container are concatenated as-is, so inline runs
    inside a heading render as "AB".
    """
    if content is None:
        return ""
    try:
        root = json.loads(content)
    except (TypeError, ValueError):
        return content
    return _render(root)


def _render(node: RichTextNode | Any) -> str:
    if not isinstance(node, dict):
        return ""
    text = node.get("text")
    if node.get("type") == "text" and isinstance(text, str) and text:
        return text
    children = node.get("content")
    if isinstance(children, list):
        sep = "\n\n" if _is_paragraph(node) or any(_is_paragraph(c) for c in children) else ""
        return sep.join(_render(child) for child in children).strip()
    return ""


def _is_paragraph(node: Any) -> bool:
    return isinstance(node, dict) and node.get("type") == "paragraph"
