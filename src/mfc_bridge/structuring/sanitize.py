"""Markdown code-fence stripping for model output."""

FENCE = "```"


def strip_json_fences(text: str) -> str:
    """Return `text` without a surrounding fenced block, trimmed.

    The opening fence line (with any language tag such as ``json``) is dropped,
    and everything from the last fence marker onward is dropped. Fence markers
    inside the payload itself are not escaped, so a payload containing a
    triple backtick can be cut short. The last-marker rule is a heuristic.
    """
    cleaned = text.strip()
    if not cleaned.startswith(FENCE):
        return cleaned

    newline_at = cleaned.find("\n")
    if newline_at == -1:
        cleaned = cleaned[len(FENCE):]
    else:
        cleaned = cleaned[newline_at + 1:]

    closing_at = cleaned.rfind(FENCE)
    if closing_at != -1:
        cleaned = cleaned[:closing_at]
    return cleaned.strip()
