"""Soft line wrapping for article paragraphs."""


def wrap_lines(body: str, soft_limit: int = 72) -> list[str]:
    """Split a paragraph into lines of roughly ``soft_limit`` characters.

    A line breaks at the limit when that character is a space, otherwise at
    the next space after it, so words are never split; a run with no later
    space is cut at the limit. Lines are stripped of surrounding whitespace.
    """
    soft_limit = max(soft_limit, 1)
    lines = []
    while len(body) > soft_limit:
        break_at = soft_limit
        if body[soft_limit] != " ":
            next_space = body.find(" ", soft_limit)
            if next_space != -1:
                break_at = next_space
        line = body[:break_at].strip()
        if line:
            lines.append(line)
        body = body[break_at:]

    body = body.strip()
    if body:
        lines.append(body)
    return lines
