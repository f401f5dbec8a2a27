"""Lexical detection of block keywords in embedded code.

When a dedent returns to an enclosing `- if`, the parser needs to know
whether the dedenting line continues that construct (`- else`) or starts an
unrelated statement. The check is a regex over a closed keyword set; the
embedded code is never parsed.
"""

import re

MID_BLOCK_KEYWORDS = ("else", "elsif", "rescue", "ensure", "end", "when")
START_BLOCK_KEYWORDS = ("if", "begin", "case", "unless")

# Accepts simple assignments to block starters, e.g. `x, y = case foo`
START_BLOCK_KEYWORD_PATTERN = r"(?:\w+(?:,\s*\w+)*\s*=\s*)?({})".format(
    "|".join(map(re.escape, START_BLOCK_KEYWORDS))
)

BLOCK_KEYWORD_REGEX = re.compile(
    r"^-?\s*(?:({})|{})\b".format(
        "|".join(map(re.escape, MID_BLOCK_KEYWORDS)),
        START_BLOCK_KEYWORD_PATTERN,
    )
)


def block_keyword(text: str) -> str | None:
    """Leading block keyword of a line, or None.

    Examples:
        block_keyword("- else")            # "else"
        block_keyword("- x = if foo")      # "if"
        block_keyword("%p elsewhere")      # None
    """
    m = BLOCK_KEYWORD_REGEX.match(text)
    if m:
        return m.group(1) or m.group(2)
    return None


def is_mid_block_keyword(text: str) -> bool:
    return block_keyword(text) in MID_BLOCK_KEYWORDS
