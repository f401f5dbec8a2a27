"""Raw-line preprocessing: multiline (`|`) continuation.

A line ending in " |" continues onto the following lines that also end in
" |". The group is joined with no separator and reported at the line number
of its first line:

    = link_to("home", |
        root_path) |

becomes the single logical line `= link_to("home", root_path)`.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

MULTILINE_SUFFIX = " |"

# Blocks with spaces around their arguments are not multiline script:
#     - foo.each do | bar |
BLOCK_WITH_SPACES = re.compile(r"do\s*\|\s*[^|]*\s+\|\Z")


@dataclass
class LogicalLine:
    text: str
    lineno: int  # 1-based, first raw line of the group


def is_multiline(line: str) -> bool:
    """Whether a (right-trimmed) raw line continues onto the next one."""
    return line.endswith(MULTILINE_SUFFIX) and not BLOCK_WITH_SPACES.search(line)


def logical_lines(source: str) -> Iterator[LogicalLine]:
    """Yield the logical lines of a template, joining multiline groups."""
    buf: list[str] = []
    buf_lineno = 0

    source = source.replace("\r\n", "\n").replace("\r", "\n")
    for index, line in enumerate(source.split("\n")):
        line = line.rstrip()
        if is_multiline(line):
            line = line[:-1]
            if buf:
                buf.append(line.lstrip())
            else:
                buf.append(line)
                buf_lineno = index + 1
            continue

        if buf:
            yield LogicalLine("".join(buf).rstrip(), buf_lineno)
            buf = []
        yield LogicalLine(line, index + 1)

    if buf:
        yield LogicalLine("".join(buf).rstrip(), buf_lineno)
