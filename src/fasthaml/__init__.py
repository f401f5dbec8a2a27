"""fasthaml — parse Haml-style templates into a typed AST.

Example:
    from fasthaml import parse

    root = parse('''
    %ul#nav
      - for item in items
        %li.item= item.title
    ''')
    root.children[0].static_id  # "nav"
"""

__version__ = "0.1.0"

from .ast import (
    CodeBlock,
    Doctype,
    Element,
    HtmlComment,
    Node,
    Root,
    Script,
    SilentScript,
    Text,
)
from .keywords import (
    MID_BLOCK_KEYWORDS,
    START_BLOCK_KEYWORDS,
    block_keyword,
    is_mid_block_keyword,
)
from .lines import LogicalLine, logical_lines
from .parser import (
    EmptyCodeExpression,
    IllegalNesting,
    IndentTracker,
    InvalidDoctype,
    InvalidElementDeclaration,
    ParseError,
    Parser,
    ParserOptions,
    UnexpectedIndentLevel,
    UnmatchedBrace,
    parse,
)

__all__ = [
    # Parse
    "parse",
    "Parser",
    "ParserOptions",
    "IndentTracker",
    # Errors
    "ParseError",
    "InvalidDoctype",
    "InvalidElementDeclaration",
    "EmptyCodeExpression",
    "UnmatchedBrace",
    "UnexpectedIndentLevel",
    "IllegalNesting",
    # AST
    "Root",
    "Node",
    "Element",
    "CodeBlock",
    "Script",
    "SilentScript",
    "Doctype",
    "HtmlComment",
    "Text",
    # Lines
    "LogicalLine",
    "logical_lines",
    # Block keywords
    "MID_BLOCK_KEYWORDS",
    "START_BLOCK_KEYWORDS",
    "block_keyword",
    "is_mid_block_keyword",
]
