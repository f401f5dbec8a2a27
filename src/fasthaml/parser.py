"""Parser for Haml-style templates.

Line grammar (after indentation):
    line        = element | doctype | comment | script | silent | div | text
    element     = "%" TAG (("." | "#") NAME)* attributes? inline?
    div         = ("." | "#") NAME (("." | "#") NAME)* attributes? inline?
    attributes  = "{" balanced "}" | "(" balanced ")"   (each kind at most once)
    inline      = "=" CODE | TEXT
    doctype     = "!!!" TEXT?
    comment     = "/" TEXT?
    script      = "=" CODE
    silent      = "-" CODE

Nesting is given by indentation only: a line indented deeper than the previous
one becomes a child of it.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from . import ast
from .keywords import is_mid_block_keyword
from .lines import logical_lines

logger = logging.getLogger(__name__)


class ParseError(Exception):
    def __init__(self, message: str, lineno: int):
        super().__init__(f"{message} at line {lineno}")
        self.message = message
        self.lineno = lineno


class InvalidDoctype(ParseError):
    pass


class InvalidElementDeclaration(ParseError):
    pass


class EmptyCodeExpression(ParseError):
    pass


class UnmatchedBrace(ParseError):
    pass


class UnexpectedIndentLevel(ParseError):
    pass


class IllegalNesting(UnexpectedIndentLevel):
    """Indented content under a line that cannot have children."""


class ParserOptions(BaseModel):
    """Parser options. None alter parsing yet; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class IndentTracker:
    """Indent stack and insertion point for a single parse call."""

    def __init__(self, root: ast.Root):
        self.levels = [0]
        self.parents: list[ast.Root | ast.Container] = []
        self.current: ast.Root | ast.Container = root
        self.pushes = 0

    @property
    def depth(self) -> int:
        return len(self.parents)

    def append(self, node: ast.Node) -> None:
        self.current.children.append(node)

    def process(self, level: int, text: str, lineno: int) -> None:
        if level > self.levels[-1]:
            self.enter(level, lineno)
        elif level < self.levels[-1]:
            self.leave(level, text, lineno)

    def enter(self, level: int, lineno: int) -> None:
        if not self.current.children:
            raise IllegalNesting("Illegal nesting: nothing to nest under", lineno)
        last = self.current.children[-1]
        if not isinstance(last, ast.Container):
            raise IllegalNesting(f"Illegal nesting: {last.type} cannot have children", lineno)

        self.levels.append(level)
        self.parents.append(self.current)
        self.current = last
        self.pushes += 1

    def leave(self, level: int, text: str, lineno: int) -> None:
        while level < self.levels[-1]:
            self.levels.pop()
            parent = self.parents.pop()
            if isinstance(self.current, ast.CodeBlock):
                self.current.mid_block_keyword = is_mid_block_keyword(text)
                logger.debug(
                    "line %d closes %r (mid_block_keyword=%s)",
                    lineno,
                    self.current.script,
                    self.current.mid_block_keyword,
                )
            self.current = parent

        if level != self.levels[-1]:
            raise UnexpectedIndentLevel(
                f"Unexpected indent level: {level}: indent_level={self.levels}", lineno
            )

    def close(self, lineno: int) -> None:
        """Leave every open block at end of input."""
        if self.levels[-1] > 0:
            self.leave(0, "", lineno)


class Parser:
    """Builds an `ast.Root` from template source.

    A parser keeps no state between calls and can be reused for any number
    of templates, one at a time.
    """

    DOCTYPE_PREFIX = "!"
    ELEMENT_PREFIX = "%"
    SCRIPT_PREFIX = "="
    COMMENT_PREFIX = "/"
    SILENT_SCRIPT_PREFIX = "-"
    DIV_ID_PREFIX = "#"
    DIV_CLASS_PREFIX = "."

    DOCTYPE_MARKER = "!!!"
    OLD_ATTRIBUTE_BEGIN = "{"
    NEW_ATTRIBUTE_BEGIN = "("

    ELEMENT_REGEX = re.compile(r"%([-:\w]+)([-:\w.#]*)(.+)?", re.ASCII)
    CLASS_AND_ID_REGEX = re.compile(r"([#.])([-:_a-zA-Z0-9]+)")
    INDENT_REGEX = re.compile(r"( *)(.*)", re.DOTALL)

    # (open, close) -> regex matching either delimiter
    DELIMITER_REGEXES = {
        ("{", "}"): re.compile(r"[{}]"),
        ("(", ")"): re.compile(r"[()]"),
    }

    def __init__(self, options: Mapping[str, Any] | ParserOptions | None = None):
        if isinstance(options, ParserOptions):
            self.options = options
        else:
            self.options = ParserOptions.model_validate(dict(options or {}))

    def call(self, source: str) -> ast.Root:
        """Parse a complete template."""
        root = ast.Root()
        tracker = IndentTracker(root)
        logger.debug("parsing template (%d chars)", len(source))

        count = 0
        last_lineno = 0
        for line in logical_lines(source):
            self.parse_line(tracker, line.text, line.lineno)
            count += 1
            last_lineno = line.lineno
        tracker.close(last_lineno)

        logger.debug("parsed %d logical lines into %d top-level nodes", count, len(root.children))
        return root

    parse = call

    def parse_line(self, tracker: IndentTracker, line: str, lineno: int) -> None:
        m = self.INDENT_REGEX.fullmatch(line)
        level = len(m.group(1))
        text = m.group(2)
        if not text:
            return

        tracker.process(level, text, lineno)
        tracker.append(self.parse_text(text, lineno))

    def parse_text(self, text: str, lineno: int) -> ast.Node:
        """Build the node for one line, indentation already removed."""
        prefix = text[0]
        if prefix == self.ELEMENT_PREFIX:
            return self.parse_element(text, lineno)
        if prefix == self.DOCTYPE_PREFIX:
            if not text.startswith(self.DOCTYPE_MARKER):
                raise InvalidDoctype("Illegal doctype declaration", lineno)
            return ast.Doctype(doctype=text)
        if prefix == self.COMMENT_PREFIX:
            return ast.HtmlComment(comment=text[1:].strip())
        if prefix == self.SCRIPT_PREFIX:
            return ast.Script(script=self._parse_code(text, lineno))
        if prefix == self.SILENT_SCRIPT_PREFIX:
            return ast.SilentScript(script=self._parse_code(text, lineno))
        if prefix in (self.DIV_ID_PREFIX, self.DIV_CLASS_PREFIX):
            return self.parse_text(f"{self.ELEMENT_PREFIX}div{text}", lineno)
        return ast.Text(text=text)

    def _parse_code(self, text: str, lineno: int) -> str:
        code = text[1:].lstrip()
        if not code:
            raise EmptyCodeExpression("No code to evaluate", lineno)
        return code

    def parse_element(self, text: str, lineno: int) -> ast.Element:
        m = self.ELEMENT_REGEX.fullmatch(text)
        if not m:
            raise InvalidElementDeclaration("Invalid element declaration", lineno)

        static_class, static_id = self.parse_class_and_id(m.group(2))
        element = ast.Element(tag_name=m.group(1), static_class=static_class, static_id=static_id)

        rest = (m.group(3) or "").lstrip()
        seen_old = seen_new = False
        while True:
            if rest.startswith(self.OLD_ATTRIBUTE_BEGIN) and not seen_old:
                element.old_attributes, rest = self.parse_balanced(rest, "{", "}", lineno)
                seen_old = True
            elif rest.startswith(self.NEW_ATTRIBUTE_BEGIN) and not seen_new:
                element.new_attributes, rest = self.parse_balanced(rest, "(", ")", lineno)
                seen_new = True
            else:
                break

        if rest.startswith(self.SCRIPT_PREFIX):
            element.oneline_child = ast.Script(script=self._parse_code(rest, lineno))
        elif rest:
            element.oneline_child = ast.Text(text=rest)
        return element

    def parse_class_and_id(self, class_and_id: str) -> tuple[str, str]:
        """Split `.a.b#c` shorthand into ("a b", "c"). The last id wins."""
        classes = []
        id_ = ""
        for kind, name in self.CLASS_AND_ID_REGEX.findall(class_and_id):
            if kind == ".":
                classes.append(name)
            else:
                id_ = name
        return " ".join(classes), id_

    def parse_balanced(self, text: str, open_: str, close: str, lineno: int) -> tuple[str, str]:
        """Split `text`, which starts with `open_`, after its matching `close`.

        Returns the inside of the delimiters and the left-trimmed remainder.
        """
        depth = 1
        for m in self.DELIMITER_REGEXES[(open_, close)].finditer(text, 1):
            depth += 1 if m.group() == open_ else -1
            if depth == 0:
                return text[1 : m.start()], text[m.end() :].lstrip()

        kind = "brace" if open_ == "{" else "paren"
        raise UnmatchedBrace(f"Unmatched {kind}", lineno)


def parse(source: str, **options: Any) -> ast.Root:
    """Parse template source into an AST."""
    return Parser(options).call(source)
