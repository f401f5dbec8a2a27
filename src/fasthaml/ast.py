"""AST nodes produced by the template parser."""

from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, Field


class Text(BaseModel):
    """Plain text line, kept verbatim."""

    type: TypingLiteral["text"] = "text"
    text: str


class Doctype(BaseModel):
    type: TypingLiteral["doctype"] = "doctype"
    doctype: str  # raw line, including the leading !!!


class HtmlComment(BaseModel):
    type: TypingLiteral["html_comment"] = "html_comment"
    comment: str


class CodeBlock(BaseModel):
    """Embedded code that may open a nested block (if/each/case ...).

    `mid_block_keyword` is decided when the parser leaves the nested block:
    it is True when the line that closed the block continues the construct
    (e.g. an `- else` aligned with its `- if`).
    """

    script: str
    mid_block_keyword: bool = False
    children: list["Node"] = []


class Script(CodeBlock):
    """Code whose result is inserted into the output (`= expr`)."""

    type: TypingLiteral["script"] = "script"


class SilentScript(CodeBlock):
    """Code that is run for its effect only (`- expr`)."""

    type: TypingLiteral["silent_script"] = "silent_script"


class Element(BaseModel):
    """HTML element (e.g. `%a.button#go{href: url}(rel="next") Go`)."""

    type: TypingLiteral["element"] = "element"
    tag_name: str
    static_class: str = ""  # space-joined, in source order
    static_id: str = ""
    old_attributes: str = ""  # inside of {...}, uninterpreted
    new_attributes: str = ""  # inside of (...), uninterpreted
    oneline_child: "Script | Text | None" = None
    children: list["Node"] = []


# Node union type
Node = Annotated[
    Element | Script | SilentScript | Doctype | HtmlComment | Text,
    Field(discriminator="type"),
]

# Nodes that may own an indented block
Container = Element | Script | SilentScript


class Root(BaseModel):
    """A parsed template."""

    type: TypingLiteral["root"] = "root"
    children: list[Node] = []


# Rebuild models for forward references
CodeBlock.model_rebuild()
Script.model_rebuild()
SilentScript.model_rebuild()
Element.model_rebuild()
Root.model_rebuild()
