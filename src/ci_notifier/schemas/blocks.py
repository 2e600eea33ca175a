"""Pydantic schemas for Slack Block Kit nodes.

Block is a discriminated union on `type`. Each variant knows its own wire shape;
render_blocks() turns a block sequence into the JSON list chat.postMessage expects.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextStyle(_Node):
    bold: bool = False
    code: bool = False

    def to_slack(self) -> Dict[str, bool]:
        return {name: True for name in ("code", "bold") if getattr(self, name)}


class InlineText(_Node):
    text: str
    markup: Literal["plain_text", "mrkdwn"] = "mrkdwn"
    style: Optional[TextStyle] = None

    def to_slack(self) -> Dict[str, Any]:
        """Text object used by header/context/section blocks."""
        if self.markup == "plain_text":
            return {"type": "plain_text", "text": self.text, "emoji": True}
        return {"type": "mrkdwn", "text": self.text}

    def to_rich_text(self) -> Dict[str, Any]:
        """Text element used inside rich_text sections."""
        element: Dict[str, Any] = {"type": "text", "text": self.text}
        if self.style is not None:
            element["style"] = self.style.to_slack()
        return element


class RichListItem(_Node):
    elements: List[InlineText]

    def to_slack(self) -> Dict[str, Any]:
        return {
            "type": "rich_text_section",
            "elements": [e.to_rich_text() for e in self.elements],
        }


class Header(_Node):
    type: Literal["header"] = "header"
    text: str

    def to_slack(self) -> Dict[str, Any]:
        return {"type": "header", "text": InlineText(text=self.text, markup="plain_text").to_slack()}


class Divider(_Node):
    type: Literal["divider"] = "divider"

    def to_slack(self) -> Dict[str, Any]:
        return {"type": "divider"}


class Context(_Node):
    type: Literal["context"] = "context"
    elements: List[InlineText]

    def to_slack(self) -> Dict[str, Any]:
        return {"type": "context", "elements": [e.to_slack() for e in self.elements]}


class Section(_Node):
    type: Literal["section"] = "section"
    text: Optional[InlineText] = None
    fields: Optional[List[InlineText]] = None

    def to_slack(self) -> Dict[str, Any]:
        block: Dict[str, Any] = {"type": "section"}
        if self.text is not None:
            block["text"] = self.text.to_slack()
        if self.fields is not None:
            block["fields"] = [f.to_slack() for f in self.fields]
        return block


class RichList(_Node):
    type: Literal["rich_list"] = "rich_list"
    indent: int = Field(0, ge=0)
    style: Literal["bullet"] = "bullet"
    items: List[RichListItem]

    def to_slack(self) -> Dict[str, Any]:
        """A rich_text_list element; render_blocks() wraps it in a rich_text block."""
        return {
            "type": "rich_text_list",
            "style": self.style,
            "indent": self.indent,
            "border": 1,
            "elements": [item.to_slack() for item in self.items],
        }


Block = Annotated[
    Union[Header, Divider, Context, Section, RichList],
    Field(discriminator="type"),
]


def mrkdwn(text: str) -> InlineText:
    return InlineText(text=text, markup="mrkdwn")


def styled(text: str, bold: bool = False, code: bool = False) -> InlineText:
    return InlineText(text=text, style=TextStyle(bold=bold, code=code))


def render_blocks(blocks: Sequence[Block]) -> List[Dict[str, Any]]:
    """
    Serialize blocks to Slack wire JSON.
    An indent-0 RichList opens a rich_text block; deeper RichLists that follow
    are nested lists of that same rich_text block.
    """
    out: List[Dict[str, Any]] = []
    open_rich_text: Optional[Dict[str, Any]] = None
    for block in blocks:
        if isinstance(block, RichList):
            if open_rich_text is None or block.indent == 0:
                open_rich_text = {"type": "rich_text", "elements": []}
                out.append(open_rich_text)
            open_rich_text["elements"].append(block.to_slack())
            continue
        open_rich_text = None
        out.append(block.to_slack())
    return out
