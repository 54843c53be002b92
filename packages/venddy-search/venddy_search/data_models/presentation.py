"""
Data models for the UI elements handed to the host presenter.

The host lays elements out top-to-bottom by their `order` key. Options carry a
coroutine callback that the host invokes when the option is chosen.
"""

from collections.abc import Awaitable, Callable
from typing import Literal, Union

from pydantic import BaseModel, Field

SelectCallback = Callable[[], Awaitable[None]]


class TextElement(BaseModel):
    """A non-selectable markdown line in a menu."""

    kind: Literal["text"] = "text"
    body: str
    order: int = Field(ge=0)


class OptionElement(BaseModel):
    """A selectable menu line."""

    kind: Literal["option"] = "option"
    label: str
    order: int = Field(ge=0)
    on_select: SelectCallback | None = Field(default=None, exclude=True, repr=False)


MenuElement = Union[TextElement, OptionElement]


class DetailDocument(BaseModel):
    """A markdown document describing a single vendor."""

    label: str
    markdown: str


class ListLink(BaseModel):
    kind: Literal["link"] = "link"
    href: str
    text: str
    order: int


class ListPair(BaseModel):
    kind: Literal["pair"] = "pair"
    label: str
    value: str
    order: int


class ListMessage(BaseModel):
    kind: Literal["message"] = "message"
    header: str
    body: str
    order: int


ListElement = Union[ListLink, ListPair, ListMessage]


def sorted_elements(elements: dict[str, MenuElement]) -> list[tuple[str, MenuElement]]:
    """Returns (key, element) pairs in display order."""
    return sorted(elements.items(), key=lambda item: item[1].order)
