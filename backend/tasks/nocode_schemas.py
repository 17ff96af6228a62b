# backend/tasks/nocode_schemas.py
from __future__ import annotations

"""
Pydantic-modeller för no-code-schemat (utdata från konverteraren).

Blocktypen är en sluten tagged union på `componentType`:
    ButtonGroupComponent | StackComponent
Indata (Figma-noder) hålls som råa dicts och läses via getters i nocode_mappers.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_serializer

ROOT_ID = "root_id"
FOOTER_ID = "footer_id"
HEADER_ID = "header_id"

# int bevaras som int i JSON (8, inte 8.0)
Number = Union[int, float]

# ─────────────────────────────────────────────────────────
# Delstrukturer (stil)
# ─────────────────────────────────────────────────────────

class Padding(BaseModel):
    left: Number
    right: Number
    top: Number
    bottom: Number


class Border(BaseModel):
    width: Number
    color: Optional[str] = None


class Shadow(BaseModel):
    color: str
    offsetX: Number
    offsetY: Number
    blur: Number


class FontProperties(BaseModel):
    fontFamily: str
    fontWeight: Number
    fontSize: Number
    textColor: Optional[str] = None


class IconSize(BaseModel):
    width: Number
    height: Number


class ButtonState(BaseModel):
    state: str
    value: Any = None


# ─────────────────────────────────────────────────────────
# ButtonGroup
# ─────────────────────────────────────────────────────────

class ButtonRecord(BaseModel):
    id: str
    label: str
    icon: Optional[str] = None
    iconSize: Optional[IconSize] = None
    backgroundColor: Optional[str] = None
    border: Border
    borderRadius: Number
    padding: Padding
    font: Optional[FontProperties] = None
    states: List[ButtonState] = Field(default_factory=list)
    opacity: Number

    @model_serializer(mode="wrap")
    def _empty_font_as_object(self, handler):
        # Knapp utan textbarn → font serialiseras som {}
        data = handler(self)
        if data.get("font") is None:
            data["font"] = {}
        return data


class ButtonGroupAppearance(BaseModel):
    layoutDirection: str
    spacing: Number
    padding: Padding
    backgroundColor: Optional[str] = None
    border: Border
    borderRadius: Number
    shadow: List[Shadow] = Field(default_factory=list)
    opacity: Number
    blendMode: str


class ButtonGroupOptions(BaseModel):
    data: List[ButtonRecord] = Field(default_factory=list)


class ButtonGroupContent(BaseModel):
    mode: Literal["manual"] = "manual"
    options: ButtonGroupOptions
    type: Literal["default"] = "default"


class ButtonGroupComponent(BaseModel):
    componentType: Literal["ButtonGroup"] = "ButtonGroup"
    appearance: ButtonGroupAppearance
    content: ButtonGroupContent


# ─────────────────────────────────────────────────────────
# Stack (root/body)
# ─────────────────────────────────────────────────────────

class StackStyles(BaseModel):
    padding: Dict[str, str] = Field(default_factory=lambda: {"all": "p-xl"})
    backgroundColor: str = "bg-workspace"
    gap: Dict[str, str] = Field(default_factory=lambda: {"all": "gap-md"})
    width: str = "w-full"
    height: str = "h-full"


class StackAppearance(BaseModel):
    alignItems: str = "stretch"
    direction: str = "column"
    justifyContent: str = "flex-start"
    styles: StackStyles = Field(default_factory=StackStyles)


class StackContent(BaseModel):
    blockIds: List[str] = Field(default_factory=list)


class StackComponent(BaseModel):
    componentType: Literal["Stack"] = "Stack"
    appearance: StackAppearance = Field(default_factory=StackAppearance)
    content: StackContent = Field(default_factory=StackContent)


Component = Annotated[
    Union[ButtonGroupComponent, StackComponent],
    Field(discriminator="componentType"),
]

# ─────────────────────────────────────────────────────────
# Block + dokument
# ─────────────────────────────────────────────────────────

class Visibility(BaseModel):
    value: bool = True


class BlockAdditional(BaseModel):
    isRootBlock: bool


class NoCodeBlock(BaseModel):
    component: Component
    visibility: Visibility = Field(default_factory=Visibility)
    displayName: str
    id: str
    parentId: Optional[str] = None
    additional: Optional[BlockAdditional] = None

    @model_serializer(mode="wrap")
    def _drop_absent_links(self, handler):
        # parentId/additional saknas hellre än null i utdata
        data = handler(self)
        for key in ("parentId", "additional"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class PageLayout(BaseModel):
    footer: str = FOOTER_ID
    header: str = HEADER_ID
    body: str = ROOT_ID


class NoCodeDocument(BaseModel):
    blocks: Dict[str, NoCodeBlock] = Field(default_factory=dict)
    layout: PageLayout = Field(default_factory=PageLayout)
    interfaceType: str = "application"
    componentType: str = "PAGE"
    name: str = "Converted from Figma"
    slug: str = "figma-conversion"

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-färdig dict (samma nyckelordning som modellerna)."""
        return self.model_dump(mode="json")


__all__ = [
    "ROOT_ID",
    "Padding",
    "Border",
    "Shadow",
    "FontProperties",
    "IconSize",
    "ButtonState",
    "ButtonRecord",
    "ButtonGroupAppearance",
    "ButtonGroupContent",
    "ButtonGroupOptions",
    "ButtonGroupComponent",
    "StackComponent",
    "NoCodeBlock",
    "NoCodeDocument",
]
