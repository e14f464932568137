"""
Element kinds of the content document.

One pydantic model per kind, joined into a union discriminated on `type`.
Payload fields are strict: a gallery's column count must be stored as a
number, a toggle as a boolean. Style fields that are not declared here
(colors, spacing, font sizes) are allowed and carried through untouched.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, TypeAdapter


ELEMENT_KINDS = (
    "heading",
    "text",
    "image",
    "card",
    "list",
    "gallery",
    "carousel",
    "accordion",
    "tabs",
    "button",
    "link",
    "video",
    "spacer",
    "form",
)

ColumnCount = Annotated[StrictInt, Field(ge=1, le=12)]


# -----------------------------------------------------------------------------
# Payload parts
# -----------------------------------------------------------------------------


class ElementBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[StrictStr] = None


class MediaItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: StrictStr
    caption: Optional[StrictStr] = None


class TitledItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: StrictStr
    content: StrictStr


class FormField(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: StrictStr
    type: Literal["text", "email", "textarea", "select", "checkbox"]
    label: StrictStr
    required: Optional[StrictBool] = None
    options: Optional[List[StrictStr]] = None


# -----------------------------------------------------------------------------
# Kinds
# -----------------------------------------------------------------------------


class HeadingElement(ElementBase):
    type: Literal["heading"]
    value: StrictStr


class TextElement(ElementBase):
    type: Literal["text"]
    value: StrictStr


class ImageElement(ElementBase):
    type: Literal["image"]
    value: StrictStr  # image URL


class CardElement(ElementBase):
    type: Literal["card"]
    value: StrictStr
    href: Optional[StrictStr] = None


class ListElement(ElementBase):
    type: Literal["list"]
    items: List[StrictStr]
    listType: Optional[Literal["bullet", "number"]] = None


class GalleryElement(ElementBase):
    type: Literal["gallery"]
    images: List[MediaItem]
    galleryColumns: Optional[ColumnCount] = None
    galleryColumnsTablet: Optional[ColumnCount] = None
    galleryColumnsMobile: Optional[ColumnCount] = None
    showCaptions: Optional[StrictBool] = None


class CarouselElement(ElementBase):
    type: Literal["carousel"]
    images: List[MediaItem]
    carouselInterval: Optional[Annotated[StrictInt, Field(ge=0)]] = None
    carouselAutoplay: Optional[StrictBool] = None
    carouselShowDots: Optional[StrictBool] = None
    carouselShowArrows: Optional[StrictBool] = None
    showCaptions: Optional[StrictBool] = None


class AccordionElement(ElementBase):
    type: Literal["accordion"]
    accordionItems: List[TitledItem]
    accordionOpenMultiple: Optional[StrictBool] = None


class TabsElement(ElementBase):
    type: Literal["tabs"]
    tabItems: List[TitledItem]


class ButtonElement(ElementBase):
    type: Literal["button"]
    buttonText: StrictStr
    buttonHref: Optional[StrictStr] = None


class LinkElement(ElementBase):
    type: Literal["link"]
    text: StrictStr
    href: StrictStr
    target: Optional[Literal["_self", "_blank"]] = None


class VideoElement(ElementBase):
    type: Literal["video"]
    url: StrictStr
    autoplay: Optional[StrictBool] = None
    controls: Optional[StrictBool] = None


class SpacerElement(ElementBase):
    type: Literal["spacer"]
    height: StrictStr


class FormElement(ElementBase):
    type: Literal["form"]
    fields: List[FormField]
    submitText: StrictStr
    action: Optional[StrictStr] = None


Element = Annotated[
    Union[
        HeadingElement,
        TextElement,
        ImageElement,
        CardElement,
        ListElement,
        GalleryElement,
        CarouselElement,
        AccordionElement,
        TabsElement,
        ButtonElement,
        LinkElement,
        VideoElement,
        SpacerElement,
        FormElement,
    ],
    Field(discriminator="type"),
]

element_adapter: TypeAdapter = TypeAdapter(Element)
