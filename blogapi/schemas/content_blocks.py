"""Typed content block shapes, one model per block ``type``."""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_IMAGE_ALT = "Post image"

BLOCK_TYPES = ("title", "paragraph", "image", "subtitle", "list", "quote")


class BlockMetadata(BaseModel):
    # Unknown keys are kept as-is
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    alignment: Literal["left", "center", "right"] | None = None


class HeadingMetadata(BlockMetadata):
    level: int | None = Field(default=None, ge=1, le=6)


class ImageMetadata(BlockMetadata):
    image_alt: str = DEFAULT_IMAGE_ALT
    image_caption: str | None = None

    @field_validator("image_alt", mode="before")
    @classmethod
    def default_alt(cls, v):
        return v or DEFAULT_IMAGE_ALT


class ListMetadata(BlockMetadata):
    list_type: Literal["ordered", "unordered"] = "unordered"


class QuoteMetadata(BlockMetadata):
    quote_author: str | None = None


class _Block(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    content: str = Field(min_length=1)
    order: int | float


class TitleBlock(_Block):
    type: Literal["title"]
    metadata: HeadingMetadata = Field(default_factory=HeadingMetadata)


class SubtitleBlock(_Block):
    type: Literal["subtitle"]
    metadata: HeadingMetadata = Field(default_factory=HeadingMetadata)


class ParagraphBlock(_Block):
    type: Literal["paragraph"]
    metadata: BlockMetadata = Field(default_factory=BlockMetadata)


class ImageBlock(_Block):
    type: Literal["image"]
    metadata: ImageMetadata = Field(default_factory=ImageMetadata)


class ListBlock(_Block):
    type: Literal["list"]
    metadata: ListMetadata = Field(default_factory=ListMetadata)


class QuoteBlock(_Block):
    type: Literal["quote"]
    metadata: QuoteMetadata = Field(default_factory=QuoteMetadata)


ContentBlock = Annotated[
    Union[TitleBlock, SubtitleBlock, ParagraphBlock, ImageBlock, ListBlock, QuoteBlock],
    Field(discriminator="type"),
]

content_block_adapter: TypeAdapter[ContentBlock] = TypeAdapter(ContentBlock)
