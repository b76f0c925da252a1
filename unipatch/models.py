from enum import StrEnum
from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

U64_MAX = 2**64 - 1


class DateTimeMetadata(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    kind: Literal["datetime"] = "datetime"
    value: AwareDatetime


class OtherMetadata(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    kind: Literal["other"] = "other"
    value: str


FileMetadata = Annotated[
    DateTimeMetadata | OtherMetadata,
    Field(discriminator="kind"),
]


class File(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    path: str = Field(min_length=1)
    meta: FileMetadata | None = None


class Range(BaseModel):
    """
    Position of a hunk in one version of a file.

    `count` is 1 when the hunk header omits it (`@@ -5 +5 @@`).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    start: int = Field(ge=0, le=U64_MAX)
    count: int = Field(default=1, ge=0, le=U64_MAX)


class LineKind(StrEnum):
    ADD = "+"
    REMOVE = "-"
    CONTEXT = " "


class Line(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    kind: LineKind
    text: str

    @classmethod
    def add(cls, text: str) -> "Line":
        return cls(kind=LineKind.ADD, text=text)

    @classmethod
    def remove(cls, text: str) -> "Line":
        return cls(kind=LineKind.REMOVE, text=text)

    @classmethod
    def context(cls, text: str) -> "Line":
        return cls(kind=LineKind.CONTEXT, text=text)


class Hunk(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    old_range: Range
    new_range: Range
    # Everything after the closing "@@", leading space included.
    range_hint: str = ""
    lines: tuple[Line, ...] = Field(min_length=1)


class Patch(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    old: File
    new: File
    hunks: tuple[Hunk, ...] = Field(min_length=1)
    # False iff the patch ended with "\ No newline at end of file".
    end_newline: bool = True
