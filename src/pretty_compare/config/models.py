"""Settings schema for pretty-compare."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

ColorMode = Literal["auto", "always", "never"]
Granularity = Literal["word", "char"]


class OutputSettings(BaseModel):
    color: ColorMode = Field(default="auto", description="When to emit terminal styling")
    left_label: str = Field(default="left")
    right_label: str = Field(default="right")


class DiffSettings(BaseModel):
    granularity: Granularity = Field(default="word", description="Intra-line token unit")
    min_similarity: float = Field(default=0.5, ge=0.0, le=1.0)


class PrettySettings(BaseModel):
    max_width: int = Field(default=80, ge=20, le=1000)
    indent_size: int = Field(default=4, ge=1, le=8)
    expand_all: bool = Field(default=True)
    raw_strings: bool = Field(default=False, description="Diff str values verbatim instead of their repr")


class StyleSettings(BaseModel):
    removed: str = Field(default="red")
    added: str = Field(default="green")
    removed_highlight: str = Field(default="bold red on color(52)")
    added_highlight: str = Field(default="bold green on color(22)")
    header: str = Field(default="bold")
    note: str = Field(default="bold underline")

    @field_validator("*")
    @classmethod
    def validate_style(cls, value: str) -> str:
        try:
            Style.parse(value)
        except StyleSyntaxError as exc:
            raise ValueError(str(exc)) from exc
        return value


class AppSettings(BaseModel):
    schema_version: int = Field(default=1)
    output: OutputSettings = Field(default_factory=OutputSettings)
    diff: DiffSettings = Field(default_factory=DiffSettings)
    pretty: PrettySettings = Field(default_factory=PrettySettings)
    styles: StyleSettings = Field(default_factory=StyleSettings)

    def setting_items(self) -> list[tuple[str, str]]:
        """Flatten key/value pairs for `settings-show`."""

        result: list[tuple[str, str]] = []

        def walk(prefix: str, value: object) -> None:
            if isinstance(value, BaseModel):
                for key, nested in value.model_dump().items():
                    walk(f"{prefix}.{key}" if prefix else key, nested)
            elif isinstance(value, dict):
                for key, nested in value.items():
                    walk(f"{prefix}.{key}" if prefix else key, nested)
            else:
                result.append((prefix, str(value)))

        walk("", self)
        return result
