from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize_term_list(values: list[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()

    for item in values:
        term = (item or "").strip()
        if not term:
            continue
        key = term.casefold()
        if key in seen:
            continue
        seen.add(key)
        out.append(term)
    return out


class InputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    posts_subdir: str = "Google+ Stream/Posts"
    pattern: str = "*.html"
    encoding: str = "utf-8"

    @field_validator("pattern")
    @classmethod
    def _pattern_must_be_set(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("must be a non-empty glob pattern")
        return value


class OutputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    extension: str = ".md"
    overwrite: bool = True
    copy_images: bool = False

    @field_validator("extension")
    @classmethod
    def _extension_must_start_with_dot(cls, v: str) -> str:
        value = (v or "").strip()
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("must look like '.md'")
        return value


class FrontMatterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    fallback_title: str = "Google+ Post"
    draft: bool = False
    tags: list[str] = Field(default_factory=lambda: ["google-plus"])
    keywords: list[str] = Field(default_factory=lambda: ["google-plus", "archive"])

    @field_validator("tags", "keywords")
    @classmethod
    def _normalize_terms(cls, v: list[str]) -> list[str]:
        return _normalize_term_list(v)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    front_matter: FrontMatterConfig = Field(default_factory=FrontMatterConfig)
