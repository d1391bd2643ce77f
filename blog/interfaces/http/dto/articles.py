# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ArticleQueryDTO(BaseModel):
    start: datetime | None = None
    end: datetime | None = None

    @field_validator("start", "end", mode="after")
    @classmethod
    def _normalise(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class CreateArticleRequestDTO(BaseModel):
    # author defaults to the signed-in user when omitted
    author_name: str | None = Field(None, min_length=1, max_length=100)
    author_email: EmailStr | None = None
    title: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class AddCommentRequestDTO(BaseModel):
    content: str = Field(min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CommentDTO(BaseModel):
    id: int
    article_id: int
    content: str
    published_date: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleDTO(BaseModel):
    id: int
    author_name: str
    author_email: str
    title: str
    content: str
    published_date: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleDetailsDTO(ArticleDTO):
    comments: list[CommentDTO] = Field(default_factory=list)
