# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .entities import Article, Comment


class ArticleRepository(Protocol):
    def list_all(self) -> Sequence[Article]: ...
    def list_by_date_range(self, start: datetime, end: datetime) -> Sequence[Article]: ...
    def get(self, article_id: int) -> Article | None: ...
    def add(self, article: Article) -> Article: ...
    def add_comment(self, comment: Comment) -> Comment: ...
    def list_comments(self, article_id: int) -> Sequence[Comment]: ...
