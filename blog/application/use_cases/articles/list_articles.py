# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from blog.domain.articles.entities import Article
from blog.domain.articles.repositories import ArticleRepository
from blog.shared.errors import ValidationError


class ListArticlesUseCase:
    def __init__(self, *, articles: ArticleRepository) -> None:
        self._articles = articles

    def execute(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> Sequence[Article]:
        if start is None and end is None:
            return self._articles.list_all()
        if start is None or end is None:
            raise ValidationError(
                "date_range_incomplete", context={"fields": ["start", "end"]}
            )
        if start > end:
            raise ValidationError("date_range_inverted", context={"fields": ["start", "end"]})
        return self._articles.list_by_date_range(start, end)
