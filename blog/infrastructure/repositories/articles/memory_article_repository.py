# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from blog.domain.articles.entities import Article, Comment
from blog.domain.articles.repositories import ArticleRepository


class InMemoryArticleRepository(ArticleRepository):
    """Process-local article storage, lost on restart."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._articles: dict[int, Article] = {}
        self._comments: dict[int, list[Comment]] = {}
        self._article_seq = 0
        self._comment_seq = 0

    @staticmethod
    def _newest_first(articles: list[Article]) -> list[Article]:
        return sorted(articles, key=lambda a: (a.published_date, a.id), reverse=True)

    def list_all(self) -> Sequence[Article]:
        with self._lock:
            return self._newest_first(list(self._articles.values()))

    def list_by_date_range(self, start: datetime, end: datetime) -> Sequence[Article]:
        with self._lock:
            return self._newest_first(
                [a for a in self._articles.values() if start <= a.published_date <= end]
            )

    def get(self, article_id: int) -> Article | None:
        with self._lock:
            return self._articles.get(article_id)

    def add(self, article: Article) -> Article:
        with self._lock:
            self._article_seq += 1
            stored = replace(article, id=self._article_seq)
            self._articles[stored.id] = stored
            return stored

    def add_comment(self, comment: Comment) -> Comment:
        with self._lock:
            self._comment_seq += 1
            stored = replace(comment, id=self._comment_seq)
            self._comments.setdefault(stored.article_id, []).append(stored)
            return stored

    def list_comments(self, article_id: int) -> Sequence[Comment]:
        with self._lock:
            return list(self._comments.get(article_id, ()))
