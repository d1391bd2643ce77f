# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog.application.services.session_issuer import Clock, utc_now
from blog.domain.articles.entities import Comment
from blog.domain.articles.repositories import ArticleRepository
from blog.shared.errors import ArticleNotFoundError


class AddCommentUseCase:
    def __init__(self, *, articles: ArticleRepository, clock: Clock = utc_now) -> None:
        self._articles = articles
        self._clock = clock

    def execute(self, article_id: int, content: str) -> Comment:
        if self._articles.get(article_id) is None:
            raise ArticleNotFoundError(article_id)
        comment = Comment(
            id=0,
            article_id=article_id,
            content=content,
            published_date=self._clock(),
        )
        return self._articles.add_comment(comment)
