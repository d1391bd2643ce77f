# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog.application.services.session_issuer import Clock, utc_now
from blog.domain.articles.entities import Article
from blog.domain.articles.repositories import ArticleRepository


class PublishArticleUseCase:
    def __init__(self, *, articles: ArticleRepository, clock: Clock = utc_now) -> None:
        self._articles = articles
        self._clock = clock

    def execute(self, *, author_name: str, author_email: str, title: str, content: str) -> Article:
        article = Article(
            id=0,
            author_name=author_name,
            author_email=author_email,
            title=title,
            content=content,
            published_date=self._clock(),
        )
        return self._articles.add(article)
