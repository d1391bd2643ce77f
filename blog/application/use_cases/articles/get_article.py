# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from blog.domain.articles.entities import Article, Comment
from blog.domain.articles.repositories import ArticleRepository
from blog.shared.errors import ArticleNotFoundError


@dataclass(slots=True, frozen=True)
class ArticleDetails:
    article: Article
    comments: Sequence[Comment]


class GetArticleUseCase:
    def __init__(self, *, articles: ArticleRepository) -> None:
        self._articles = articles

    def execute(self, article_id: int) -> ArticleDetails:
        article = self._articles.get(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return ArticleDetails(article=article, comments=self._articles.list_comments(article_id))
