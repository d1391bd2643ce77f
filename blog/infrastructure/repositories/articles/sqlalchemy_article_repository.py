# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from blog.domain.articles.entities import Article as DomainArticle
from blog.domain.articles.entities import Comment as DomainComment
from blog.domain.articles.repositories import ArticleRepository
from blog.infrastructure.db.models import Article, Comment
from blog.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain_article(row: Article) -> DomainArticle:
    return DomainArticle(
        id=row.id,
        author_name=row.author_name,
        author_email=row.author_email,
        title=row.title,
        content=row.content,
        published_date=row.published_date,
    )


def _to_domain_comment(row: Comment) -> DomainComment:
    return DomainComment(
        id=row.id,
        article_id=row.article_id,
        content=row.content,
        published_date=row.published_date,
    )


class SqlAlchemyArticleRepository(ArticleRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_all(self) -> Sequence[DomainArticle]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(Article).order_by(Article.published_date.desc(), Article.id.desc())
            ).all()
            return [_to_domain_article(row) for row in rows]

    def list_by_date_range(self, start: datetime, end: datetime) -> Sequence[DomainArticle]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(Article)
                .where(Article.published_date >= start, Article.published_date <= end)
                .order_by(Article.published_date.desc(), Article.id.desc())
            ).all()
            return [_to_domain_article(row) for row in rows]

    def get(self, article_id: int) -> DomainArticle | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Article, article_id)
            return _to_domain_article(row) if row else None

    def add(self, article: DomainArticle) -> DomainArticle:
        with unit_of_work_scope(self._session_factory) as session:
            row = Article(
                author_name=article.author_name,
                author_email=article.author_email,
                title=article.title,
                content=article.content,
                published_date=article.published_date,
            )
            session.add(row)
            session.flush()
            return _to_domain_article(row)

    def add_comment(self, comment: DomainComment) -> DomainComment:
        with unit_of_work_scope(self._session_factory) as session:
            row = Comment(
                article_id=comment.article_id,
                content=comment.content,
                published_date=comment.published_date,
            )
            session.add(row)
            session.flush()
            return _to_domain_comment(row)

    def list_comments(self, article_id: int) -> Sequence[DomainComment]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(Comment)
                .where(Comment.article_id == article_id)
                .order_by(Comment.published_date.asc(), Comment.id.asc())
            ).all()
            return [_to_domain_comment(row) for row in rows]
