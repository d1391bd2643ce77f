from __future__ import annotations

from datetime import timedelta

import pytest
from conftest import START, FrozenClock

from blog.application.use_cases.articles.add_comment import AddCommentUseCase
from blog.application.use_cases.articles.get_article import GetArticleUseCase
from blog.application.use_cases.articles.list_articles import ListArticlesUseCase
from blog.application.use_cases.articles.publish_article import PublishArticleUseCase
from blog.infrastructure.repositories.articles.memory_article_repository import (
    InMemoryArticleRepository,
)
from blog.shared.errors import ArticleNotFoundError, ValidationError


@pytest.fixture()
def articles() -> InMemoryArticleRepository:
    return InMemoryArticleRepository()


def _publish(articles: InMemoryArticleRepository, clock: FrozenClock, title: str):
    return PublishArticleUseCase(articles=articles, clock=clock).execute(
        author_name="Alice",
        author_email="alice@x.com",
        title=title,
        content=f"{title} body",
    )


def test_publish_assigns_id_and_timestamp(
    articles: InMemoryArticleRepository, clock: FrozenClock
) -> None:
    article = _publish(articles, clock, "First")

    assert article.id == 1
    assert article.published_date == START
    assert articles.get(1) == article


def test_list_articles_newest_first(
    articles: InMemoryArticleRepository, clock: FrozenClock
) -> None:
    for title in ("one", "two", "three"):
        _publish(articles, clock, title)
        clock.advance(hours=1)

    listed = ListArticlesUseCase(articles=articles).execute()

    assert [a.title for a in listed] == ["three", "two", "one"]


def test_list_articles_by_inclusive_range(
    articles: InMemoryArticleRepository, clock: FrozenClock
) -> None:
    for title in ("one", "two", "three"):
        _publish(articles, clock, title)
        clock.advance(hours=1)

    listed = ListArticlesUseCase(articles=articles).execute(
        START, START + timedelta(hours=1)
    )

    assert [a.title for a in listed] == ["two", "one"]


def test_list_articles_rejects_half_open_range(articles: InMemoryArticleRepository) -> None:
    with pytest.raises(ValidationError) as exc_info:
        ListArticlesUseCase(articles=articles).execute(START, None)

    assert exc_info.value.code == "date_range_incomplete"


def test_list_articles_rejects_inverted_range(articles: InMemoryArticleRepository) -> None:
    with pytest.raises(ValidationError) as exc_info:
        ListArticlesUseCase(articles=articles).execute(START, START - timedelta(days=1))

    assert exc_info.value.code == "date_range_inverted"
    assert exc_info.value.status == 422


def test_get_article_includes_comments(
    articles: InMemoryArticleRepository, clock: FrozenClock
) -> None:
    article = _publish(articles, clock, "First")
    add_comment = AddCommentUseCase(articles=articles, clock=clock)
    add_comment.execute(article.id, "nice")
    clock.advance(minutes=1)
    add_comment.execute(article.id, "thanks")

    details = GetArticleUseCase(articles=articles).execute(article.id)

    assert details.article == article
    assert [c.content for c in details.comments] == ["nice", "thanks"]
    assert [c.id for c in details.comments] == [1, 2]


def test_get_missing_article_raises(articles: InMemoryArticleRepository) -> None:
    with pytest.raises(ArticleNotFoundError) as exc_info:
        GetArticleUseCase(articles=articles).execute(7)

    assert exc_info.value.to_dict() == {
        "error": "article_not_found",
        "context": {"article_id": 7},
    }


def test_comment_on_missing_article_raises(
    articles: InMemoryArticleRepository, clock: FrozenClock
) -> None:
    with pytest.raises(ArticleNotFoundError):
        AddCommentUseCase(articles=articles, clock=clock).execute(3, "hello?")

    assert articles.list_comments(3) == []
