# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from blog.application.use_cases.articles.add_comment import AddCommentUseCase
from blog.application.use_cases.articles.get_article import GetArticleUseCase
from blog.application.use_cases.articles.list_articles import ListArticlesUseCase
from blog.application.use_cases.articles.publish_article import PublishArticleUseCase
from blog.infrastructure.audit import AuditAction, audit_log
from blog.interfaces.http.dto.articles import (
    AddCommentRequestDTO,
    ArticleDetailsDTO,
    ArticleDTO,
    ArticleQueryDTO,
    CommentDTO,
    CreateArticleRequestDTO,
)
from blog.interfaces.http.session_auth import SessionAuthenticator
from blog.shared.errors.validation import raise_validation_error
from blog.shared.logging import logger
from blog.shared.middleware.csrf import csrf_protect


class ArticlesController:
    def __init__(
        self,
        *,
        list_articles: ListArticlesUseCase,
        get_article: GetArticleUseCase,
        publish_article: PublishArticleUseCase,
        add_comment: AddCommentUseCase,
        authenticator: SessionAuthenticator,
    ) -> None:
        self._list_articles = list_articles
        self._get_article = get_article
        self._publish_article = publish_article
        self._add_comment = add_comment
        self._authenticator = authenticator

    def index(self) -> Response:
        try:
            query = ArticleQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        articles = self._list_articles.execute(query.start, query.end)
        return jsonify(
            [ArticleDTO.model_validate(a).model_dump(mode="json") for a in articles]
        )

    def show(self, article_id: int) -> Response:
        details = self._get_article.execute(article_id)
        payload = ArticleDetailsDTO(
            **ArticleDTO.model_validate(details.article).model_dump(),
            comments=[CommentDTO.model_validate(c) for c in details.comments],
        )
        return jsonify(payload.model_dump(mode="json"))

    @csrf_protect
    def create(self) -> tuple[Response, int]:
        try:
            dto = CreateArticleRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._authenticator.current_user()
        article = self._publish_article.execute(
            author_name=dto.author_name or user.name,
            author_email=str(dto.author_email or user.email),
            title=dto.title,
            content=dto.content,
        )
        audit_log(
            AuditAction.ARTICLE_PUBLISHED,
            user_id=user.id,
            details={"article_id": article.id},
        )
        logger.info(f"articles.create: ok article_id={article.id}")
        return jsonify(ArticleDTO.model_validate(article).model_dump(mode="json")), 201

    @csrf_protect
    def comment(self, article_id: int) -> tuple[Response, int]:
        try:
            dto = AddCommentRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._authenticator.current_user()
        comment = self._add_comment.execute(article_id, dto.content)
        audit_log(
            AuditAction.COMMENT_ADDED,
            user_id=user.id,
            details={"article_id": article_id, "comment_id": comment.id},
        )
        return jsonify(CommentDTO.model_validate(comment).model_dump(mode="json")), 201

    def as_blueprint(self) -> Blueprint:
        required = self._authenticator.required
        bp = Blueprint("articles", __name__, url_prefix="/api/articles")
        bp.add_url_rule("", endpoint="index", view_func=self.index, methods=["GET"])
        bp.add_url_rule(
            "", endpoint="create", view_func=required(self.create), methods=["POST"]
        )
        bp.add_url_rule("/<int:article_id>", endpoint="show", view_func=self.show, methods=["GET"])
        bp.add_url_rule(
            "/<int:article_id>/comments",
            endpoint="comment",
            view_func=required(self.comment),
            methods=["POST"],
        )
        return bp
