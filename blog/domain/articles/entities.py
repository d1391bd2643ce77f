# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Article:

    id: int
    author_name: str
    author_email: str
    title: str
    content: str
    published_date: datetime


@dataclass(slots=True, frozen=True)
class Comment:

    id: int
    article_id: int
    content: str
    published_date: datetime
