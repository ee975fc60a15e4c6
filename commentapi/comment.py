"""Comment model and the service that sits between transport and storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comment:
    """A single comment."""

    id: str = ""
    slug: str = ""
    body: str = ""
    author: str = ""


class FetchingCommentError(Exception):
    """Raised when a comment cannot be fetched by its id."""

    def __init__(self, message: str = "failed to fetch comment by id") -> None:
        super().__init__(message)


class CommentStore(Protocol):
    """Storage backend the service relies on."""

    def get_comment(self, comment_id: str) -> Comment: ...

    def post_comment(self, cmt: Comment) -> Comment: ...

    def update_comment(self, comment_id: str, cmt: Comment) -> Comment: ...

    def delete_comment(self, comment_id: str) -> None: ...


class CommentService:
    """Business operations on comments, delegating persistence to a store."""

    def __init__(self, store: CommentStore) -> None:
        self.store = store

    def get_comment(self, comment_id: str) -> Comment:
        _log.info("retrieving a comment")
        try:
            return self.store.get_comment(comment_id)
        except Exception as exc:
            _log.error("%s", exc)
            raise FetchingCommentError() from exc

    def post_comment(self, cmt: Comment) -> Comment:
        _log.info("Creating new comment")
        return self.store.post_comment(cmt)

    def update_comment(self, comment_id: str, cmt: Comment) -> Comment:
        try:
            return self.store.update_comment(comment_id, cmt)
        except Exception:
            _log.error("error updating comment")
            raise

    def delete_comment(self, comment_id: str) -> None:
        _log.info("Delete Comment")
        self.store.delete_comment(comment_id)