"""HTTP interface for the comment service."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable

from flask import Flask, Response, request

from .comment import Comment

_log = logging.getLogger(__name__)

_CONTENT_TYPE = "application/json; charset=UTF-8"
_FIELDS = {"id": "id", "slug": "slug", "body": "body", "author": "author"}
_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

_WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


def _encode(payload: Any) -> str:
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return text + "\n"


def _comment_to_json(cmt: Comment) -> dict[str, str]:
    return {"ID": cmt.id, "Slug": cmt.slug, "Body": cmt.body, "Author": cmt.author}


def _decode_comment(raw: bytes) -> Comment | None:
    """Decode a comment from a request body; None when the body is unusable."""
    text = raw.decode("utf-8", errors="replace").lstrip()
    try:
        value, _ = json.JSONDecoder().raw_decode(text)
    except ValueError:
        return None
    if value is None:
        return Comment()
    if not isinstance(value, dict):
        return None
    values: dict[str, str] = {}
    for key, item in value.items():
        name = _FIELDS.get(key.lower())
        if name is None or item is None:
            continue
        if not isinstance(item, str):
            return None
        values[name] = item
    return Comment(**values)


def _logging_middleware(wsgi_app: _WSGIApp) -> _WSGIApp:
    """Wrap a WSGI application so that every request is logged before it is handled."""

    def middleware(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        _log.info(
            "handled request method=%s path=%s",
            environ.get("REQUEST_METHOD", ""),
            environ.get("PATH_INFO", ""),
        )
        return wsgi_app(environ, start_response)

    return middleware


class Handler:
    """Routes HTTP requests to a comment service."""

    def __init__(self, service: Any) -> None:
        self.service = service
        self.host = "0.0.0.0"
        self.port = 8080
        self.app = Flask(__name__)
        self.app.after_request(self._set_json_header)
        self.app.wsgi_app = _logging_middleware(self.app.wsgi_app)  # type: ignore[method-assign]
        self._map_routes()

    def _map_routes(self) -> None:
        add = self.app.add_url_rule
        add("/hello", "hello", self.hello, methods=_ALL_METHODS)
        add("/api/v1/comment", "post_comment", self.post_comment, methods=["POST"])
        add("/api/v1/comment/<comment_id>", "get_comment", self.get_comment, methods=["GET"])
        add("/api/v1/comment/<comment_id>", "update_comment", self.update_comment, methods=["PUT"])
        add("/api/v1/comment/<comment_id>", "delete_comment", self.delete_comment, methods=["DELETE"])

    @staticmethod
    def _set_json_header(response: Response) -> Response:
        response.headers["Content-Type"] = _CONTENT_TYPE
        return response

    def hello(self) -> Response:
        return Response("Hello World")

    def post_comment(self) -> Response:
        cmt = _decode_comment(request.get_data())
        if cmt is None:
            return Response()
        try:
            created = self.service.post_comment(cmt)
        except Exception as exc:
            _log.error("%s", exc)
            return Response()
        return Response(_encode(_comment_to_json(created)))

    def get_comment(self, comment_id: str) -> Response:
        if not comment_id:
            return Response(status=400)
        try:
            cmt = self.service.get_comment(comment_id)
        except Exception:
            return Response(status=500)
        return Response(_encode(_comment_to_json(cmt)))

    def update_comment(self, comment_id: str) -> Response:
        if not comment_id:
            return Response(status=400)
        cmt = _decode_comment(request.get_data())
        if cmt is None:
            return Response()
        try:
            updated = self.service.update_comment(comment_id, cmt)
        except Exception as exc:
            _log.error("%s", exc)
            return Response(status=500)
        return Response(_encode(_comment_to_json(updated)))

    def delete_comment(self, comment_id: str) -> Response:
        if not comment_id:
            return Response(status=400)
        try:
            self.service.delete_comment(comment_id)
        except Exception:
            return Response(status=500)
        return Response(_encode({"Message": "Successfull deleted"}))

    def serve(self) -> None:
        """Serve until interrupted."""
        try:
            self.app.run(host=self.host, port=self.port)
        except KeyboardInterrupt:
            pass
        except OSError as exc:
            _log.error("%s", exc)
        _log.info("Shutdown")