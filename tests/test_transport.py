import json
import logging
from dataclasses import replace

import pytest

from commentapi.comment import Comment
from commentapi.transport import Handler

JSON_TYPE = "application/json; charset=UTF-8"


class FakeService:
    def __init__(self, fail=False):
        self.fail = fail
        self.comments = {}
        self.calls = []

    def _check(self):
        if self.fail:
            raise RuntimeError("service failure")

    def post_comment(self, cmt):
        self.calls.append(("post", cmt))
        self._check()
        created = replace(cmt, id="generated-id")
        self.comments[created.id] = created
        return created

    def get_comment(self, comment_id):
        self.calls.append(("get", comment_id))
        self._check()
        return self.comments[comment_id]

    def update_comment(self, comment_id, cmt):
        self.calls.append(("update", comment_id, cmt))
        self._check()
        updated = replace(cmt, id=comment_id)
        self.comments[comment_id] = updated
        return updated

    def delete_comment(self, comment_id):
        self.calls.append(("delete", comment_id))
        self._check()
        self.comments.pop(comment_id, None)


def client_for(service):
    return Handler(service).app.test_client()


def test_hello_returns_greeting_with_json_header():
    response = client_for(FakeService()).get("/hello")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Hello World"
    assert response.headers["Content-Type"] == JSON_TYPE


def test_post_creates_comment():
    service = FakeService()
    response = client_for(service).post(
        "/api/v1/comment", data=json.dumps({"slug": "manual-test", "author": "Slava", "body": "Hello, comment"})
    )
    assert response.status_code == 200
    assert json.loads(response.get_data(as_text=True)) == {
        "ID": "generated-id",
        "Slug": "manual-test",
        "Body": "Hello, comment",
        "Author": "Slava",
    }
    assert service.calls == [("post", Comment(slug="manual-test", author="Slava", body="Hello, comment"))]


def test_post_with_bad_json_does_nothing():
    service = FakeService()
    response = client_for(service).post("/api/v1/comment", data="{not json")
    assert response.status_code == 200
    assert response.get_data() == b""
    assert service.calls == []


def test_post_with_non_string_field_is_rejected():
    service = FakeService()
    response = client_for(service).post("/api/v1/comment", data=json.dumps({"Body": 5}))
    assert response.get_data() == b""
    assert service.calls == []


def test_post_service_error_gives_empty_body():
    response = client_for(FakeService(fail=True)).post("/api/v1/comment", data="{}")
    assert response.status_code == 200
    assert response.get_data() == b""


def test_get_encodes_comment_with_trailing_newline():
    service = FakeService()
    service.comments["abc"] = Comment(id="abc", slug="s", body="b", author="a")
    response = client_for(service).get("/api/v1/comment/abc")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == '{"ID":"abc","Slug":"s","Body":"b","Author":"a"}\n'
    assert response.headers["Content-Type"] == JSON_TYPE


def test_get_failure_is_internal_error():
    response = client_for(FakeService(fail=True)).get("/api/v1/comment/abc")
    assert response.status_code == 500
    assert response.get_data() == b""


def test_update_uses_id_from_path():
    service = FakeService()
    response = client_for(service).put(
        "/api/v1/comment/xyz", data=json.dumps({"ID": "other", "Slug": "s", "Body": "b", "Author": "a"})
    )
    assert response.status_code == 200
    body = json.loads(response.get_data(as_text=True))
    assert body["ID"] == "xyz"
    assert service.comments["xyz"] == Comment(id="xyz", slug="s", body="b", author="a")


def test_update_with_bad_json_skips_service():
    service = FakeService()
    response = client_for(service).put("/api/v1/comment/xyz", data="[1, 2]")
    assert response.status_code == 200
    assert service.calls == []


def test_update_failure_is_internal_error():
    response = client_for(FakeService(fail=True)).put("/api/v1/comment/xyz", data="{}")
    assert response.status_code == 500


def test_delete_reports_success():
    service = FakeService()
    response = client_for(service).delete("/api/v1/comment/abc")
    assert response.status_code == 200
    assert json.loads(response.get_data(as_text=True)) == {"Message": "Successfull deleted"}
    assert service.calls == [("delete", "abc")]


def test_delete_failure_is_internal_error():
    response = client_for(FakeService(fail=True)).delete("/api/v1/comment/abc")
    assert response.status_code == 500
    assert response.get_data() == b""


@pytest.mark.parametrize(
    "method, path",
    [("get", "/api/v1/comment"), ("post", "/api/v1/comment/abc"), ("patch", "/api/v1/comment/abc")],
)
def test_wrong_method_is_rejected(method, path):
    response = getattr(client_for(FakeService()), method)(path)
    assert response.status_code == 405


def test_requests_are_logged(caplog):
    client = client_for(FakeService())
    with caplog.at_level(logging.INFO, logger="commentapi.transport"):
        client.get("/hello")
    messages = [record.getMessage() for record in caplog.records]
    assert any("handled request" in m and "/hello" in m and "GET" in m for m in messages)


def test_default_address():
    handler = Handler(FakeService())
    assert (handler.host, handler.port) == ("0.0.0.0", 8080)