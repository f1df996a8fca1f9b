"""
Tests for the REST client, with the HTTP layer stubbed out.
"""

import pytest
import json

import requests

from careercloud.client import ApiClient, ApiError, CrudService, services
from careercloud.resources import RESOURCES


def make_response(status: int, body=None, reason: str = "") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp._content = b"" if body is None else json.dumps(body).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    return resp


@pytest.fixture
def http(monkeypatch):
    """Captures outgoing requests and replays queued responses."""
    calls = []
    queue = []

    def fake_request(self, method, url, json=None, timeout=None, **kwargs):
        calls.append({"method": method, "url": url, "json": json, "timeout": timeout, "headers": dict(self.headers)})
        outcome = queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(requests.Session, "request", fake_request)
    return calls, queue


class TestApiClient:
    def test_get_decodes_json(self, http):
        calls, queue = http
        queue.append(make_response(200, [{"code": "CA", "name": "Canada"}]))

        body = ApiClient("http://localhost:5000/").get("/api/careercloud/SystemCountryCode/v1/countrycode")

        assert body == [{"code": "CA", "name": "Canada"}]
        assert calls[0]["url"] == "http://localhost:5000/api/careercloud/SystemCountryCode/v1/countrycode"
        assert calls[0]["timeout"] == 15

    def test_bearer_token(self, http):
        calls, queue = http
        queue.append(make_response(200, []))
        queue.append(make_response(200, []))

        client = ApiClient("http://api", token="abc123")
        client.get("/x")
        client.set_token(None)
        client.get("/x")

        assert calls[0]["headers"]["Authorization"] == "Bearer abc123"
        assert "Authorization" not in calls[1]["headers"]

    def test_no_content(self, http):
        _, queue = http
        queue.append(make_response(204))

        assert ApiClient("http://api").delete("/x/1") is None

    def test_error_status_carries_server_message(self, http):
        _, queue = http
        body = {"message": "1 validation error(s)", "errors": [{"code": 601, "message": "bad phone"}]}
        queue.append(make_response(400, body, reason="BAD REQUEST"))

        with pytest.raises(ApiError) as exc:
            ApiClient("http://api").post("/x", {"contactPhone": "4165551234"})

        assert exc.value.status == 400
        assert exc.value.message == "1 validation error(s)"
        assert exc.value.response["errors"][0]["code"] == 601

    def test_error_without_json_body(self, http):
        _, queue = http
        resp = make_response(502, reason="Bad Gateway")
        resp._content = b"<html>upstream down</html>"
        queue.append(resp)

        with pytest.raises(ApiError) as exc:
            ApiClient("http://api").get("/x")

        assert exc.value.status == 502
        assert exc.value.message == "Bad Gateway"
        assert exc.value.response is None

    def test_connection_failure_is_status_zero(self, http):
        _, queue = http
        queue.append(requests.exceptions.ConnectionError("refused"))

        with pytest.raises(ApiError) as exc:
            ApiClient("http://api").get("/x")

        assert exc.value.status == 0

    def test_timeout(self, http):
        _, queue = http
        queue.append(requests.exceptions.Timeout())

        with pytest.raises(ApiError, match="timed out"):
            ApiClient("http://api", timeout=2).get("/x")


class TestCrudService:
    def test_verbs_and_paths(self, http):
        calls, queue = http
        for _ in range(5):
            queue.append(make_response(200, {}))
        service = CrudService(ApiClient("http://api"), "applicantskill/v1/skill")

        service.get_all()
        service.get_by_id("42")
        service.create({"skill": "Python"})
        service.update("42", {"skill": "Go"})
        service.delete("42")

        assert [(c["method"], c["url"]) for c in calls] == [
            ("GET", "http://api/api/careercloud/applicantskill/v1/skill"),
            ("GET", "http://api/api/careercloud/applicantskill/v1/skill/42"),
            ("POST", "http://api/api/careercloud/applicantskill/v1/skill"),
            ("PUT", "http://api/api/careercloud/applicantskill/v1/skill/42"),
            ("DELETE", "http://api/api/careercloud/applicantskill/v1/skill/42"),
        ]
        assert calls[2]["json"] == {"skill": "Python"}

    def test_services_cover_every_resource(self):
        registry = services(ApiClient("http://api"))

        assert set(registry) == {r.name for r in RESOURCES}
        assert registry["applicant-education"].path == "/api/careercloud/applicanteducation/v1/education"
