"""
Unit tests for the WSGI adapter.
"""

import logging

import pytest

from reqres import HTTPConfig
from reqres.errors import RequestBodyTooLargeError
from reqres.wsgi import WSGIApplication, request_from_environ


class TestRequestFromEnviron:
    """Tests for request_from_environ()."""

    def test_basic_get(self, wsgi_environ):
        request = request_from_environ(wsgi_environ(path="/users", query="page=2&sort=name"))

        assert request.is_get()
        assert request.get_request_uri() == "/users"
        assert request.get_raw_request_uri() == "/users?page=2&sort=name"
        assert request.get_param("page") == "2"
        assert request.get_ip() == "127.0.0.1"

    def test_request_uri_kept_when_set(self, wsgi_environ):
        environ = wsgi_environ(path="/ignored", REQUEST_URI="/original?x=1")
        request = request_from_environ(environ)

        assert request.get_raw_request_uri() == "/original?x=1"

    def test_path_is_escaped(self, wsgi_environ):
        environ = wsgi_environ(path="/a b/c?d", SCRIPT_NAME="/app")
        request = request_from_environ(environ)

        assert request.get_raw_request_uri() == "/app/a%20b/c%3Fd"
        assert request.get_request_uri() == "/app/a%20b/c%3Fd"

    def test_query_last_value_wins(self, wsgi_environ):
        request = request_from_environ(wsgi_environ(query="tag=a&tag=b&empty="))

        assert request.get_param_get("tag") == "b"
        assert request.get_param_get("empty") == ""

    def test_https_from_scheme(self, wsgi_environ):
        environ = wsgi_environ()
        environ["wsgi.url_scheme"] = "https"

        assert request_from_environ(environ).is_https_request() is True
        assert request_from_environ(wsgi_environ()).is_https_request() is False

    def test_non_string_keys_dropped(self, wsgi_environ):
        request = request_from_environ(wsgi_environ())

        assert "wsgi.input" not in request.environ
        assert "wsgi.version" not in request.environ

    def test_form_body_parsed(self, wsgi_environ):
        environ = wsgi_environ(
            method="POST",
            query="a=get",
            body=b"a=post&name=Joe",
            content_type="application/x-www-form-urlencoded; charset=utf-8",
        )
        request = request_from_environ(environ)

        assert request.get_param_post("name") == "Joe"
        assert request.get_param("a") == "post"
        assert request.get_param_get("a") == "get"
        assert request.get_body() == "a=post&name=Joe"

    def test_json_body_left_raw(self, wsgi_environ):
        environ = wsgi_environ(method="POST", body=b'{"a": 1}', content_type="application/json")
        request = request_from_environ(environ)

        assert request.get_post_params() == {}
        assert request.get_body() == '{"a": 1}'

    def test_body_limited_to_content_length(self, wsgi_environ):
        environ = wsgi_environ(method="POST", body=b"abcdef")
        environ["CONTENT_LENGTH"] = "3"

        assert request_from_environ(environ).get_body() == "abc"

    def test_invalid_content_length(self, wsgi_environ):
        environ = wsgi_environ(method="POST", body=b"abc")
        environ["CONTENT_LENGTH"] = "lots"

        assert request_from_environ(environ).get_body() is None

    def test_body_too_large(self, wsgi_environ):
        config = HTTPConfig(max_body_size=4)
        request = request_from_environ(wsgi_environ(method="POST", body=b"too long"), config)

        with pytest.raises(RequestBodyTooLargeError) as exc_info:
            request.get_body()

        assert exc_info.value.content_length == 8

    def test_header_source(self, wsgi_environ):
        environ = wsgi_environ(
            method="POST",
            body=b"{}",
            content_type="application/json",
            HTTP_X_REQUESTED_WITH="XMLHttpRequest",
        )
        request = request_from_environ(environ)

        assert request.get_header("content-type") == "application/json"
        assert request.get_header("Content-Length") == "2"
        assert request.is_xml_http_request() is True


class TestWSGIApplication:
    """Tests for WSGIApplication."""

    def test_handler_response(self, wsgi_environ, start_response):
        def handler(request, response):
            response.set_header("Content-Type", "text/plain")
            response.set_body(f"Hello {request.get_param('name', 'world')}")

        app = WSGIApplication(handler)
        body = app(wsgi_environ(query="name=Joe"), start_response)

        assert start_response.status == "200 OK"
        assert start_response.headers["Content-Type"] == "text/plain"
        assert start_response.headers["Content-Length"] == "9"
        assert b"".join(body) == b"Hello Joe"

    def test_handler_sends_itself(self, wsgi_environ, start_response):
        def handler(request, response):
            response.set_status(201).set_body("made").send()

        body = WSGIApplication(handler)(wsgi_environ(method="POST"), start_response)

        assert start_response.status == "201 Created"
        assert start_response.calls == 1
        assert b"".join(body) == b"made"

    def test_redirect(self, wsgi_environ, start_response):
        def handler(request, response):
            response.redirect("/login", 301)

        body = WSGIApplication(handler)(wsgi_environ(), start_response)

        assert start_response.status == "301 Moved Permanently"
        assert start_response.headers["Location"] == "/login"
        assert start_response.headers["Content-Length"] == "0"
        assert b"".join(body) == b""

    def test_handler_error_returns_500(self, wsgi_environ, start_response, caplog):
        def handler(request, response):
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR, logger="reqres.wsgi"):
            body = WSGIApplication(handler)(wsgi_environ(), start_response)

        assert start_response.status == "500 Internal Server Error"
        assert b"".join(body) == b"Internal Server Error"
        assert "boom" in caplog.text

    def test_redirect_status_through_send_returns_500(self, wsgi_environ, start_response):
        def handler(request, response):
            response.set_status(302)

        WSGIApplication(handler)(wsgi_environ(), start_response)

        assert start_response.status == "500 Internal Server Error"

    def test_split_redirect_returns_500(self, wsgi_environ, start_response):
        def handler(request, response):
            response.redirect(request.get_param("next"))

        WSGIApplication(handler)(wsgi_environ(query="next=/x%0D%0ASet-Cookie:+a%3D1"), start_response)

        assert start_response.status == "500 Internal Server Error"
        assert "Set-Cookie" not in start_response.headers

    def test_oversized_body_returns_413(self, wsgi_environ, start_response):
        def handler(request, response):
            response.set_body(request.get_body() or "")

        app = WSGIApplication(handler, HTTPConfig(max_body_size=2))
        app(wsgi_environ(method="POST", body=b"too long"), start_response)

        assert start_response.status == "413 Request Entity Too Large"

    def test_oversized_form_returns_413(self, wsgi_environ, start_response):
        app = WSGIApplication(lambda request, response: None, HTTPConfig(max_body_size=2))
        environ = wsgi_environ(
            method="POST",
            body=b"a=1&b=2",
            content_type="application/x-www-form-urlencoded",
        )
        app(environ, start_response)

        assert start_response.status == "413 Request Entity Too Large"
