"""
Exceptions raised by the request and response wrappers.

Every error is raised synchronously where it is detected and is never
retried internally. Catch ReqresError to handle all of them at once.
"""

from typing import Any


class ReqresError(Exception):
    """Base error for reqres."""


class RequestMethodNotSetError(ReqresError):
    """
    Raised when the host environment carries no REQUEST_METHOD.

    Raised by RequestContext.get_request_method() and every method
    predicate built on it (is_get, is_post, ...).
    """


class InvalidStatusCodeError(ReqresError):
    """
    Raised when a status code outside the registry is assigned.

    The rejected value is kept on the exception so callers can report it.
    """

    def __init__(self, message: str, status_code: Any = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidRedirectStatusCodeError(ReqresError):
    """
    Raised for a redirect status used on the wrong path.

    Two situations:
        - send_headers() while the status is 301, 302 or 307
          (redirects must go through redirect())
        - redirect() with a status other than 301, 302 or 307
    """

    def __init__(self, message: str, status_code: Any = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseAlreadySentError(ReqresError):
    """Raised by a second send(), send_headers() or redirect() on one response."""


class RequestBodyTooLargeError(ReqresError):
    """
    Raised when a declared request body exceeds HTTPConfig.max_body_size.

    The WSGI adapter answers it with 413 Request Entity Too Large.
    """

    def __init__(self, message: str, content_length: int = 0):
        super().__init__(message)
        self.content_length = content_length


class InvalidHeaderError(ReqresError):
    """
    Raised when a header name or value contains CR or LF.

    A line break inside a header would let the value start a new header
    line (response splitting), so it is refused before anything is staged.
    """

    def __init__(self, message: str, header_name: str = ""):
        super().__init__(message)
        self.header_name = header_name
