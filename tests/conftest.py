import textwrap

import httpx

from app.errors import PostNotFoundError
from app.schemas.blog import PostDetail
from app.services.providers.base import ContentProvider


class FakeProvider(ContentProvider):
    """
    Minimal in-memory content provider stand-in for router and builder tests.
    """

    name = "fake"

    def __init__(self, posts=None, details=None, list_error=None):
        self.posts = posts or []
        self.details = details or {}
        self.list_error = list_error
        self.calls = []
        self.closed = False

    def list_posts(self):
        self.calls.append("list_posts")
        if self.list_error:
            raise self.list_error
        return list(self.posts)

    def get_post(self, slug: str) -> PostDetail:
        self.calls.append(f"get_post({slug})")
        detail = self.details.get(slug)
        if isinstance(detail, Exception):
            raise detail
        if detail is None:
            raise PostNotFoundError(slug)
        return detail

    def close(self):
        self.closed = True


class RecordingTransport:
    """
    httpx.MockTransport wrapper that records requests and replays one
    canned response per call (the last one repeats).
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            status, body = self.responses.pop(0)
        else:
            status, body = self.responses[0]
        return httpx.Response(status, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def write_post(directory, slug: str, text: str, extension: str = ".md"):
    path = directory / f"{slug}{extension}"
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path
