"""Mock Anthropic Client — stands in for AsyncAnthropic at the messages.create boundary.

Invariants:
    - MockAnthropicClient sequences outcomes: one per messages.create call
    - An outcome that is an Exception instance is raised instead of returned
    - Every call's kwargs are recorded in `calls`

Design Decisions:
    - Flat mock classes (no inheritance): simple, explicit, easy to debug
    - Error builders construct real SDK exception types over httpx responses
"""

import httpx
from anthropic import (
    APIConnectionError, APIStatusError, APITimeoutError, BadRequestError,
    InternalServerError, RateLimitError,
)


_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


# -- Mock Anthropic SDK objects ------------------------------------------------


class _Block:
    """Mock content block."""

    def __init__(self, type="text", text=""):
        self.type = type
        self.text = text


class _Usage:
    def __init__(self, input_tokens=100, output_tokens=50):
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens


class _Message:
    """Mock Message returned by messages.create()."""

    def __init__(self, content, stop_reason="end_turn"):
        self.content = content
        self.stop_reason = stop_reason
        self.usage = _Usage()


class _Messages:
    def __init__(self, owner):
        self._owner = owner

    async def create(self, **kwargs):
        self._owner.calls.append(kwargs)
        outcome = self._owner.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class MockAnthropicClient:
    """Replaces AsyncAnthropic; `outcomes` are consumed in order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[dict] = []
        self.messages = _Messages(self)


# -- Builders ------------------------------------------------------------------


def text_response(text: str) -> _Message:
    return _Message([_Block(text=text)])


def rate_limit_error(retry_after: str | None = None) -> RateLimitError:
    headers = {"retry-after": retry_after} if retry_after is not None else {}
    response = httpx.Response(429, request=_REQUEST, headers=headers)
    return RateLimitError("rate limited", response=response, body=None)


def server_error(status: int = 500) -> APIStatusError:
    response = httpx.Response(status, request=_REQUEST)
    if status == 500:
        return InternalServerError("server error", response=response, body=None)
    return APIStatusError("overloaded", response=response, body=None)


def bad_request_error() -> BadRequestError:
    response = httpx.Response(400, request=_REQUEST)
    return BadRequestError("bad request", response=response, body=None)


def connection_error() -> APIConnectionError:
    return APIConnectionError(request=_REQUEST)


def timeout_error() -> APITimeoutError:
    return APITimeoutError(request=_REQUEST)
