"""
sixpack_sdk.tier2_reliability.dispatch
───────────────────────────────────────
Timeout-bounded GET dispatch to the Sixpack server and classification of
what came back into exactly one Outcome:

    2xx + JSON body   → Success(decoded value)
    500               → ServerFailure(raw body)
    deadline elapsed  → TimedOut
    anything else     → GenericError(cause)

One attempt per call, no retries. Each call opens its own client and
closes it on every exit path.

Backed by: httpx (sync Client and AsyncClient).
"""
from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx

from sixpack_sdk.tier0_core.http import HTTP
from sixpack_sdk.tier0_core.logging import get_logger
from sixpack_sdk.tier1_runtime.outcome import (
    TIMED_OUT_MESSAGE,
    GenericError,
    Outcome,
    ServerFailure,
    Success,
    TimedOut,
)

log = get_logger(__name__)


def classify_response(response: httpx.Response) -> Outcome:
    """Map a completed HTTP response to an Outcome."""
    if response.status_code == HTTP.INTERNAL_SERVER_ERROR:
        return ServerFailure(response=response.text)
    if not response.is_success:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            return GenericError(cause=exc)
    try:
        return Success(value=response.json())
    except ValueError as exc:
        # json.JSONDecodeError and bad charset decoding
        return GenericError(cause=exc)


class Dispatcher:
    """
    Sends one GET per call and returns its Outcome.

    Usage::

        dispatcher = Dispatcher()
        outcome = dispatcher.send("http://localhost:5000/convert?...", timeout=0.5)
        outcome = await dispatcher.send_async(uri, timeout=0.5)

    ``transport`` is passed straight to httpx; tests use
    ``httpx.MockTransport``, which serves both the sync and async clients.
    """

    def __init__(self, transport: Any | None = None) -> None:
        self._transport = transport

    def send(self, uri: str, timeout: float) -> Outcome:
        """
        Blocking send. The calling thread waits for the Outcome. ``timeout``
        bounds each httpx phase and, checked between body chunks, the
        exchange as a whole.
        """
        log.debug("sixpack.request.sent", uri=_path(uri), timeout=timeout)
        deadline = time.monotonic() + timeout
        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                with client.stream("GET", uri) as streamed:
                    body = bytearray()
                    for chunk in streamed.iter_raw():
                        _check_deadline(deadline, streamed.request)
                        body.extend(chunk)
                    _check_deadline(deadline, streamed.request)
                    # Raw bytes plus the original headers; httpx decodes on read.
                    response = httpx.Response(
                        streamed.status_code,
                        headers=streamed.headers,
                        content=bytes(body),
                        request=streamed.request,
                    )
        except httpx.TimeoutException:
            return _timed_out(uri, timeout)
        except Exception as exc:
            return _failed(uri, exc)
        return _completed(uri, response)

    async def send_async(self, uri: str, timeout: float) -> Outcome:
        """
        Non-blocking send. ``timeout`` bounds each httpx phase and the
        exchange as a whole.
        """
        log.debug("sixpack.request.sent", uri=_path(uri), timeout=timeout)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await asyncio.wait_for(client.get(uri), timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            return _timed_out(uri, timeout)
        except Exception as exc:
            return _failed(uri, exc)
        return _completed(uri, response)


def _check_deadline(deadline: float, request: httpx.Request) -> None:
    if time.monotonic() > deadline:
        raise httpx.ReadTimeout(TIMED_OUT_MESSAGE, request=request)


# ── Outcome logging ───────────────────────────────────────────────────────────

def _path(uri: str) -> str:
    # Query strings carry subject ip/user agent; log the endpoint only.
    return uri.split("?", 1)[0]


def _completed(uri: str, response: httpx.Response) -> Outcome:
    outcome = classify_response(response)
    if isinstance(outcome, ServerFailure):
        log.warning(
            "sixpack.request.server_failure",
            uri=_path(uri), status_code=response.status_code,
        )
    elif isinstance(outcome, GenericError):
        log.warning(
            "sixpack.request.error",
            uri=_path(uri), status_code=response.status_code, error=outcome.message,
        )
    else:
        log.info("sixpack.request.completed", uri=_path(uri), status_code=response.status_code)
    return outcome


def _timed_out(uri: str, timeout: float) -> Outcome:
    log.warning("sixpack.request.timed_out", uri=_path(uri), timeout=timeout)
    return TimedOut()


def _failed(uri: str, exc: Exception) -> Outcome:
    log.warning("sixpack.request.error", uri=_path(uri), error=str(exc) or type(exc).__name__)
    return GenericError(cause=exc)


__all__ = ["Dispatcher", "classify_response"]
