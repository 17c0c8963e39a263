"""
sixpack_sdk.tier3_platform.session
───────────────────────────────────
Public facade for the Sixpack split-testing server. A Session owns one
client identity and one ClientConfig, and offers participate/convert in
three call styles:

    session = Session(base_url="http://sixpack.internal:5000")

    outcome = session.participate("checkout-cta", ["red", "blue"])
    outcome = await session.participate_async("checkout-cta", ["red", "blue"])
    future = session.participate_in_background(
        "checkout-cta", ["red", "blue"], callback=on_done,
    )

Identity and config are read-only after construction and every call
builds its own parameters and Outcome, so one Session can be shared
across threads and tasks.
"""
from __future__ import annotations

import threading
import uuid
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from sixpack_sdk.tier0_core.config import ClientConfig, build_config, get_config
from sixpack_sdk.tier0_core.errors import ConfigurationError, ValidationError
from sixpack_sdk.tier0_core.http import Endpoint
from sixpack_sdk.tier0_core.ids import normalize_client_id
from sixpack_sdk.tier0_core.logging import get_logger
from sixpack_sdk.tier1_runtime.outcome import Outcome, Success
from sixpack_sdk.tier1_runtime.params import (
    ExperimentRequest,
    build_parameters,
    request_uri,
)
from sixpack_sdk.tier1_runtime.validate import validate_conversion, validate_participation
from sixpack_sdk.tier2_reliability.dispatch import Dispatcher

log = get_logger(__name__)

# callback(error, outcome): exactly one of the two is None
Callback = Callable[[Exception | None, Outcome | None], None]


# ── Background worker pool ────────────────────────────────────────────────────

_executor: ThreadPoolExecutor | None = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Shared worker pool for the callback call style. Created on first use."""
    global _executor
    if _executor is not None:
        return _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(thread_name_prefix="sixpack")
    return _executor


def _reset_executor() -> None:
    """For tests: shut down and forget the shared worker pool."""
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=True)
        _executor = None


# ── Session ───────────────────────────────────────────────────────────────────

class Session:
    """
    Sixpack client bound to one experiment subject.

    Args:
        client_id:  Unique id of the subject (your user). Generated if omitted.
        base_url:   Sixpack server URL. Default http://localhost:5000.
        timeout:    Per-request deadline in seconds. Default 0.5.
        ip_address: IP address of the subject, forwarded to the server.
        user_agent: User agent of the subject, forwarded to the server.
        config:     Base ClientConfig; explicit arguments above override it.
        transport:  httpx transport for the dispatcher (tests).
    """

    def __init__(
        self,
        client_id: str | uuid.UUID | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        *,
        config: ClientConfig | None = None,
        transport: Any | None = None,
    ) -> None:
        try:
            self._client_id = normalize_client_id(client_id)
        except ValueError as exc:
            raise ConfigurationError(user_message=str(exc)) from exc
        self._config = build_config(
            config or get_config(),
            base_url=base_url,
            timeout=timeout,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._dispatcher = Dispatcher(transport=transport)

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __repr__(self) -> str:
        return f"Session(client_id={self._client_id!r}, base_url={self._config.base_url!r})"

    # ── participate ───────────────────────────────────────────────────────────

    def participate(
        self,
        experiment_name: str,
        alternatives: Sequence[str],
        force: str | None = None,
    ) -> Outcome:
        """
        Enroll the client in ``experiment_name`` and return the assigned
        alternative. Blocks until the Outcome is known or the timeout elapses.

        Raises InvalidName / InsufficientAlternatives before any network call.
        """
        request = validate_participation(
            ExperimentRequest.for_participation(experiment_name, alternatives, force)
        )
        if request.force:
            return self._forced(request)
        return self._dispatcher.send(self._uri(request, Endpoint.PARTICIPATE), self._config.timeout)

    async def participate_async(
        self,
        experiment_name: str,
        alternatives: Sequence[str],
        force: str | None = None,
    ) -> Outcome:
        """asyncio variant of participate()."""
        request = validate_participation(
            ExperimentRequest.for_participation(experiment_name, alternatives, force)
        )
        if request.force:
            return self._forced(request)
        return await self._dispatcher.send_async(
            self._uri(request, Endpoint.PARTICIPATE), self._config.timeout
        )

    def participate_in_background(
        self,
        experiment_name: str,
        alternatives: Sequence[str],
        force: str | None = None,
        *,
        callback: Callback,
    ) -> Future[Outcome]:
        """
        Callback variant of participate(). The calling thread does not wait
        for the network; ``callback(error, outcome)`` runs exactly once.
        """
        try:
            request = validate_participation(
                ExperimentRequest.for_participation(experiment_name, alternatives, force)
            )
        except ValidationError as exc:
            return self._rejected(exc, callback)
        if request.force:
            return self._delivered(self._forced(request), callback)
        return self._submit(self._uri(request, Endpoint.PARTICIPATE), callback)

    # ── convert ───────────────────────────────────────────────────────────────

    def convert(self, experiment_name: str, kpi: str | None = None) -> Outcome:
        """
        Record a conversion for ``experiment_name``, optionally tagged with
        ``kpi``. Raises InvalidName / InvalidKpi before any network call.
        """
        request = validate_conversion(ExperimentRequest.for_conversion(experiment_name, kpi))
        return self._dispatcher.send(self._uri(request, Endpoint.CONVERT), self._config.timeout)

    async def convert_async(self, experiment_name: str, kpi: str | None = None) -> Outcome:
        """asyncio variant of convert()."""
        request = validate_conversion(ExperimentRequest.for_conversion(experiment_name, kpi))
        return await self._dispatcher.send_async(
            self._uri(request, Endpoint.CONVERT), self._config.timeout
        )

    def convert_in_background(
        self,
        experiment_name: str,
        kpi: str | None = None,
        *,
        callback: Callback,
    ) -> Future[Outcome]:
        """Callback variant of convert(). ``callback(error, outcome)`` runs exactly once."""
        try:
            request = validate_conversion(ExperimentRequest.for_conversion(experiment_name, kpi))
        except ValidationError as exc:
            return self._rejected(exc, callback)
        return self._submit(self._uri(request, Endpoint.CONVERT), callback)

    # ── internals ─────────────────────────────────────────────────────────────

    def _uri(self, request: ExperimentRequest, operation: str) -> str:
        params = build_parameters(self._config, self._client_id, request, operation)
        return request_uri(self._config.base_url, operation, params)

    def _forced(self, request: ExperimentRequest) -> Success:
        log.info(
            "sixpack.participate.forced",
            experiment=request.experiment_name, alternative=request.force,
        )
        return Success(
            value={
                "status": "ok",
                "alternative": {"name": request.force},
                "experiment": {"version": 0, "name": request.experiment_name},
                "client_id": self._client_id,
            },
            forced=True,
        )

    def _submit(self, uri: str, callback: Callback) -> Future[Outcome]:
        def run() -> Outcome:
            outcome = self._dispatcher.send(uri, self._config.timeout)
            _notify(callback, None, outcome)
            return outcome

        return get_executor().submit(run)

    @staticmethod
    def _delivered(outcome: Outcome, callback: Callback) -> Future[Outcome]:
        future: Future[Outcome] = Future()
        try:
            _notify(callback, None, outcome)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(outcome)
        return future

    @staticmethod
    def _rejected(exc: ValidationError, callback: Callback) -> Future[Outcome]:
        log.info("sixpack.request.rejected", code=exc.code, fields=exc.fields)
        future: Future[Outcome] = Future()
        try:
            _notify(callback, exc, None)
        except Exception as callback_exc:
            future.set_exception(callback_exc)
        else:
            future.set_exception(exc)
        return future


def _notify(callback: Callback, error: Exception | None, outcome: Outcome | None) -> None:
    # A failing callback is logged and surfaces on the returned Future.
    try:
        callback(error, outcome)
    except Exception as exc:
        log.warning("sixpack.callback.failed", error=str(exc) or type(exc).__name__)
        raise


__all__ = ["Session", "Callback", "get_executor"]
