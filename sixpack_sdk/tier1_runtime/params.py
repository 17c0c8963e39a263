"""
sixpack_sdk.tier1_runtime.params
─────────────────────────────────
Request construction: the per-call ExperimentRequest, the canonical
parameter set sent to the Sixpack server, and deterministic query-string
encoding.

Encoding is form-style (``quote_plus``): spaces become ``+``. A key bound
to a list is emitted once per element, so

    {"client_id": "abc", "alternatives": ["red", "blue"]}

encodes to ``client_id=abc&alternatives=red&alternatives=blue``.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from urllib.parse import quote_plus

from sixpack_sdk.tier0_core.config import ClientConfig
from sixpack_sdk.tier0_core.http import Endpoint

ParameterSet = dict[str, str | list[str]]


@dataclass(frozen=True)
class ExperimentRequest:
    """One participate or convert call. Built per call, never persisted."""
    experiment_name: str
    alternatives: tuple[str, ...] = ()
    force: str | None = None
    kpi: str | None = None

    @classmethod
    def for_participation(
        cls,
        experiment_name: str,
        alternatives: Sequence[str] | str,
        force: str | None = None,
    ) -> ExperimentRequest:
        # A bare string is one alternative, not a sequence of characters.
        if isinstance(alternatives, str):
            alternatives = (alternatives,)
        return cls(experiment_name, tuple(alternatives), force=force)

    @classmethod
    def for_conversion(cls, experiment_name: str, kpi: str | None = None) -> ExperimentRequest:
        return cls(experiment_name, kpi=kpi)


def build_parameters(
    config: ClientConfig,
    client_id: str,
    request: ExperimentRequest,
    operation: str,
) -> ParameterSet:
    """
    Assemble the parameter set for ``operation``. Insertion order is the
    order the query string is emitted in.
    """
    params: ParameterSet = {
        "client_id": str(client_id),
        "experiment": request.experiment_name,
    }
    if config.ip_address is not None:
        params["ip_address"] = config.ip_address
    if config.user_agent is not None:
        params["user_agent"] = config.user_agent

    if operation == Endpoint.PARTICIPATE:
        params["alternatives"] = list(request.alternatives)
    elif operation == Endpoint.CONVERT:
        if request.kpi is not None:
            params["kpi"] = request.kpi
    else:
        raise ValueError(f"Unknown operation: {operation!r}")
    return params


def build_query_string(params: Mapping[str, str | Sequence[str]]) -> str:
    """Percent-encode ``params`` into a query string, without the leading ``?``."""
    pairs: list[str] = []
    for key, value in params.items():
        if isinstance(value, str):
            pairs.append(f"{quote_plus(key)}={quote_plus(value)}")
        else:
            pairs.extend(f"{quote_plus(key)}={quote_plus(item)}" for item in value)
    return "&".join(pairs)


def request_uri(base_url: str, operation: str, params: Mapping[str, str | Sequence[str]]) -> str:
    """Full request target; no ``?`` is appended when there are no parameters."""
    endpoint = f"{base_url}/{operation}"
    query = build_query_string(params)
    if query:
        return f"{endpoint}?{query}"
    return endpoint


__all__ = [
    "ParameterSet", "ExperimentRequest",
    "build_parameters", "build_query_string", "request_uri",
]
