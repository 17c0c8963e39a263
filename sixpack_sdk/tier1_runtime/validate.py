"""
sixpack_sdk.tier1_runtime.validate
───────────────────────────────────
Name validation for experiments, alternatives and KPIs. Raises typed
ValidationError subclasses so callers can tell which field was rejected.
Everything here runs before a request is built; a rejected call never
touches the network.
"""
from __future__ import annotations

import re
from typing import Any

from sixpack_sdk.tier0_core.errors import (
    InsufficientAlternatives,
    InvalidKpi,
    InvalidName,
)
from sixpack_sdk.tier1_runtime.params import ExperimentRequest

VALID_NAME = re.compile(r"[a-z0-9][a-z0-9\-_ ]*")

MIN_ALTERNATIVES = 2


def validate_name(name: Any) -> bool:
    """
    Return True if ``name`` is usable as an experiment, alternative or KPI
    name: a lowercase letter or digit followed by lowercase letters,
    digits, hyphens, underscores or spaces.
    """
    if not isinstance(name, str):
        return False
    return VALID_NAME.fullmatch(name) is not None


def validate_participation(request: ExperimentRequest) -> ExperimentRequest:
    """
    Check a participate request. Raises InvalidName for the experiment
    name or any alternative, InsufficientAlternatives for fewer than two.
    """
    if not validate_name(request.experiment_name):
        raise InvalidName("experiment_name", request.experiment_name)
    if len(request.alternatives) < MIN_ALTERNATIVES:
        raise InsufficientAlternatives(len(request.alternatives))
    for alternative in request.alternatives:
        if not validate_name(alternative):
            raise InvalidName("alternatives", alternative)
    return request


def validate_conversion(request: ExperimentRequest) -> ExperimentRequest:
    """Check a convert request. The KPI is only checked when present."""
    if not validate_name(request.experiment_name):
        raise InvalidName("experiment_name", request.experiment_name)
    if request.kpi is not None and not validate_name(request.kpi):
        raise InvalidKpi(request.kpi)
    return request


__all__ = [
    "VALID_NAME", "MIN_ALTERNATIVES",
    "validate_name", "validate_participation", "validate_conversion",
]
