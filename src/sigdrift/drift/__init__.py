"""Signature comparison and drift aggregation."""

from sigdrift.drift.analyzer import compare_snapshots
from sigdrift.drift.comparator import compare_signatures
from sigdrift.drift.models import (
    ChangeKind,
    DriftReport,
    FunctionDrift,
    ParameterAdded,
    ParameterRemoved,
    ParameterTypeChanged,
    ReturnTypeChanged,
    SemverBump,
    SignatureChange,
)

__all__ = [
    "compare_snapshots",
    "compare_signatures",
    "ChangeKind",
    "DriftReport",
    "FunctionDrift",
    "ParameterAdded",
    "ParameterRemoved",
    "ParameterTypeChanged",
    "ReturnTypeChanged",
    "SemverBump",
    "SignatureChange",
]
