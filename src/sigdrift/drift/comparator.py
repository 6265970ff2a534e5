"""Structural diff of one function signature pair."""

from __future__ import annotations

from sigdrift.drift.models import (
    ParameterAdded,
    ParameterRemoved,
    ParameterTypeChanged,
    ReturnTypeChanged,
    SignatureChange,
)
from sigdrift.symbols.models import FunctionSignature, ParameterSignature
from sigdrift.symbols.registry import normalize_type_string


def _params_equal(a: ParameterSignature, b: ParameterSignature) -> bool:
    return (
        a.optional == b.optional
        and normalize_type_string(a.type) == normalize_type_string(b.type)
    )


def compare_signatures(
    before: FunctionSignature, after: FunctionSignature
) -> list[SignatureChange]:
    """Diff two signatures that share a registry key.

    Parameters are matched by name. Changes are ordered: one entry per
    parameter of ``after`` (added or type changed) in declaration order,
    then removed parameters in ``before`` order, then the return type.

    Returns:
        The changes; empty when the signatures are structurally equal.
    """
    changes: list[SignatureChange] = []

    before_params = {p.name: p for p in before.parameters}
    after_params = {p.name: p for p in after.parameters}

    for name, after_param in after_params.items():
        before_param = before_params.get(name)
        if before_param is None:
            changes.append(ParameterAdded(parameter=after_param, breaking=not after_param.optional))
        elif not _params_equal(before_param, after_param):
            # Covers optionality-only changes as well
            changes.append(ParameterTypeChanged(before=before_param, after=after_param))

    for name, before_param in before_params.items():
        if name not in after_params:
            changes.append(ParameterRemoved(parameter=before_param))

    if normalize_type_string(before.return_type) != normalize_type_string(after.return_type):
        changes.append(ReturnTypeChanged(before=before.return_type, after=after.return_type))

    return changes
