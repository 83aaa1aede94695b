"""Cross-frame checks that pandera schemas cannot express on a single frame."""

import pandas as pd

type IntegrityResult = dict[str, str | bool | list[str]]


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> IntegrityResult:
    """Report ``child_key`` values with no matching ``parent_key`` row.

    Unknown keys are listed in order of first appearance in ``child``.
    """
    known = set(parent[parent_key].dropna().astype(str))
    unknown = [key for key in child[child_key].dropna().astype(str).unique() if key not in known]

    match unknown:
        case []:
            return {"valid": True, "status": "ok", "unknown": [], "errors": []}
        case [*keys]:
            return {
                "valid": False,
                "status": "error",
                "unknown": keys,
                "errors": [f"{len(keys)} {child_key} value(s) not in {parent_key}: {', '.join(keys)}"],
            }
