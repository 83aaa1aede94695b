"""Common data transformation utilities."""

import numpy as np
import pandas as pd

type ColumnMapping = dict[str, str]


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to snake_case and apply optional mapping.

    camelCase names coming from the application's JSON exports
    (``equipmentId``, ``currentWorkload``) are split on case boundaries.
    """
    df = df.copy()
    df.columns = (
        df.columns.str.strip()
        .str.replace(r"(?<=[a-z0-9])(?=[A-Z])", "_", regex=True)
        .str.lower()
        .str.replace(" ", "_")
        .str.replace("-", "_")
    )

    if mapping:
        df = df.rename(columns=mapping)

    return df


def split_list_column(value: object, sep: str = ",") -> list[str]:
    """Turn a delimited string (or list) cell into a clean list of strings."""
    match value:
        case None:
            return []
        case list() | tuple() | set() | frozenset():
            return [str(v).strip() for v in value if str(v).strip()]
        case str() as text:
            return [part.strip() for part in text.split(sep) if part.strip()]
        case float() if pd.isna(value):
            return []
        case other:
            return [str(other).strip()]


def coerce_bool(value: object) -> bool:
    """Map the assorted truthy spellings found in exports onto a bool."""
    match value:
        case bool() | np.bool_():
            return bool(value)
        case int() | float() | np.integer() | np.floating():
            return bool(value) and not pd.isna(value)
        case str() as text:
            match text.strip().lower():
                case "true" | "yes" | "y" | "1" | "available":
                    return True
                case _:
                    return False
        case _:
            return False
