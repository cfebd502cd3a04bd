"""Small helpers for JSON-safe serialization of engine outputs."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd


def _safe_key(key: Any) -> Any:
    if isinstance(key, Enum):
        return key.value
    if isinstance(key, (int, float, str, bool, type(None))):
        return key
    return str(key)


def make_json_safe(obj: Any) -> Any:
    """Recursively convert values into JSON-serializable forms."""
    if isinstance(obj, dict):
        return {_safe_key(key): make_json_safe(value) for key, value in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [make_json_safe(item) for item in obj]

    if hasattr(obj, "to_dict") and not isinstance(obj, (pd.DataFrame, pd.Series)):
        return make_json_safe(obj.to_dict())

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return make_json_safe(dataclasses.asdict(obj))

    if isinstance(obj, pd.DataFrame):
        return make_json_safe(obj.reset_index().to_dict("records"))

    if isinstance(obj, pd.Series):
        return {str(k): make_json_safe(v) for k, v in obj.to_dict().items()}

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, np.ndarray):
        return [make_json_safe(item) for item in obj.tolist()]

    if isinstance(obj, np.integer):
        return int(obj)

    if isinstance(obj, np.floating):
        obj = float(obj)

    if isinstance(obj, np.bool_):
        return bool(obj)

    if isinstance(obj, float) and obj != obj:
        return None

    if isinstance(obj, (int, float, str, bool, type(None))):
        return obj

    return str(obj)
