from __future__ import annotations

"""SHA-256 fingerprints for ensembles, run decks and optimizer results.

Inputs are plain ``to_dict`` payloads and parsed deck sections: mappings,
sequences, strings, numbers, booleans and None. Floats are written with
``repr`` so equal values always hash equally, and tuples hash like lists so a
deck loaded from YAML matches the same deck loaded from JSON.

Author: © 2026 Afshin Arjhangmehr
"""

from numbers import Integral, Real
from typing import Any
import hashlib
import json


def _plain(x: Any) -> Any:
    if isinstance(x, dict):
        return {str(k): _plain(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_plain(v) for v in x]
    if x is None or isinstance(x, (bool, str)):
        return x
    if isinstance(x, Integral):
        return int(x)
    if isinstance(x, Real):
        # "nan" / "inf" tokens keep the output valid JSON
        return repr(float(x))
    raise TypeError(f"cannot fingerprint value of type {type(x).__name__}")


def canonical_json(obj: Any) -> str:
    return json.dumps(_plain(obj), sort_keys=True, separators=(",", ":"))


def stable_sha256(obj: Any) -> str:
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
