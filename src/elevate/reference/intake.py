from __future__ import annotations

"""Reference data intake.

Supported inputs
----------------
1) Depth-damage table (HAZUS layout): one row per damage function, with
   ``description``, ``occupancy`` and ``source`` columns and depth columns
   named ``ft04m`` (-4 ft) ... ``ft00`` ... ``ft24`` (+24 ft) holding percent
   damage. Exactly one row must match the requested filters.
2) SLR parameter table: columns ``a, b, c, tstar, cstar``; one fitted
   trajectory per row.

Strict parsing: malformed numbers, missing columns, and zero or ambiguous
matches raise. Reference-data problems raise ``ReferenceDataError``; they are
never replaced by defaults.
"""

from io import StringIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import csv
import logging
import re

from ..errors import ReferenceDataError
from ..physics.depth_damage import DepthDamageFunction
from ..physics.slr import ParametricSLR

logger = logging.getLogger(__name__)

_DEPTH_COL = re.compile(r"^ft(\d+)(m?)$", re.IGNORECASE)
FILTER_KEYS = ("description", "occupancy", "source")
SLR_COLUMNS = ("a", "b", "c", "tstar", "cstar")


def _read_rows(text: str) -> Tuple[List[str], List[List[str]]]:
    rows = [r for r in csv.reader(StringIO(text)) if r and any(c.strip() for c in r)]
    if not rows:
        raise ReferenceDataError("reference table is empty")
    header = [h.strip() for h in rows[0]]
    return header, rows[1:]


def depth_columns(header: List[str]) -> List[Tuple[int, float]]:
    """(column index, depth ft) for every depth column, sorted by depth."""
    cols: List[Tuple[int, float]] = []
    for i, h in enumerate(header):
        m = _DEPTH_COL.match(h)
        if m:
            depth = float(m.group(1))
            cols.append((i, -depth if m.group(2) else depth))
    return sorted(cols, key=lambda t: t[1])


def parse_depth_damage_csv(
    text: str,
    *,
    description: Optional[str] = None,
    occupancy: Optional[str] = None,
    source: Optional[str] = None,
) -> DepthDamageFunction:
    header, rows = _read_rows(text)
    lower = [h.lower() for h in header]
    wanted: Dict[str, str] = {
        k: v for k, v in (("description", description), ("occupancy", occupancy), ("source", source)) if v is not None
    }
    for k in wanted:
        if k not in lower:
            raise ReferenceDataError(f"depth-damage table has no '{k}' column")
    dcols = depth_columns(header)
    if len(dcols) < 2:
        raise ReferenceDataError("depth-damage table needs at least two depth columns (ftNN / ftNNm)")

    matches = []
    for line_no, r in enumerate(rows, start=2):
        ok = True
        for k, v in wanted.items():
            i = lower.index(k)
            cell = r[i].strip() if i < len(r) else ""
            if cell != v.strip():
                ok = False
                break
        if ok:
            matches.append((line_no, r))

    label = ", ".join(f"{k}={v!r}" for k, v in wanted.items()) or "<no filter>"
    if not matches:
        raise ReferenceDataError(f"no depth-damage row matches {label}")
    if len(matches) > 1:
        lines = [m[0] for m in matches]
        raise ReferenceDataError(f"{len(matches)} depth-damage rows match {label} (lines {lines}); refine the filter")

    line_no, r = matches[0]
    depths: List[float] = []
    percents: List[float] = []
    for i, depth in dcols:
        cell = r[i].strip() if i < len(r) else ""
        if cell == "" or cell.upper() == "NA":
            continue
        try:
            percents.append(float(cell))
        except ValueError as e:
            raise ReferenceDataError(f"line {line_no}, column {header[i]}: could not parse {cell!r}") from e
        depths.append(depth)
    if len(depths) < 2:
        raise ReferenceDataError(f"line {line_no}: fewer than two usable depth values")
    return DepthDamageFunction.from_percent(depths, percents, label=label)


def parse_slr_csv(text: str, *, valid_years: Optional[Tuple[float, float]] = None) -> List[ParametricSLR]:
    header, rows = _read_rows(text)
    lower = [h.lower() for h in header]
    missing = [c for c in SLR_COLUMNS if c not in lower]
    if missing:
        raise ReferenceDataError(f"SLR table missing columns: {missing}")
    idx = {c: lower.index(c) for c in SLR_COLUMNS}

    out: List[ParametricSLR] = []
    for line_no, r in enumerate(rows, start=2):
        vals: Dict[str, float] = {}
        for c, i in idx.items():
            try:
                vals[c] = float(r[i])
            except (IndexError, ValueError) as e:
                raise ReferenceDataError(f"line {line_no}, column {c}: could not parse float") from e
        out.append(ParametricSLR(valid_years=valid_years, **vals))
    if not out:
        raise ReferenceDataError("SLR table contained no data rows")
    return out


def load_depth_damage(path: Path, **filters: Optional[str]) -> DepthDamageFunction:
    p = Path(path)
    logger.debug("loading depth-damage table %s with %s", p, filters)
    return parse_depth_damage_csv(p.read_text(encoding="utf-8"), **filters)


def load_slr_trajectories(path: Path, *, valid_years: Optional[Tuple[float, float]] = None) -> List[ParametricSLR]:
    p = Path(path)
    trajectories = parse_slr_csv(p.read_text(encoding="utf-8"), valid_years=valid_years)
    logger.debug("loaded %d SLR trajectories from %s", len(trajectories), p)
    return trajectories
