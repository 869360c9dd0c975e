from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from mizan.config import DEFAULT_ENGINE_CONFIG, ColumnMap

CANONICAL_COLUMNS = ("account_name", "category", "debit", "credit", "balance")

RowsLike = Union[pd.DataFrame, Iterable[Mapping[str, Any]], None]

def _normalize_cols(df: pd.DataFrame) -> pd.DataFrame:
    if not hasattr(df, "columns"):
        raise TypeError("Expected DataFrame")
    out = df.copy()
    out.columns = [str(c).strip().lower().replace(" ", "_") for c in out.columns]
    return out

def _to_number(s: pd.Series) -> pd.Series:
    """Coerce to float; unparseable -> 0. Thousands separators are dropped."""
    # object في pandas 2 و str في pandas 3
    if not pd.api.types.is_numeric_dtype(s):
        s = s.astype(object).where(s.notna(), None).map(lambda v: v.replace(",", "").strip() if isinstance(v, str) else v)
    return pd.to_numeric(s, errors="coerce").replace([np.inf, -np.inf], np.nan).fillna(0.0).astype(float)

def _to_text(s: pd.Series) -> pd.Series:
    return s.map(lambda v: "" if v is None or v is pd.NA or (isinstance(v, float) and np.isnan(v)) else str(v))

def _first_nonzero(df: pd.DataFrame, names: Iterable[str]) -> pd.Series:
    out = pd.Series(0.0, index=df.index)
    for n in names:
        if n in df.columns:
            vals = _to_number(df[n])
            out = out.where(out != 0, vals)
    return out

def _pick_text(df: pd.DataFrame, aliases: Iterable[str]) -> pd.Series:
    # أول عمود نصي غير فارغ لكل صف
    out = pd.Series("", index=df.index, dtype=object)
    for n in aliases:
        if n in df.columns:
            vals = _to_text(df[n])
            out = out.where(out != "", vals)
    return out

def normalize_rows(rows: RowsLike, colmap: ColumnMap | None = None) -> pd.DataFrame:
    """
    Turn trial-balance rows (list of dicts or DataFrame, any supported naming
    convention) into a DataFrame with the canonical columns
    account_name, category, debit, credit, balance.

    balance = debit - credit when either side is non-zero, otherwise the first
    non-zero explicit balance field, otherwise 0. The input is not mutated.
    """
    colmap = colmap or DEFAULT_ENGINE_CONFIG.colmap
    if rows is None:
        df = pd.DataFrame()
    elif isinstance(rows, pd.DataFrame):
        df = rows
    else:
        df = pd.DataFrame([dict(r) for r in rows])
    # صف بلا مفاتيح يبقى صفاً (يظهر في عدد الصفوف غير المصنفة)
    if len(df.index) == 0:
        return pd.DataFrame({c: pd.Series(dtype=object if c in ("account_name", "category") else float)
                             for c in CANONICAL_COLUMNS})

    df = _normalize_cols(df)
    # أعمدة مكررة بعد التوحيد (Balance/balance): نحتفظ بالأولى
    df = df.loc[:, ~df.columns.duplicated()]

    out = pd.DataFrame(index=df.index)
    out["account_name"] = _pick_text(df, colmap.account_name)
    out["category"] = _pick_text(df, colmap.category)
    out["debit"] = _first_nonzero(df, colmap.debit)
    out["credit"] = _first_nonzero(df, colmap.credit)

    explicit = _first_nonzero(df, colmap.balance)
    two_sided = out["debit"] - out["credit"]
    has_sides = (out["debit"] != 0) | (out["credit"] != 0)
    out["balance"] = two_sided.where(has_sides, explicit)
    return out.reset_index(drop=True)

def load_excel(path: str, sheet: Union[int, str, None] = 0) -> pd.DataFrame:
    obj = pd.read_excel(path, sheet_name=sheet)
    if isinstance(obj, dict):
        obj = next(iter(obj.values()))
    return normalize_rows(obj)

def load_csv(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    return normalize_rows(df)

def load_json(path: str) -> pd.DataFrame:
    """
    يقبل مصفوفة صفوف، أو كائن ملف مراجعة يحتوي المفتاح trialBalance.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Trial balance file not found: {p}")
    data: Any = json.loads(p.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("trialBalance") or data.get("trial_balance") or []
    if not isinstance(data, list):
        raise TypeError("Expected a list of trial-balance rows")
    return normalize_rows(data)

def to_records(df: pd.DataFrame) -> list[Dict[str, Any]]:
    return df.to_dict(orient="records")
