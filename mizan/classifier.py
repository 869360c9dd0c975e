# mizan/classifier.py
from __future__ import annotations
from typing import Any, Mapping, Optional, Union

import pandas as pd

from mizan.config import DEFAULT_COL_MAP
from mizan.taxonomy import STATEMENT_RULES, Rule, Rules


def _lower(v: Any) -> str:
    if v is None or (isinstance(v, float) and v != v):
        return ""
    return str(v).strip().lower()


def _row_text(row: Union[Mapping[str, Any], pd.Series]) -> tuple[str, str]:
    """(name, category) lower-cased; accepts raw or normalised rows."""
    if isinstance(row, pd.Series):
        row = row.to_dict()
    keys = {str(k).strip().lower().replace(" ", "_"): v for k, v in row.items()}
    name = next((_lower(keys[a]) for a in DEFAULT_COL_MAP.account_name if _lower(keys.get(a))), "")
    category = next((_lower(keys[a]) for a in DEFAULT_COL_MAP.category if _lower(keys.get(a))), "")
    return name, category


def matches(rule: Rule, name: str, category: str) -> bool:
    if rule.field == "name":
        text = name
    elif rule.field == "category":
        text = category
    else:
        text = f"{name} | {category}"

    if not text:
        return False
    if rule.none_of and any(k in text for k in rule.none_of):
        return False
    if rule.any_of and not any(k in text for k in rule.any_of):
        return False
    return all(any(k in text for k in group) for group in rule.all_of)


def classify_text(name: str, category: str, rules: Rules = STATEMENT_RULES) -> Optional[str]:
    for rule in rules:
        if matches(rule, name, category):
            return rule.bucket
    return None


def classify(row: Union[Mapping[str, Any], pd.Series], rules: Rules = STATEMENT_RULES) -> Optional[str]:
    """
    يرجع أول فئة تطابق الصف حسب ترتيب القواعد، أو None إذا لم يطابق شيء.
    """
    name, category = _row_text(row)
    return classify_text(name, category, rules)


def classify_frame(df: pd.DataFrame, rules: Rules = STATEMENT_RULES) -> pd.Series:
    """Bucket per row of a normalised frame (None where unclassified)."""
    if df.empty:
        return pd.Series([], index=df.index, dtype=object)
    names = df["account_name"].map(_lower)
    cats = df["category"].map(_lower)
    return pd.Series(
        [classify_text(n, c, rules) for n, c in zip(names, cats)],
        index=df.index,
        dtype=object,
    )


def bucket_sums(df: pd.DataFrame, rules: Rules = STATEMENT_RULES) -> dict:
    """
    Sum of |balance| per bucket. Unclassified rows are left out here;
    callers that need them use the None key of classify_frame.
    """
    if df.empty:
        return {}
    buckets = classify_frame(df, rules)
    amounts = df["balance"].abs()
    mask = buckets.notna()
    sums = amounts[mask].groupby(buckets[mask]).sum()
    return {k: float(v) for k, v in sums.items()}
