from typing import List
import pandas as pd
from mizan.config import DEFAULT_ENGINE_CONFIG
from mizan.io import _normalize_cols

def validate_columns(df: pd.DataFrame) -> List[str]:
    """
    Caller-side check on a raw trial-balance frame: it needs a text column
    (account name or category) and at least one amount column.
    The engines themselves never raise on missing data.
    """
    colmap = DEFAULT_ENGINE_CONFIG.colmap
    cols = set(_normalize_cols(df).columns)
    groups = {
        "account_name|category": colmap.account_name + colmap.category,
        "debit|credit|balance": colmap.debit + colmap.credit + colmap.balance,
    }
    found, missing = [], []
    for key, alist in groups.items():
        if any(a in cols for a in alist):
            found.append(key)
        else:
            missing.append(key)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    return found
