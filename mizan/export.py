from typing import Optional

from mizan.cashflow import build_cash_flow
from mizan.compute_core import aggregate
from mizan.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from mizan.io import RowsLike, normalize_rows, to_records
from mizan.rules_engine import company_score, generate_recommendations
from mizan.schema import EngineOutput, Totals
from mizan.taxes import compute_zakat

def build_report(
    rows: RowsLike,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    prior: Optional[Totals] = None,
    include_rows: bool = False,
) -> EngineOutput:
    df = normalize_rows(rows, config.colmap)
    totals = aggregate(df, config)
    return EngineOutput(
        totals=totals,
        zakat=compute_zakat(df, config),
        cash_flow=build_cash_flow(totals, df, prior=prior, config=config),
        score=company_score(totals),
        recommendations=generate_recommendations(totals),
        rows=to_records(df) if include_rows else None,
    )

def to_json(rows: RowsLike, include_rows: bool = False, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> str:
    out = build_report(rows, config=config, include_rows=include_rows)
    return out.model_dump_json(indent=2, by_alias=True)
