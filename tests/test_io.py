"""Tests for row normalisation, balance resolution and file loaders."""

import json

import pandas as pd
import pytest

from mizan.io import CANONICAL_COLUMNS, load_csv, load_excel, load_json, normalize_rows, to_records
from mizan.validate import validate_columns


def test_two_sided_rows_give_signed_balance():
    df = normalize_rows([
        {"accountName": "Cash", "debit": 1000, "credit": 0},
        {"accountName": "Sales", "debit": 0, "credit": 400},
    ])
    assert df["balance"].tolist() == [1000.0, -400.0]


def test_sides_win_over_explicit_balance():
    df = normalize_rows([{"accountName": "Cash", "debit": 100, "credit": 0, "balance": 999}])
    assert df.loc[0, "balance"] == 100


def test_explicit_balance_used_when_sides_are_empty():
    df = normalize_rows([
        {"Account Name": "الموردون", "Balance": -500},
        {"accountName": "العملاء", "calculatedBalance": 250},
        {"accountName": "حساب فارغ"},
    ])
    assert df["balance"].tolist() == [-500.0, 250.0, 0.0]
    assert df["debit"].tolist() == [0.0, 0.0, 0.0]


def test_arabic_headers_and_thousands_separators():
    df = normalize_rows([{"اسم الحساب": "النقدية", "التصنيف": "أصول متداولة", "مدين": "1,200", "دائن": ""}])

    assert df.loc[0, "account_name"] == "النقدية"
    assert df.loc[0, "category"] == "أصول متداولة"
    assert df.loc[0, "debit"] == 1200
    assert df.loc[0, "credit"] == 0
    assert df.loc[0, "balance"] == 1200


def test_missing_text_columns_become_empty_strings():
    df = normalize_rows([{"debit": 10}])
    assert df.loc[0, "account_name"] == ""
    assert df.loc[0, "category"] == ""


def test_empty_input_gives_canonical_frame():
    for rows in ([], None, pd.DataFrame()):
        df = normalize_rows(rows)
        assert df.empty
        assert list(df.columns) == list(CANONICAL_COLUMNS)


def test_dataframe_input_is_not_mutated():
    raw = pd.DataFrame({"Account Name": ["Cash"], "Debit": ["1,000"]})
    before = raw.copy()

    normalize_rows(raw)

    pd.testing.assert_frame_equal(raw, before)


def test_load_json_accepts_audit_file(tmp_path):
    path = tmp_path / "audit.json"
    path.write_text(json.dumps({
        "companyName": "شركة تجريبية",
        "trialBalance": [{"accountName": "النقدية", "debit": 500, "credit": 0}],
    }, ensure_ascii=False), encoding="utf-8")

    df = load_json(path)

    assert len(df) == 1
    assert df.loc[0, "balance"] == 500


def test_load_json_accepts_plain_list(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps([{"name": "Cash", "dr": 10}, {"name": "Sales", "cr": 10}]), encoding="utf-8")

    df = load_json(path)

    assert df["balance"].tolist() == [10.0, -10.0]


def test_load_json_rejects_non_list(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"trialBalance": "nope"}), encoding="utf-8")

    with pytest.raises(TypeError):
        load_json(path)


def test_load_json_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(tmp_path / "missing.json")


def test_load_csv(tmp_path):
    path = tmp_path / "tb.csv"
    path.write_text(
        "Account Name,Category,Debit,Credit\n"
        "Cash,Current Assets,100,0\n"
        "Sales,Revenue,0,100\n",
        encoding="utf-8",
    )

    df = load_csv(path)

    assert df["account_name"].tolist() == ["Cash", "Sales"]
    assert df["balance"].tolist() == [100.0, -100.0]


def test_to_records_round_trips_canonical_columns():
    records = to_records(normalize_rows([{"accountName": "Cash", "debit": 5}]))
    assert records == [{"account_name": "Cash", "category": "", "debit": 5.0, "credit": 0.0, "balance": 5.0}]


def test_validate_columns_accepts_known_headers():
    df = pd.DataFrame({"Account Name": [], "Debit": [], "Credit": []})
    assert validate_columns(df) == ["account_name|category", "debit|credit|balance"]


def test_validate_columns_reports_missing_groups():
    with pytest.raises(ValueError, match="debit"):
        validate_columns(pd.DataFrame({"Category": ["Revenue"]}))


def test_string_dtype_amounts_keep_thousands_separators():
    raw = pd.DataFrame({
        "Account Name": ["المبيعات", "النقدية"],
        "Debit": pd.array([None, "2,500"], dtype="string"),
        "Credit": pd.array(["1,500", None], dtype="string"),
    })
    df = normalize_rows(raw)

    assert df["balance"].tolist() == [-1500.0, 2500.0]


def test_keyless_row_is_kept():
    df = normalize_rows([{}])

    assert len(df) == 1
    assert df.loc[0, "balance"] == 0
    assert df.loc[0, "account_name"] == ""


def test_load_excel(tmp_path):
    path = tmp_path / "tb.xlsx"
    pd.DataFrame({
        "اسم الحساب": ["النقدية", "المبيعات"],
        "التصنيف": ["أصول متداولة", "إيرادات"],
        "مدين": [1000, 0],
        "دائن": [0, 1000],
    }).to_excel(path, index=False)

    df = load_excel(path)

    assert df["account_name"].tolist() == ["النقدية", "المبيعات"]
    assert df["balance"].tolist() == [1000.0, -1000.0]
