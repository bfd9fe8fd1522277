# cropyield/batch.py
"""
Score a CSV of raw crop inputs with the per-crop regression formulas.

Input (CSV): one row per prediction with a `crop` column plus whichever of
area, rainfall, fertilizer, management, rain_september, rain_october,
rain_november the crop needs. Cells are read as text, so an empty cell is
reported as missing instead of being treated as zero.

Outputs: the input rows with predicted_yield_quintals, label, result and error
columns appended.

Run:
  python -m cropyield.batch --file data/inputs.csv --out data/predictions.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from cropyield.config import setup_logging
from cropyield.predictor import FIELD_ALIASES, predict

logger = logging.getLogger(__name__)

KNOWN_COLUMNS = {
    "crop",
    "area",
    "rainfall",
    "fertilizer",
    "management",
    "rain_september",
    "rain_october",
    "rain_november",
}
OUTPUT_COLUMNS = ["predicted_yield_quintals", "label", "result", "error"]


def safe_rename_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean headers (hidden spaces, BOM) and map known fields to their
    canonical lower-case names.
    """
    df.columns = (
        df.columns.astype(str)
        .str.replace("\u00A0", " ", regex=False)  # non-breaking space
        .str.replace("\ufeff", "", regex=False)  # BOM
        .str.strip()
    )

    rename_map = {}
    for col in df.columns:
        name = FIELD_ALIASES.get(col, col)
        if name.lower() in KNOWN_COLUMNS:
            rename_map[col] = name.lower()

    return df.rename(columns=rename_map)


def validate_required_columns(df: pd.DataFrame) -> None:
    if "crop" not in df.columns:
        raise ValueError(f"Missing required column 'crop'. Found: {list(df.columns)}")


def read_inputs(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Input CSV not found: {path}")

    # keep every cell as text; blanks stay "" instead of NaN
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df = safe_rename_columns(df)
    validate_required_columns(df)
    return df


def score_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Run one independent prediction per row and append the output columns."""
    rows = []
    for record in df.to_dict(orient="records"):
        crop = record.pop("crop")
        outcome = predict(crop, record)
        if outcome.ok:
            rows.append({
                "predicted_yield_quintals": outcome.result.value,
                "label": outcome.result.label.strip(" ()"),
                "result": outcome.result.text,
                "error": "",
            })
        else:
            rows.append({
                "predicted_yield_quintals": None,
                "label": "",
                "result": "",
                "error": outcome.error.message,
            })

    scored = pd.DataFrame(rows, columns=OUTPUT_COLUMNS, index=df.index)
    return pd.concat([df.drop(columns=OUTPUT_COLUMNS, errors="ignore"), scored], axis=1)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Score a CSV of crop inputs")
    parser.add_argument("--file", required=True, help="CSV with a 'crop' column and the crop's input fields")
    parser.add_argument("--out", default=None, help="Output CSV (default: <file>_predictions.csv)")
    args = parser.parse_args(argv)

    setup_logging()

    in_path = Path(args.file)
    out_path = Path(args.out) if args.out else in_path.with_name(f"{in_path.stem}_predictions.csv")

    df = read_inputs(in_path)
    logger.info("Loaded %d rows from %s", len(df), in_path)

    scored = score_frame(df)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    scored.to_csv(out_path, index=False)

    n_failed = int((scored["error"] != "").sum())
    print("\nScoring complete")
    print(f"Rows scored:   {len(scored) - n_failed}")
    print(f"Rows rejected: {n_failed}")
    print(f"Saved:         {out_path}")


if __name__ == "__main__":
    main()
