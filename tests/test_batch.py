import pandas as pd
import pytest

from cropyield.batch import main, read_inputs, score_frame

CSV = """\ufeffCrop,area,rainfall,fertilizer,management,rainSeptember,rain_october,rain_november
tur,1,500,50,,,,
maize,1,500,50,poor,,,
gram,2,,30,,100,50,20
maize,1,500,,good,,,
wheat,1,1,1,,,,
"""


@pytest.fixture
def inputs_csv(tmp_path):
    path = tmp_path / "inputs.csv"
    path.write_text(CSV, encoding="utf-8")
    return path


def test_read_inputs_normalizes_headers(inputs_csv):
    df = read_inputs(inputs_csv)
    assert "crop" in df.columns
    assert "rain_september" in df.columns
    # empty cells stay empty text, never NaN or zero
    assert df.loc[3, "fertilizer"] == ""


def test_score_frame(inputs_csv):
    scored = score_frame(read_inputs(inputs_csv))

    assert list(scored["predicted_yield_quintals"][:3]) == [7.12, 7.88, 27.96]
    assert list(scored["label"][:3]) == ["Tur", "Maize, Poor management", "Gram"]
    assert scored.loc[0, "result"] == "7.12 quintals (approx.) (Tur)"
    assert pd.isna(scored.loc[3, "predicted_yield_quintals"])
    assert scored.loc[3, "error"] == "Enter fertilizers (kg) for Maize."
    assert scored.loc[4, "error"] == "No formula defined for this crop."
    assert scored.loc[4, "result"] == ""


def test_missing_crop_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("area,rainfall\n1,2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_inputs(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_inputs(tmp_path / "nope.csv")


def test_main_writes_predictions(inputs_csv, tmp_path, capsys):
    out = tmp_path / "out" / "predictions.csv"
    main(["--file", str(inputs_csv), "--out", str(out)])

    written = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert len(written) == 5
    assert written.loc[2, "result"] == "27.96 quintals (approx.) (Gram)"

    printed = capsys.readouterr().out
    assert "Rows scored:   3" in printed
    assert "Rows rejected: 2" in printed
