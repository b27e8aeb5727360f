import numpy as np

from scripts import run_prediction as cli

from conftest import make_ohlcv


def test_cli_csv_run_writes_outputs(tmp_path, capsys):
    t = np.arange(150)
    csv_path = tmp_path / "wave.csv"
    make_ohlcv(100.0 + 4.0 * np.sin(t / 5.0)).reset_index().to_csv(csv_path, index=False)
    out_dir = tmp_path / "out"

    rc = cli.main(
        ["--symbol", "WAVE.NS", "--csv", str(csv_path), "--n_estimators", "10", "--output_dir", str(out_dir)]
    )
    assert rc == 0
    printed = capsys.readouterr().out
    assert "Final Recommendation:" in printed
    assert "Day 5" in printed
    for name in ("full_WAVE_NS.csv", "test_WAVE_NS.csv", "forecast_WAVE_NS.csv"):
        assert (out_dir / name).exists()


def test_cli_fetch_error_exit_code(tmp_path, capsys):
    rc = cli.main(["--symbol", "X", "--csv", str(tmp_path / "missing.csv")])
    assert rc == 1
    assert "error:" in capsys.readouterr().err
