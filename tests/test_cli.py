from bond_valuation.cli import main


def test_cli_prints_all_views(capsys):
    code = main(["--coupon-rate", "8", "--ytm", "6", "--years", "5", "--face-value", "100", "--frequency", "2"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Premium bond" in out
    assert "PV = $4.00 / 3.00%" in out
    assert "Present value of bond (PV): $108.53" in out


def test_cli_single_view(capsys):
    code = main(["--coupon-rate", "6", "--ytm", "6", "--years", "5", "--face-value", "100", "--frequency", "2", "--view", "summary"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("Par bond")
    assert "Present value of bond" not in out


def test_cli_reports_validation_errors(capsys):
    code = main(["--coupon-rate", "12", "--ytm", "abc", "--years", "5", "--face-value", "100", "--frequency", "2"])
    err = capsys.readouterr().err
    assert code == 2
    assert "Please correct the following 2 errors:" in err
    assert "Coupon rate must be between 0% and 10%, inclusive" in err
    assert "Yield-to-maturity is required" in err


def test_cli_rejects_oversized_frequency(capsys):
    code = main(["--coupon-rate", "6", "--ytm", "6", "--years", "5", "--face-value", "100", "--frequency", "1e12", "--view", "summary"])
    captured = capsys.readouterr()
    assert code == 2
    assert captured.out == ""
    assert "Payment frequency must be between 1 and 12, inclusive" in captured.err
