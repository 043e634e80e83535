"""Tests for the command-line interface."""

from pathlib import Path

import yaml

from marketlab.cli import build_parser, main


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_indices_lists_every_index(capsys) -> None:
    assert main(["--seed", "1", "indices"]) == 0
    out = capsys.readouterr().out
    for name in ("S&P 500", "Dow Jones", "Nasdaq", "Russell 2000"):
        assert name in out


def test_chart_with_indicators(capsys) -> None:
    assert main(["--seed", "1", "chart", "Nasdaq", "--range", "1y", "--sma", "20", "--ema", "3"]) == 0
    out = capsys.readouterr().out
    assert "Nasdaq (1y)" in out
    assert "Change:" in out
    assert "Simple Moving Average (SMA) (20):" in out
    # Clamped to the minimum period
    assert "Exponential Moving Average (EMA) (5):" in out


def test_chart_unknown_index_fails(capsys) -> None:
    assert main(["chart", "FTSE 100"]) == 1
    assert "Error: Unknown index 'FTSE 100'" in capsys.readouterr().out


def test_chart_stock_by_symbol(capsys) -> None:
    assert main(["--seed", "1", "chart", "--stock", "aapl", "--range", "1m", "--sma", "10"]) == 0
    out = capsys.readouterr().out
    assert "AAPL - Apple Inc. (1m)" in out
    assert "Simple Moving Average (SMA) (10):" in out


def test_chart_stock_by_company_name(capsys) -> None:
    assert main(["--seed", "1", "chart", "--stock", "Tesla Inc."]) == 0
    assert "TSLA - Tesla Inc. (3m)" in capsys.readouterr().out


def test_chart_unknown_stock_fails(capsys) -> None:
    assert main(["chart", "--stock", "ZZZZ"]) == 1
    assert "Error: Unknown instrument 'ZZZZ'" in capsys.readouterr().out


def test_chart_requires_target(capsys) -> None:
    assert main(["chart"]) == 1
    assert "Error: Give an index name or --stock SYMBOL" in capsys.readouterr().out


def test_rank_macd(capsys) -> None:
    assert main(["rank", "--indicator", "macd", "--limit", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Ranking by MACD (3 of 10)"
    assert "NVDA" in lines[3]


def test_rank_uses_indicator_display_name(capsys) -> None:
    assert main(["rank", "--indicator", "OBV", "--limit", "2"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Ranking by On-Balance Volume (2 of 10)"


def test_rank_unknown_indicator_labelled_market_cap(capsys) -> None:
    assert main(["rank", "--indicator", "adx", "--limit", "2"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Ranking by market cap (2 of 10)"


def test_rank_by_sector(capsys) -> None:
    assert main(["rank", "--sector", "financial services"]) == 0
    out = capsys.readouterr().out
    assert "Ranking by market cap (3 of 3)" in out
    assert "AAPL" not in out


def test_rank_unknown_sector_fails(capsys) -> None:
    assert main(["rank", "--sector", "Shipping"]) == 1
    assert "No instruments" in capsys.readouterr().out


def test_sectors(capsys) -> None:
    assert main(["sectors"]) == 0
    out = capsys.readouterr().out
    assert "Financial Services" in out
    assert "Trend: bullish" in out


def test_config_file(tmp_path: Path, capsys) -> None:
    config_file = tmp_path / "catalog.yaml"
    config_file.write_text(yaml.dump({
        "random_seed": 3,
        "indices": [{"name": "Test Index", "base_value": 1000, "volatility": 10}],
    }))
    assert main(["--config", str(config_file), "indices"]) == 0
    out = capsys.readouterr().out
    assert "Test Index" in out
    assert "S&P 500" not in out


def test_invalid_config_fails(tmp_path: Path, capsys) -> None:
    assert main(["--config", str(tmp_path / "missing.yaml"), "indices"]) == 1
    assert "Error: Configuration file not found" in capsys.readouterr().out


def test_parser_range_choices() -> None:
    args = build_parser().parse_args(["chart", "Nasdaq"])
    assert args.range == "3m"
    assert args.sma is None
    assert args.stock is None


def test_parser_stock_option() -> None:
    args = build_parser().parse_args(["chart", "--stock", "MSFT"])
    assert args.stock == "MSFT"
    assert args.name is None
