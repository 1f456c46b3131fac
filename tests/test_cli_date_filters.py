"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from mymoney.cli.date_filters import resolve_cli_date_range
from mymoney.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period="this-month",
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_cli_date_range_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period="last-month",
    )

    assert (start, end) == get_date_range("last-month")


def test_resolve_cli_date_range_parses_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-01",
        end_date="2024-01-31",
        period=None,
    )

    assert start == date(2024, 1, 1)
    assert end == date(2024, 1, 31)


def test_resolve_cli_date_range_open_ended():
    start, end = resolve_cli_date_range(_ctx(), start_date="2024-01-01", end_date=None, period=None)

    assert start == date(2024, 1, 1)
    assert end is None


def test_resolve_cli_date_range_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), start_date="whenever", end_date=None, period=None)

    assert excinfo.value.exit_code == 1
    assert "Invalid start date" in capsys.readouterr().err
