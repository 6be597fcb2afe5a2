"""
Test the due-date projection used by maintenance generation.
"""
import pytest
from datetime import date, datetime

from fire_inventory.buisness.maintenance.generation.schedule_projector import (
    GenerationMode,
    add_months,
    compute_horizon,
    project_due_dates,
    resolve_baseline,
)


def test_next_only_emits_single_candidate_inside_horizon():
    now = datetime(2024, 2, 1)
    horizon = compute_horizon(GenerationMode.NEXT_ONLY, now)
    assert horizon == datetime(2024, 5, 1)

    result = project_due_dates(date(2024, 1, 15), 3, horizon, GenerationMode.NEXT_ONLY)
    assert result == [date(2024, 4, 15)]


def test_next_only_emits_nothing_past_horizon():
    result = project_due_dates(date(2024, 1, 15), 3, datetime(2024, 4, 1), GenerationMode.NEXT_ONLY)
    assert result == []


def test_all_missing_enumerates_every_step_before_horizon():
    result = project_due_dates(datetime(2024, 1, 1), 1, datetime(2024, 6, 1), GenerationMode.ALL_MISSING)
    assert result == [
        datetime(2024, 2, 1),
        datetime(2024, 3, 1),
        datetime(2024, 4, 1),
        datetime(2024, 5, 1),
    ]


def test_all_missing_horizon_is_180_days():
    assert compute_horizon(GenerationMode.ALL_MISSING, datetime(2024, 1, 1)) == datetime(2024, 6, 29)


def test_candidates_never_include_baseline():
    baseline = datetime(2024, 1, 1)
    result = project_due_dates(baseline, 12, datetime(2026, 1, 2))
    assert baseline not in result
    assert result == [datetime(2025, 1, 1), datetime(2026, 1, 1)]


def test_end_of_month_clamping_does_not_drift():
    result = project_due_dates(date(2024, 1, 31), 1, date(2024, 5, 1))
    assert result == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]
    assert add_months(date(2023, 8, 31), 6) == date(2024, 2, 29)


@pytest.mark.parametrize('interval', [0, -3, None, 2.5, True])
def test_invalid_interval_rejected(interval):
    with pytest.raises(ValueError):
        project_due_dates(date(2024, 1, 1), interval, date(2025, 1, 1))


def test_resolve_baseline_precedence():
    now = datetime(2024, 3, 1, 12, 30)
    assert resolve_baseline(date(2024, 1, 15), date(2020, 1, 1), now) == datetime(2024, 1, 15)
    assert resolve_baseline(None, date(2020, 1, 1), now) == datetime(2020, 1, 1)
    assert resolve_baseline(None, None, now) == now


def test_generation_mode_aliases():
    assert GenerationMode.parse(None) is GenerationMode.NEXT_ONLY
    assert GenerationMode.parse('manual') is GenerationMode.NEXT_ONLY
    assert GenerationMode.parse('next_only') is GenerationMode.NEXT_ONLY
    assert GenerationMode.parse('bulk') is GenerationMode.ALL_MISSING
    assert GenerationMode.parse('All-Missing') is GenerationMode.ALL_MISSING
    with pytest.raises(ValueError):
        GenerationMode.parse('weekly')
