"""Coverage aggregation: headcount-equivalent hours per (day, slot)."""

import pandas as pd

from grid import TIME_SLOTS, WEEKDAYS, EmployeeShift, mark_hours


def aggregate(shifts: list[EmployeeShift]) -> dict[str, dict[int, float]]:
    """
    Sum every employee's contribution to each cell of the week.

    Args:
        shifts: Filled shifts, one per employee

    Returns:
        day -> slot -> hours, with all 119 cells present
    """
    coverage = {day: {slot: 0.0 for slot in TIME_SLOTS} for day in WEEKDAYS}
    for shift in shifts:
        for day in WEEKDAYS:
            for slot in TIME_SLOTS:
                coverage[day][slot] += mark_hours(shift.schedule[day][slot])
    return coverage


def coverage_frame(coverage: dict[str, dict[int, float]]) -> pd.DataFrame:
    """Convert a coverage map to a heatmap table (rows = days, columns = slots)."""
    data = []
    for day in WEEKDAYS:
        for slot in TIME_SLOTS:
            data.append({
                "day": day,
                "slot": slot,
                "hours": coverage[day][slot],
            })
    df = pd.DataFrame(data)
    df_wide = pd.pivot(df, index="day", columns="slot", values="hours")
    return df_wide.loc[WEEKDAYS, TIME_SLOTS]
