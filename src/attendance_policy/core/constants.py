"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

# Weekday indices used by every weekday list: 0 = Sunday ... 6 = Saturday.
SUNDAY = 0
SATURDAY = 6
WEEKEND_DAYS = frozenset({SUNDAY, SATURDAY})
ALL_DAYS = (0, 1, 2, 3, 4, 5, 6)

EARTH_RADIUS_METERS = 6_371_000.0

MAX_OVERTIME_HOURS_PER_CALCULATION = 24
CURRENCY_QUANTUM = "0.01"
