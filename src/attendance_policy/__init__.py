"""Attendance policy evaluation engine.

Pure, stateless evaluators that turn attendance facts (clock times, dates,
coordinates, occurrence counts) into policy decisions: lateness, overtime pay,
penalties, holidays, effective shifts and geofence checks. Organized by feature
module, with a thin Flask controller and a read-only policy snapshot at the
boundary.
"""

__version__ = "1.0.0"
