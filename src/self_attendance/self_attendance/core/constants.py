"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

STORAGE_KEY_PREFIX = "attendanceData_"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
YEAR_MONTH_FORMAT = "%Y-%m"

CSV_HEADER = ("Date", "Time")
CSV_FILENAME = "attendance.csv"

CHART_SERIES_NAME = "Attendance Days"

DEFAULT_SESSION_DAYS = 7
