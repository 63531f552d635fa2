"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

BUSINESS_TIMEZONE = "Asia/Taipei"

WORK_START = time(8, 30)
WORK_END = time(17, 30)
LUNCH_START = time(12, 0)
LUNCH_END = time(13, 0)

# Leave hours are billed in half-hour steps, overtime in tenths.
LEAVE_HOURS_STEP = 0.5
OVERTIME_HOURS_DECIMALS = 1

DEFAULT_LIST_LIMIT = 200

SPAN_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")

LEAVE_TYPES = (
    "特休",
    "補休",
    "生日假",
    "事假",
    "病假",
    "公假",
    "婚假",
    "喪假",
    "產假",
    "陪產假",
    "生理假",
    "家庭照顧假",
    "工傷病假",
    "其他",
)

# Leave types drawn from a per-employee quota, mapped to the Employee field.
QUOTA_LEAVE_TYPES = {
    "特休": "quota_annual",
    "生日假": "quota_birthday",
    "補休": "quota_comp",
}
