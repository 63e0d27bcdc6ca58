"""
FMCSA regulatory constants for the HOS compliance engine.

These are part of the rule definition and are not configurable.
All values are expressed in integer minutes unless otherwise stated.
"""

MINUTE_MS = 60 * 1000
DAY_MS = 24 * 60 * MINUTE_MS

DRIVE_LIMIT_MIN = 11 * 60  # 11-hour driving limit
DUTY_WINDOW_MIN = 14 * 60  # 14-hour duty window
BREAK_AFTER_DRIVE_MIN = 8 * 60  # 30-minute break required after 8 hours driving
QUALIFYING_REST_MIN = 10 * 60  # 10 consecutive hours off duty to reset
QUALIFYING_BREAK_MIN = 30
RESTART_MIN = 34 * 60  # 34 consecutive hours off duty to restart the cycle

SUPPORTED_RULESETS = ("FMCSA",)
