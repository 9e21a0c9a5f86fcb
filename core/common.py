# core/common.py
import os
import sys

# Debug logging - accepts true/yes/on/1
_debug_val = os.getenv("PMSL_DEBUG", "0").lower()
DEBUG = _debug_val in ("1", "true", "yes", "on")

# Values below this (hPa) are treated as invalid when picking the color floor
MIN_VALID_PRESSURE_HPA = 100.0

# ERA5 stores msl in Pa
PA_TO_HPA = 0.01


def _dbg(msg):
    """Debug logging function - only outputs when PMSL_DEBUG is truthy"""
    if DEBUG:
        print(msg, file=sys.stderr)
