#!/usr/bin/env python3

"""
Unit tests for report line and timestamp formatting.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from hermeslib.core import timecode
from hermeslib.core.tracker import SilentInterval

#============================================

def test_split_minutes() -> None:
	assert timecode.split_minutes(0.0) == (0, 0.0)
	minutes, seconds = timecode.split_minutes(125.5)
	assert minutes == 2
	assert seconds == pytest.approx(5.5)
	with pytest.raises(RuntimeError):
		timecode.split_minutes(-1.0)

#============================================

def test_format_seconds_strips_zeros() -> None:
	assert timecode.format_seconds(5.25) == "5.25"
	assert timecode.format_seconds(3.0) == "3"
	assert timecode.format_seconds(0.0) == "0"
	assert timecode.format_seconds(0.5004) == "0.5"

#============================================

def test_report_line_uses_each_endpoint_minutes() -> None:
	line = timecode.format_report_line(SilentInterval(59.5, 61.25))
	assert line == "Silent time: 0m59.5s - 1m1.25s"

#============================================

def test_report_line_rounding_does_not_show_sixty_seconds() -> None:
	line = timecode.format_report_line(SilentInterval(10.0, 119.9999))
	assert line == "Silent time: 0m10s - 2m0s"

#============================================

def test_legacy_line_matches_old_reports() -> None:
	# end seconds are measured from the start minute and truncated
	line = timecode.format_report_line(SilentInterval(59.5, 61.25), legacy=True)
	assert line == "Silent time: 0m59s - 1m61s"
	line = timecode.format_report_line((125.9, 130.2), legacy=True)
	assert line == "Silent time: 2m5s - 2m10s"

#============================================

def test_format_timestamp() -> None:
	assert timecode.format_timestamp(0.0) == "00:00:00.000"
	assert timecode.format_timestamp(3661.2345) == "01:01:01.235"
	assert timecode.format_timestamp(59.9996) == "00:01:00.000"

#============================================

def test_seconds_to_millis_half_up() -> None:
	assert timecode.seconds_to_millis(0.0005) == 1
	assert timecode.seconds_to_millis(1.2344) == 1234

#============================================

def test_timestamp_clamps_negative_and_rejects_nan() -> None:
	assert timecode.seconds_to_millis(-0.25) == 0
	assert timecode.format_timestamp(-3.0) == "00:00:00.000"
	assert timecode.format_timestamp(360000.0) == "100:00:00.000"
	with pytest.raises(RuntimeError):
		timecode.seconds_to_millis(float('nan'))
