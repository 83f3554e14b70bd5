#!/usr/bin/env python3

import decimal
import math

#============================================

def split_minutes(seconds: float) -> tuple:
	"""
	Split a time into whole minutes and the remaining seconds.

	Args:
		seconds: Time in seconds.

	Returns:
		tuple: (minutes, seconds_remainder)
	"""
	if seconds < 0:
		raise RuntimeError("time must not be negative")
	minutes = int(math.floor(seconds / 60.0))
	remainder = seconds - (minutes * 60.0)
	return (minutes, remainder)

#============================================

def format_seconds(seconds: float) -> str:
	value = f"{seconds:.3f}"
	value = value.rstrip('0').rstrip('.')
	if value == "" or value == "-0":
		value = "0"
	return value

#============================================

def format_report_line(interval, legacy: bool = False) -> str:
	"""
	Render one silent interval as a report line.

	Args:
		interval: SilentInterval or (start, end) pair in seconds.
		legacy: Match the old report byte for byte. Seconds are truncated
			and the end remainder is taken against the start minutes.

	Returns:
		str: Report line without a trailing newline.
	"""
	start, end = interval[0], interval[1]
	if legacy:
		start_minutes, start_seconds = split_minutes(start)
		end_minutes, _ = split_minutes(end)
		end_seconds = end - (start_minutes * 60.0)
		start_text = str(int(start_seconds))
		end_text = str(int(end_seconds))
	else:
		# round first so 59.9996 renders as 1m0s, not 0m60s
		start_minutes, start_seconds = split_minutes(round(start, 3))
		end_minutes, end_seconds = split_minutes(round(end, 3))
		start_text = format_seconds(start_seconds)
		end_text = format_seconds(end_seconds)
	return (f"Silent time: {start_minutes}m{start_text}s - "
		f"{end_minutes}m{end_text}s")

#============================================

def seconds_to_millis(seconds: float) -> int:
	"""
	Whole milliseconds for a time in seconds, halves rounded up.
	Negative times clamp to 0.
	"""
	if not math.isfinite(seconds):
		raise RuntimeError(f"time must be finite: {seconds}")
	scaled = decimal.Decimal(repr(float(seconds))).scaleb(3)
	millis = int(scaled.to_integral_value(rounding=decimal.ROUND_HALF_UP))
	return max(millis, 0)

#============================================

def format_timestamp(seconds: float) -> str:
	# HH:MM:SS.mmm, hours keep counting past 99
	whole_seconds, millis = divmod(seconds_to_millis(seconds), 1000)
	minutes, secs = divmod(whole_seconds, 60)
	hours, minutes = divmod(minutes, 60)
	return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"
