#!/usr/bin/env python3

from fractions import Fraction

#============================================

QUIET_MODE = False

#============================================

def set_quiet_mode(value: bool) -> None:
	global QUIET_MODE
	QUIET_MODE = bool(value)
	return

#============================================

def is_quiet_mode() -> bool:
	return QUIET_MODE

#============================================

def echo(message: str = "") -> None:
	if is_quiet_mode():
		return
	print(message)
	return

#============================================

def warn(message: str) -> None:
	# warnings are shown even in quiet mode
	print(f"WARNING: {message}")
	return

#============================================

def parse_time_base(raw_time_base) -> Fraction:
	"""
	Convert a stream time-base into an exact seconds-per-tick fraction.

	Accepts Fraction, PyAV rationals, "num/den" strings, ints and floats.
	"""
	if raw_time_base is None:
		raise RuntimeError("time_base is required")
	if isinstance(raw_time_base, Fraction):
		value = raw_time_base
	elif isinstance(raw_time_base, bool):
		raise RuntimeError("time_base must be a number or fraction string")
	elif isinstance(raw_time_base, int):
		value = Fraction(raw_time_base, 1)
	elif isinstance(raw_time_base, float):
		value = Fraction(str(raw_time_base))
	elif isinstance(raw_time_base, str):
		text = raw_time_base.strip()
		try:
			if '/' in text:
				numerator, denominator = text.split('/')
				value = Fraction(int(numerator), int(denominator))
			else:
				value = Fraction(text)
		except (ValueError, ZeroDivisionError) as exc:
			raise RuntimeError(f"invalid time_base: {raw_time_base}") from exc
	elif hasattr(raw_time_base, 'numerator') and hasattr(raw_time_base, 'denominator'):
		value = Fraction(int(raw_time_base.numerator), int(raw_time_base.denominator))
	else:
		raise RuntimeError("time_base must be a number or fraction string")
	if value <= 0:
		raise RuntimeError("time_base must be positive")
	return value

#============================================

def pts_to_seconds(pts: int, time_base) -> float:
	seconds_fraction = Fraction(int(pts), 1) * parse_time_base(time_base)
	return float(seconds_fraction)

#============================================

def end_of_stream_seconds(duration_ticks: int, ticks_per_frame: int,
	time_base) -> float:
	"""
	Total stream duration in seconds.

	Args:
		duration_ticks: Stream duration in time-base ticks.
		ticks_per_frame: Codec ticks per decoded frame.
		time_base: Seconds per tick.

	Returns:
		float: End of stream in seconds.
	"""
	if duration_ticks is None:
		raise RuntimeError("stream duration is unknown")
	if duration_ticks < 0:
		raise RuntimeError("stream duration must not be negative")
	if ticks_per_frame <= 0:
		raise RuntimeError("ticks_per_frame must be positive")
	ticks = Fraction(int(duration_ticks) * int(ticks_per_frame), 1)
	return float(ticks * parse_time_base(time_base))
