#!/usr/bin/env python3

import math
from typing import NamedTuple

#============================================

DEFAULT_THRESHOLD = 0.265

#============================================

class SilentInterval(NamedTuple):
	start: float
	end: float

	@property
	def duration(self) -> float:
		return self.end - self.start

#============================================

class SilenceIntervalTracker():
	"""
	Coalesce consecutive silent frames into closed silent intervals.

	Frames are fed in timestamp order through observe(). An interval opens
	on the first silent frame and closes on the next loud frame, using that
	frame's timestamp as the end. flush() closes a trailing interval at the
	end of the stream.
	"""
	def __init__(self, threshold: float = DEFAULT_THRESHOLD):
		if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
			raise RuntimeError("threshold must be a number")
		if math.isnan(threshold) or math.isinf(threshold) or threshold < 0:
			raise RuntimeError("threshold must be a finite non-negative number")
		self.threshold = float(threshold)
		self._open_start = None
		self._last_timestamp = None
		self._finished = False

	#============================
	@property
	def is_open(self) -> bool:
		return self._open_start is not None

	#============================
	@property
	def open_start(self) -> float:
		return self._open_start

	#============================
	@property
	def finished(self) -> bool:
		return self._finished

	#============================
	def is_silent(self, energy: float) -> bool:
		# equal to threshold counts as silent
		return energy <= self.threshold

	#============================
	def observe(self, timestamp: float, energy: float) -> SilentInterval:
		"""
		Classify one frame and return the interval it closes, if any.

		Args:
			timestamp: Frame presentation time in seconds.
			energy: Frame energy value.

		Returns:
			SilentInterval: The closed interval, or None.
		"""
		if self._finished:
			raise RuntimeError("tracker already flushed")
		if math.isnan(energy) or energy < 0:
			raise RuntimeError(f"energy must be non-negative, got {energy}")
		if math.isnan(timestamp):
			raise RuntimeError("timestamp must be a number")
		if self._last_timestamp is not None and timestamp < self._last_timestamp:
			raise RuntimeError(
				f"timestamps must be non-decreasing: {timestamp} after {self._last_timestamp}"
			)
		self._last_timestamp = timestamp
		if self.is_silent(energy):
			if self._open_start is None:
				self._open_start = timestamp
			return None
		if self._open_start is None:
			return None
		interval = SilentInterval(self._open_start, timestamp)
		self._open_start = None
		return interval

	#============================
	def flush(self, end_timestamp: float) -> SilentInterval:
		"""
		Close the open interval at the end of the stream.

		Args:
			end_timestamp: Total stream duration in seconds.

		Returns:
			SilentInterval: The trailing interval, or None.
		"""
		if self._finished:
			raise RuntimeError("tracker already flushed")
		if self._last_timestamp is not None and end_timestamp < self._last_timestamp:
			raise RuntimeError(
				f"end of stream {end_timestamp} is before last frame {self._last_timestamp}"
			)
		self._finished = True
		if self._open_start is None:
			return None
		interval = SilentInterval(self._open_start, end_timestamp)
		self._open_start = None
		return interval
