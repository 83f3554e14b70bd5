#!/usr/bin/env python3

import math
import os
import random
import sys
import unittest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from hermeslib.core.tracker import DEFAULT_THRESHOLD
from hermeslib.core.tracker import SilenceIntervalTracker
from hermeslib.core.tracker import SilentInterval

LOUD = 0.9
QUIET = 0.05

#============================================

def _feed(tracker: SilenceIntervalTracker, frames: list, end: float) -> list:
	"""Run (timestamp, energy) pairs through a tracker and flush.

	Args:
		tracker: Tracker under test.
		frames: List of (timestamp, energy) pairs.
		end: End of stream timestamp.

	Returns:
		list: Every emitted interval in order.
	"""
	emitted = []
	for timestamp, energy in frames:
		interval = tracker.observe(timestamp, energy)
		if interval is not None:
			emitted.append(interval)
	tail = tracker.flush(end)
	if tail is not None:
		emitted.append(tail)
	return emitted

#============================================

def _count_silent_runs(frames: list, threshold: float) -> int:
	runs = 0
	previous = False
	for _, energy in frames:
		silent = energy <= threshold
		if silent and not previous:
			runs += 1
		previous = silent
	return runs

#============================================

class SilenceIntervalTrackerTest(unittest.TestCase):
	#============================================
	def test_default_threshold(self) -> None:
		"""Default sensitivity matches the reference constant."""
		self.assertEqual(SilenceIntervalTracker().threshold, DEFAULT_THRESHOLD)
		self.assertEqual(DEFAULT_THRESHOLD, 0.265)

	#============================================
	def test_trailing_silence_is_flushed(self) -> None:
		"""A silent run at the end closes on flush with the stream end."""
		tracker = SilenceIntervalTracker()
		self.assertIsNone(tracker.observe(0.0, 0.9))
		self.assertIsNone(tracker.observe(1.0, 0.1))
		self.assertIsNone(tracker.observe(2.0, 0.05))
		self.assertTrue(tracker.is_open)
		self.assertEqual(tracker.open_start, 1.0)
		self.assertEqual(tracker.flush(3.0), SilentInterval(1.0, 3.0))
		self.assertFalse(tracker.is_open)
		self.assertTrue(tracker.finished)

	#============================================
	def test_multiple_intervals(self) -> None:
		"""Loud frames close intervals at their own timestamp."""
		tracker = SilenceIntervalTracker()
		self.assertIsNone(tracker.observe(0, LOUD))
		self.assertIsNone(tracker.observe(1, QUIET))
		self.assertEqual(tracker.observe(2, LOUD), SilentInterval(1, 2))
		self.assertIsNone(tracker.observe(3, QUIET))
		self.assertIsNone(tracker.observe(4, QUIET))
		self.assertEqual(tracker.observe(5, LOUD), SilentInterval(3, 5))
		self.assertIsNone(tracker.flush(9.0))

	#============================================
	def test_threshold_is_inclusive(self) -> None:
		"""Energy equal to the threshold counts as silent."""
		tracker = SilenceIntervalTracker(0.5)
		self.assertTrue(tracker.is_silent(0.5))
		self.assertFalse(tracker.is_silent(0.5000001))
		tracker.observe(0.0, 0.5)
		self.assertTrue(tracker.is_open)

	#============================================
	def test_open_start_is_not_reset(self) -> None:
		"""Further silent frames keep the first start time."""
		tracker = SilenceIntervalTracker()
		for timestamp in (2.0, 2.5, 3.0, 3.5):
			tracker.observe(timestamp, 0.0)
		self.assertEqual(tracker.open_start, 2.0)

	#============================================
	def test_equal_timestamps_are_allowed(self) -> None:
		tracker = SilenceIntervalTracker()
		tracker.observe(1.0, QUIET)
		self.assertEqual(tracker.observe(1.0, LOUD), SilentInterval(1.0, 1.0))

	#============================================
	def test_nothing_silent_emits_nothing(self) -> None:
		tracker = SilenceIntervalTracker()
		frames = [(float(index), LOUD) for index in range(10)]
		self.assertEqual(_feed(tracker, frames, 10.0), [])

	#============================================
	def test_empty_stream_flush(self) -> None:
		self.assertIsNone(SilenceIntervalTracker().flush(0.0))

	#============================================
	def test_custom_threshold_changes_classification(self) -> None:
		"""Two trackers with different sensitivity coexist."""
		frames = [(0.0, 0.3), (1.0, 0.6), (2.0, 0.3)]
		strict = _feed(SilenceIntervalTracker(0.1), frames, 3.0)
		loose = _feed(SilenceIntervalTracker(0.4), frames, 3.0)
		self.assertEqual(strict, [])
		self.assertEqual(loose, [SilentInterval(0.0, 1.0), SilentInterval(2.0, 3.0)])

	#============================================
	def test_random_streams(self) -> None:
		"""Intervals are ordered, non-overlapping and one per silent run."""
		rng = random.Random(1234)
		for _ in range(50):
			timestamp = 0.0
			frames = []
			for _ in range(rng.randint(0, 60)):
				timestamp += rng.uniform(0.01, 0.5)
				frames.append((timestamp, rng.choice((QUIET, LOUD, 0.265, 0.3))))
			end = timestamp + 1.0
			first = _feed(SilenceIntervalTracker(), frames, end)
			second = _feed(SilenceIntervalTracker(), frames, end)
			self.assertEqual(first, second)
			self.assertEqual(len(first), _count_silent_runs(frames, DEFAULT_THRESHOLD))
			previous_end = -math.inf
			for interval in first:
				self.assertLessEqual(interval.start, interval.end)
				self.assertGreaterEqual(interval.start, previous_end)
				previous_end = interval.end

	#============================================
	def test_interval_duration(self) -> None:
		self.assertAlmostEqual(SilentInterval(1.5, 4.0).duration, 2.5)

	#============================================
	def test_backwards_timestamp_fails_fast(self) -> None:
		tracker = SilenceIntervalTracker()
		tracker.observe(2.0, QUIET)
		with self.assertRaises(RuntimeError):
			tracker.observe(1.0, QUIET)

	#============================================
	def test_bad_energy_fails_fast(self) -> None:
		tracker = SilenceIntervalTracker()
		with self.assertRaises(RuntimeError):
			tracker.observe(0.0, -0.1)
		with self.assertRaises(RuntimeError):
			tracker.observe(0.0, float('nan'))

	#============================================
	def test_flush_before_last_frame_fails(self) -> None:
		tracker = SilenceIntervalTracker()
		tracker.observe(5.0, QUIET)
		with self.assertRaises(RuntimeError):
			tracker.flush(4.0)

	#============================================
	def test_use_after_flush_fails(self) -> None:
		tracker = SilenceIntervalTracker()
		tracker.flush(1.0)
		with self.assertRaises(RuntimeError):
			tracker.observe(2.0, QUIET)
		with self.assertRaises(RuntimeError):
			tracker.flush(2.0)

	#============================================
	def test_invalid_threshold(self) -> None:
		for value in (-0.1, float('nan'), float('inf'), "0.2", True):
			with self.assertRaises(RuntimeError):
				SilenceIntervalTracker(value)

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
