#!/usr/bin/env python3

from hermeslib.core import utils
from hermeslib.core.energy import frame_energy
from hermeslib.media.decoder import DecodeError

#============================================

def new_stats(threshold: float, include_series: bool = False) -> dict:
	stats = {
		'threshold': threshold,
		'frame_count': 0,
		'silent_frames': 0,
		'silent_pct': 0.0,
		'interval_count': 0,
		'silence_total': 0.0,
		'last_timestamp': None,
		'last_frame_end': None,
		'duration': None,
		'decode_error': None,
	}
	if include_series:
		stats['times'] = []
		stats['energies'] = []
	return stats

#============================================

def _record_interval(stats: dict, interval) -> None:
	stats['interval_count'] += 1
	stats['silence_total'] += interval.duration

#============================================

def scan_frames(frames, tracker, stats: dict):
	"""
	Feed frames through the energy meter and tracker.

	Args:
		frames: Iterable of frames with timestamp and samples.
		tracker: SilenceIntervalTracker instance.
		stats: Statistics dict from new_stats(), updated in place.

	Yields:
		SilentInterval: Each interval as soon as a loud frame closes it.
	"""
	for frame in frames:
		timestamp = frame.timestamp
		energy = frame_energy(frame.samples)
		stats['frame_count'] += 1
		if tracker.is_silent(energy):
			stats['silent_frames'] += 1
		stats['last_timestamp'] = timestamp
		stats['last_frame_end'] = getattr(frame, 'end_timestamp', timestamp)
		if 'energies' in stats:
			stats['times'].append(timestamp)
			stats['energies'].append(energy)
		interval = tracker.observe(timestamp, energy)
		if interval is not None:
			_record_interval(stats, interval)
			yield interval

#============================================

def best_end_seconds(end_of_stream: float, stats: dict) -> float:
	"""
	Pick the flush time: the stream duration, never before the last frame.
	"""
	if end_of_stream is None:
		end_of_stream = stats['last_frame_end']
	if end_of_stream is None:
		return 0.0
	if stats['last_timestamp'] is not None and end_of_stream < stats['last_timestamp']:
		return stats['last_timestamp']
	return end_of_stream

#============================================

def scan_decoder(decoder, tracker, sink, include_series: bool = False) -> dict:
	"""
	Run a whole stream through the tracker and into a report sink.

	A decode error ends the frame stream early; the open interval is still
	flushed with the best known end time.

	Args:
		decoder: Object with frames() and end_of_stream_seconds().
		tracker: SilenceIntervalTracker instance.
		sink: Report writer with write_interval().
		include_series: Keep per-frame times and energies in the stats.

	Returns:
		dict: Scan statistics.
	"""
	stats = new_stats(tracker.threshold, include_series)
	try:
		for interval in scan_frames(decoder.frames(), tracker, stats):
			sink.write_interval(interval)
	except DecodeError as exc:
		stats['decode_error'] = str(exc)
		utils.warn(str(exc))
	end_seconds = best_end_seconds(decoder.end_of_stream_seconds(), stats)
	stats['duration'] = end_seconds
	interval = tracker.flush(end_seconds)
	if interval is not None:
		_record_interval(stats, interval)
		sink.write_interval(interval)
	if stats['frame_count'] > 0:
		stats['silent_pct'] = (stats['silent_frames'] / float(stats['frame_count'])) * 100.0
	return stats
