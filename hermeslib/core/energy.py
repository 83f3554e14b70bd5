#!/usr/bin/env python3

import numpy

#============================================

# int16 full scale, samples are divided by this to land in [-1, 1]
SAMPLE_SCALE = 32768.0

#============================================

def frame_energy(samples, sample_count: int = None) -> float:
	"""
	Mean squared normalized amplitude of one decoded frame.

	Args:
		samples: Interleaved int16 samples for every channel of the frame.
		sample_count: Number of samples to use, defaults to all of them.

	Returns:
		float: Energy value, 0.0 for an empty frame.
	"""
	values = numpy.asarray(samples)
	values = values.reshape(-1)
	if sample_count is None:
		sample_count = values.size
	if sample_count < 0:
		raise RuntimeError("sample_count must not be negative")
	if sample_count > values.size:
		raise RuntimeError(
			f"sample_count {sample_count} exceeds buffer size {values.size}"
		)
	if sample_count == 0:
		return 0.0
	normalized = values[:sample_count].astype(numpy.float64) / SAMPLE_SCALE
	energy = float(numpy.mean(normalized * normalized))
	return energy
