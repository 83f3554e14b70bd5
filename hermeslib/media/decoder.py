#!/usr/bin/env python3

import os
from fractions import Fraction

import av
import numpy

from hermeslib.core import utils

#============================================

# audio codecs advance one tick per decoded frame
AUDIO_TICKS_PER_FRAME = 1

#============================================

class DecodeError(RuntimeError):
	pass

#============================================

def to_int16_samples(array, format_name: str, planar: bool = False) -> numpy.ndarray:
	"""
	Map decoded samples of any PCM sample format onto interleaved int16.

	No resampling or channel remixing is done, only the sample scale changes.

	Args:
		array: Samples as returned by AudioFrame.to_ndarray().
		format_name: PyAV sample format name, e.g. "s16", "fltp".
		planar: True when array rows are channels.

	Returns:
		numpy.ndarray: Flat int16 array, channels interleaved.
	"""
	values = numpy.asarray(array)
	if planar and values.ndim == 2:
		values = values.T
	values = values.reshape(-1)
	base_format = format_name
	if base_format.endswith('p'):
		base_format = base_format[:-1]
	if base_format == 's16':
		return values.astype(numpy.int16, copy=False)
	if base_format == 's32':
		return (values.astype(numpy.int32, copy=False) >> 16).astype(numpy.int16)
	if base_format == 's64':
		return (values.astype(numpy.int64, copy=False) >> 48).astype(numpy.int16)
	if base_format == 'u8':
		shifted = (values.astype(numpy.int16) - 128) << 8
		return shifted.astype(numpy.int16)
	if base_format in ('flt', 'dbl'):
		scaled = numpy.round(values.astype(numpy.float64) * 32768.0)
		scaled = numpy.clip(scaled, -32768, 32767)
		return scaled.astype(numpy.int16)
	raise RuntimeError(f"unsupported audio sample format: {format_name}")

#============================================

def ensure_media_file(path: str) -> None:
	if not os.path.isfile(path):
		raise RuntimeError(f"Failed to open video file. {path}: file not found")
	return

#============================================

class DecodedFrame():
	def __init__(self, samples: numpy.ndarray, pts: int, time_base: Fraction,
		sample_rate: int, channels: int):
		self.samples = samples
		self.pts = pts
		self.time_base = time_base
		self.sample_rate = sample_rate
		self.channels = channels

	#============================
	@property
	def sample_count(self) -> int:
		return int(self.samples.size)

	#============================
	@property
	def timestamp(self) -> float:
		return utils.pts_to_seconds(self.pts, self.time_base)

	#============================
	@property
	def end_timestamp(self) -> float:
		if self.sample_rate <= 0 or self.channels <= 0:
			return self.timestamp
		per_channel = self.sample_count // self.channels
		return self.timestamp + per_channel / float(self.sample_rate)

#============================================

class AudioDecoder():
	"""
	Decode one audio stream of a media file into int16 frames with PyAV.
	"""
	def __init__(self, path: str, stream_index: int = 0):
		ensure_media_file(path)
		self.path = path
		try:
			self.container = av.open(path)
		except av.error.FFmpegError as exc:
			raise RuntimeError(f"Failed to open video file. {path}: {exc}") from exc
		audio_streams = self.container.streams.audio
		if len(audio_streams) == 0:
			self.container.close()
			raise RuntimeError("No audio stream found in the video file.")
		if stream_index < 0 or stream_index >= len(audio_streams):
			self.container.close()
			raise RuntimeError(
				f"audio stream {stream_index} not found, file has {len(audio_streams)}"
			)
		self.stream = audio_streams[stream_index]
		time_base = self.stream.time_base
		if time_base is None:
			time_base = Fraction(1, self.stream.rate)
		self.time_base = utils.parse_time_base(time_base)
		self.ticks_per_frame = AUDIO_TICKS_PER_FRAME
		self._samples_seen = 0

	#============================
	def __enter__(self):
		return self

	#============================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.close()

	#============================
	def close(self) -> None:
		if self.container is not None:
			self.container.close()
			self.container = None

	#============================
	def end_of_stream_seconds(self) -> float:
		"""
		Stream duration in seconds, None when the container does not say.
		"""
		if self.stream.duration is not None:
			return utils.end_of_stream_seconds(self.stream.duration,
				self.ticks_per_frame, self.time_base)
		if self.container is not None and self.container.duration is not None:
			return float(Fraction(self.container.duration, av.time_base))
		return None

	#============================
	def _frame_pts(self, frame) -> tuple:
		time_base = self.time_base
		if frame.time_base is not None:
			time_base = utils.parse_time_base(frame.time_base)
		if frame.pts is not None:
			return (frame.pts, time_base)
		# no pts from the demuxer, stamp from the running sample position
		sample_rate = frame.sample_rate or self.stream.rate
		position = Fraction(self._samples_seen, sample_rate)
		return (int(position / time_base), time_base)

	#============================
	def frames(self):
		"""
		Yield DecodedFrame objects in decode order.
		"""
		if self.container is None:
			raise RuntimeError("decoder is closed")
		try:
			for frame in self.container.decode(self.stream):
				pts, time_base = self._frame_pts(frame)
				planar = frame.format.is_planar
				samples = to_int16_samples(frame.to_ndarray(), frame.format.name,
					planar)
				channels = len(frame.layout.channels)
				self._samples_seen += frame.samples
				yield DecodedFrame(samples, pts, time_base, frame.sample_rate,
					channels)
		except av.error.FFmpegError as exc:
			raise DecodeError(f"decode stopped: {exc}") from exc
