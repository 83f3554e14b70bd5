#!/usr/bin/env python3

import os

import yaml

from hermeslib.core import timecode

#============================================

class TextReportWriter():
	"""
	Write one "Silent time:" line per interval, in the order received.
	"""
	def __init__(self, output_file: str, legacy: bool = False):
		self.output_file = output_file
		self.legacy = legacy
		os.makedirs(os.path.dirname(output_file) or '.', exist_ok=True)
		self._handle = open(output_file, 'w', encoding='utf-8')

	#============================
	def __enter__(self):
		return self

	#============================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.close()

	#============================
	def write_interval(self, interval) -> None:
		if self._handle is None:
			raise RuntimeError("report writer is closed")
		line = timecode.format_report_line(interval, legacy=self.legacy)
		self._handle.write(line + "\n")
		self._handle.flush()

	#============================
	def close(self) -> None:
		if self._handle is not None:
			self._handle.close()
			self._handle = None

#============================================

def build_yaml_report(input_file: str, threshold: float, duration: float,
	intervals: list) -> str:
	"""
	Build a YAML document listing silent intervals.

	Args:
		input_file: Scanned media file.
		threshold: Energy threshold used.
		duration: Stream duration in seconds, may be None.
		intervals: SilentInterval list in emission order.

	Returns:
		str: YAML content.
	"""
	silences = []
	for interval in intervals:
		silences.append({
			'start': round(float(interval.start), 6),
			'end': round(float(interval.end), 6),
			'duration': round(float(interval.duration), 6),
			'start_tc': timecode.format_timestamp(interval.start),
			'end_tc': timecode.format_timestamp(interval.end),
		})
	data = {
		'hermes': 1,
		'input': input_file,
		'threshold': float(threshold),
		'duration': round(float(duration), 6) if duration is not None else None,
		'silences': silences,
	}
	return yaml.safe_dump(data, sort_keys=False)

#============================================

class YamlReportWriter():
	"""
	Collect intervals and write them as one YAML document on close.
	"""
	def __init__(self, output_file: str, input_file: str, threshold: float):
		self.output_file = output_file
		self.input_file = input_file
		self.threshold = threshold
		self.intervals = []
		self.duration = None
		self._closed = False

	#============================
	def __enter__(self):
		return self

	#============================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		if exc_type is None:
			self.close()

	#============================
	def write_interval(self, interval) -> None:
		if self._closed:
			raise RuntimeError("report writer is closed")
		self.intervals.append(interval)

	#============================
	def close(self) -> None:
		if self._closed:
			return
		self._closed = True
		yaml_text = build_yaml_report(self.input_file, self.threshold,
			self.duration, self.intervals)
		os.makedirs(os.path.dirname(self.output_file) or '.', exist_ok=True)
		with open(self.output_file, 'w', encoding='utf-8') as handle:
			handle.write(yaml_text)

#============================================

def write_text_report(output_file: str, text: str) -> None:
	"""
	Write text to a file.

	Args:
		output_file: Output file path.
		text: Text to write.
	"""
	with open(output_file, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def write_energy_plot(output_file: str, times: list, energies: list,
	threshold: float) -> None:
	"""
	Write a debug plot of per-frame energy against the threshold.

	Args:
		output_file: Output plot path.
		times: Frame timestamps in seconds.
		energies: Frame energy values.
		threshold: Silence threshold.
	"""
	if len(energies) == 0:
		return
	try:
		import matplotlib
		matplotlib.use("Agg")
		import matplotlib.pyplot as pyplot
	except ImportError as exc:
		raise RuntimeError("matplotlib is required for --debug plots") from exc
	pyplot.figure(figsize=(12, 4))
	pyplot.plot(times, energies, linewidth=0.8, label="energy")
	pyplot.axhline(threshold, color='red', linestyle='--', linewidth=1.0,
		label="threshold")
	pyplot.xlabel("Seconds")
	pyplot.ylabel("Mean square amplitude")
	pyplot.title("Frame Energy")
	pyplot.legend(loc="upper right")
	pyplot.tight_layout()
	pyplot.savefig(output_file)
	pyplot.close()
	return
