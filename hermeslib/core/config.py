#!/usr/bin/env python3

"""
Settings file handling for hermes.

The config is a small YAML mapping stored next to the input file. It is
written with defaults on the first run so it can be edited afterwards.
"""

import os

import yaml

from hermeslib.core.tracker import DEFAULT_THRESHOLD

#============================================

REPORT_FORMATS = ('text', 'yaml')

#============================================

# spellings accepted for yes/no switches in the config file
BOOL_WORDS = {
	'true': True, 'yes': True, 'on': True, '1': True,
	'false': False, 'no': False, 'off': False, '0': False,
}

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	"""
	Read a yes/no switch. Accepts bools, 0/1 and the words in BOOL_WORDS.
	"""
	if isinstance(value, bool):
		return value
	if isinstance(value, int) and value in (0, 1):
		return value == 1
	if isinstance(value, str) and value.strip().lower() in BOOL_WORDS:
		return BOOL_WORDS[value.strip().lower()]
	raise RuntimeError(f"config {config_path}: {key_path} must be true or false")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	if isinstance(value, bool):
		raise RuntimeError(f"config {config_path}: {key_path} must be a number")
	if isinstance(value, (int, float)):
		return float(value)
	if isinstance(value, str):
		try:
			return float(value)
		except ValueError as exc:
			raise RuntimeError(f"config {config_path}: {key_path} must be a number") from exc
	raise RuntimeError(f"config {config_path}: {key_path} must be a number")

#============================================

def coerce_int(value, config_path: str, key_path: str) -> int:
	if isinstance(value, bool):
		raise RuntimeError(f"config {config_path}: {key_path} must be an integer")
	if isinstance(value, int):
		return value
	if isinstance(value, float):
		return int(value)
	if isinstance(value, str):
		try:
			return int(float(value))
		except ValueError as exc:
			raise RuntimeError(f"config {config_path}: {key_path} must be an integer") from exc
	raise RuntimeError(f"config {config_path}: {key_path} must be an integer")

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'hermes': 1,
		'settings': {
			'detection': {
				'threshold': DEFAULT_THRESHOLD,
				'audio_stream': 0,
			},
			'report': {
				'format': 'text',
				'legacy_timestamps': False,
			},
		},
	}

#============================================

def default_config_path(input_file: str) -> str:
	return f"{input_file}.hermes.config.yaml"

#============================================

def default_output_path(input_file: str, report_format: str = 'text') -> str:
	if report_format == 'yaml':
		return f"{input_file}.silent_times.yaml"
	return f"{input_file}.silent_times.txt"

#============================================

def default_debug_path(input_file: str) -> str:
	return f"{input_file}.hermes.debug.txt"

#============================================

def default_plot_path(input_file: str) -> str:
	return f"{input_file}.hermes.debug.png"

#============================================

def build_config_text(config: dict) -> str:
	"""
	Build YAML text for the config file.

	Args:
		config: Config dictionary.

	Returns:
		str: YAML content.
	"""
	settings = config.get('settings', {})
	detection = settings.get('detection', {})
	report = settings.get('report', {})
	legacy = bool(report.get('legacy_timestamps', False))
	lines = []
	lines.append("hermes: 1")
	lines.append("settings:")
	lines.append("  detection:")
	lines.append("    # frames with mean square amplitude at or below this are silent")
	lines.append(f"    threshold: {detection.get('threshold', DEFAULT_THRESHOLD)}")
	lines.append(f"    audio_stream: {detection.get('audio_stream', 0)}")
	lines.append("  report:")
	lines.append(f"    format: {report.get('format', 'text')}")
	lines.append(f"    legacy_timestamps: {str(legacy).lower()}")
	lines.append("")
	return "\n".join(lines)

#============================================

def write_config_file(config_path: str, config: dict) -> None:
	text = build_config_text(config)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def load_config(config_path: str) -> dict:
	"""
	Load a config file from disk.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config dictionary.
	"""
	with open(config_path, 'r', encoding='utf-8') as handle:
		data = yaml.safe_load(handle)
	if not isinstance(data, dict):
		raise RuntimeError("config file must be a mapping")
	if data.get('hermes') != 1:
		raise RuntimeError("config file must set hermes: 1")
	return data

#============================================

def build_settings(config: dict, config_path: str) -> dict:
	"""
	Normalize settings with defaults.

	Args:
		config: Raw config dictionary.
		config_path: Config file path.

	Returns:
		dict: Flat settings dict.
	"""
	defaults = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings') or {}
	if not isinstance(overrides, dict):
		raise RuntimeError(f"config {config_path}: settings must be a mapping")
	detection = overrides.get('detection') or {}
	report = overrides.get('report') or {}
	threshold = coerce_float(detection.get('threshold',
		defaults['detection']['threshold']), config_path,
		"settings.detection.threshold")
	audio_stream = coerce_int(detection.get('audio_stream',
		defaults['detection']['audio_stream']), config_path,
		"settings.detection.audio_stream")
	report_format = report.get('format', defaults['report']['format'])
	if not isinstance(report_format, str):
		raise RuntimeError(f"config {config_path}: settings.report.format must be a string")
	report_format = report_format.strip().lower()
	legacy = coerce_bool(report.get('legacy_timestamps',
		defaults['report']['legacy_timestamps']), config_path,
		"settings.report.legacy_timestamps")
	settings = {
		'threshold': threshold,
		'audio_stream': audio_stream,
		'report_format': report_format,
		'legacy_timestamps': legacy,
	}
	validate_settings(settings)
	return settings

#============================================

def validate_settings(settings: dict) -> None:
	if settings['threshold'] < 0:
		raise RuntimeError("threshold must not be negative")
	if settings['audio_stream'] < 0:
		raise RuntimeError("audio_stream must not be negative")
	if settings['report_format'] not in REPORT_FORMATS:
		raise RuntimeError(
			f"report format must be one of: {', '.join(REPORT_FORMATS)}"
		)
	return
