#!/usr/bin/env python3

"""
hermes.py

Find the silent spots in the audio track of a video to make editing easier.
Writes one "Silent time:" line per silent range.
"""

# Standard Library
import argparse
import os

# local repo modules
from hermeslib.core import config
from hermeslib.core import report
from hermeslib.core import scanner
from hermeslib.core import timecode
from hermeslib.core import utils
from hermeslib.core.tracker import SilenceIntervalTracker
from hermeslib.media.decoder import AudioDecoder
from hermeslib.media.decoder import ensure_media_file

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Report silent time ranges in the audio track of a video."
	)
	parser.add_argument(
		'-i', '--input', dest='input_file', required=True,
		help="Input video or audio file path."
	)
	parser.add_argument(
		'-o', '--output', dest='output_file', default=None,
		help="Report file path, defaults to <input>.silent_times.txt."
	)
	parser.add_argument(
		'-c', '--config', dest='config_file', default=None,
		help="Path to a hermes config YAML."
	)
	parser.add_argument(
		'-t', '--threshold', dest='threshold', type=float, default=None,
		help="Override the silence energy threshold."
	)
	parser.add_argument(
		'-s', '--stream', dest='audio_stream', type=int, default=None,
		help="Audio stream number to scan, 0 is the first audio stream."
	)
	parser.add_argument(
		'-f', '--format', dest='report_format', choices=config.REPORT_FORMATS,
		default=None, help="Report format."
	)
	parser.add_argument(
		'-l', '--legacy-timestamps', dest='legacy_timestamps',
		help="Write whole seconds measured from the start minute, like old reports. "
			"Text format only.",
		action='store_true'
	)
	parser.add_argument(
		'-L', '--no-legacy-timestamps', dest='legacy_timestamps',
		help="Write each endpoint with its own minutes and fractional seconds.",
		action='store_false'
	)
	parser.add_argument(
		'-d', '--debug', dest='debug', action='store_true',
		help="Write a debug file and an energy plot."
	)
	parser.add_argument(
		'-q', '--quiet', dest='quiet', action='store_true',
		help="Only print warnings."
	)
	parser.set_defaults(legacy_timestamps=None)
	parser.set_defaults(debug=False)
	parser.set_defaults(quiet=False)
	args = parser.parse_args(argv)
	return args

#============================================

def resolve_settings(args: argparse.Namespace) -> dict:
	"""
	Load the config file and apply command-line overrides.

	Args:
		args: Parsed arguments.

	Returns:
		dict: Final settings.
	"""
	config_path = args.config_file
	if config_path is None:
		config_path = config.default_config_path(args.input_file)
	if not os.path.exists(config_path):
		config.write_config_file(config_path, config.default_config())
		utils.echo(f"Wrote default config: {config_path}")
	data = config.load_config(config_path)
	settings = config.build_settings(data, config_path)
	if args.threshold is not None:
		settings['threshold'] = args.threshold
	if args.audio_stream is not None:
		settings['audio_stream'] = args.audio_stream
	if args.report_format is not None:
		settings['report_format'] = args.report_format
	if args.legacy_timestamps is not None:
		settings['legacy_timestamps'] = args.legacy_timestamps
	config.validate_settings(settings)
	settings['output_file'] = args.output_file
	if settings['output_file'] is None:
		settings['output_file'] = config.default_output_path(args.input_file,
			settings['report_format'])
	return settings

#============================================

def make_sink(settings: dict, input_file: str):
	if settings['report_format'] == 'yaml':
		if settings['legacy_timestamps']:
			utils.warn("legacy timestamps only apply to the text report, ignored for yaml")
		return report.YamlReportWriter(settings['output_file'], input_file,
			settings['threshold'])
	return report.TextReportWriter(settings['output_file'],
		legacy=settings['legacy_timestamps'])

#============================================

def build_debug_report(input_file: str, settings: dict, stats: dict) -> str:
	lines = []
	lines.append(f"input_file: {input_file}")
	lines.append(f"threshold: {stats['threshold']}")
	lines.append(f"audio_stream: {settings['audio_stream']}")
	lines.append("")
	lines.append("silence_scan:")
	lines.append(f"frame_count: {stats['frame_count']}")
	lines.append(f"silent_frames: {stats['silent_frames']}")
	lines.append(f"silent_pct: {stats['silent_pct']:.2f}")
	lines.append(f"interval_count: {stats['interval_count']}")
	lines.append(f"silence_total: {stats['silence_total']:.3f}")
	lines.append(f"duration: {stats['duration']:.3f}")
	if stats['decode_error'] is not None:
		lines.append(f"decode_error: {stats['decode_error']}")
	lines.append("")
	return "\n".join(lines)

#============================================

def print_summary(input_file: str, output_file: str, stats: dict,
	debug_file: str = None, debug_plot: str = None) -> None:
	"""
	Print a human-readable summary.

	Args:
		input_file: Input file path.
		output_file: Report path.
		stats: Scan statistics.
	"""
	duration = stats['duration']
	silence_pct = 0.0
	if duration > 0:
		silence_pct = (stats['silence_total'] / duration) * 100.0
	utils.echo("")
	utils.echo("Hermes Summary")
	utils.echo(f"Input: {input_file}")
	utils.echo(f"Duration: {timecode.format_timestamp(duration)} ({duration:.3f}s)")
	utils.echo(f"Frames: {stats['frame_count']} ({stats['silent_frames']} silent)")
	utils.echo(f"Silence: {timecode.format_timestamp(stats['silence_total'])} "
		f"({silence_pct:.2f}%)")
	utils.echo(f"Silent ranges: {stats['interval_count']}")
	utils.echo(f"Threshold: {stats['threshold']}")
	if debug_file is not None:
		utils.echo(f"Debug file: {debug_file}")
	if debug_plot is not None:
		utils.echo(f"Debug plot: {debug_plot}")
	utils.echo(f"Silent times have been saved to '{output_file}'.")
	return

#============================================

def run(argv: list = None) -> dict:
	"""
	Scan the input file and write the report.

	Returns:
		dict: Scan statistics.
	"""
	args = parse_args(argv)
	utils.set_quiet_mode(args.quiet)
	ensure_media_file(args.input_file)
	settings = resolve_settings(args)
	tracker = SilenceIntervalTracker(settings['threshold'])
	with AudioDecoder(args.input_file, settings['audio_stream']) as decoder:
		with make_sink(settings, args.input_file) as sink:
			stats = scanner.scan_decoder(decoder, tracker, sink,
				include_series=args.debug)
			if isinstance(sink, report.YamlReportWriter):
				sink.duration = stats['duration']
	debug_file = None
	plot_file = None
	if args.debug:
		debug_file = config.default_debug_path(args.input_file)
		plot_file = config.default_plot_path(args.input_file)
		report.write_text_report(debug_file,
			build_debug_report(args.input_file, settings, stats))
		report.write_energy_plot(plot_file, stats['times'], stats['energies'],
			settings['threshold'])
	print_summary(args.input_file, settings['output_file'], stats,
		debug_file, plot_file)
	return stats

#============================================

def main() -> None:
	"""
	Main entry point.
	"""
	run()
	return

#============================================

if __name__ == '__main__':
	main()
