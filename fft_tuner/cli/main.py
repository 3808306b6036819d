"""Main entry point for the FFT Tuner CLI."""

import sys
import time
import argparse
from typing import List, Optional

import soundfile as sf

from ..logging_config import get_logger, setup_logging
from ..core.config import NO_SIGNAL_MESSAGE, ConfigManager, ConfigurationError
from ..core.factory import ComponentFactory
from ..services.frequency import PitchClassMapper

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fft-tuner", description="FFT Tuner - monophonic note detection"
    )
    parser.add_argument(
        "--sample-rate",
        type=int,
        default=None,
        help="Audio sample rate in Hz (default: 16000)",
    )
    parser.add_argument(
        "--fft-size",
        type=int,
        default=None,
        help="Transform size, a power of two (default: 4096)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    note_parser = subparsers.add_parser("note", help="Print the note for each frequency")
    note_parser.add_argument("frequencies", type=float, nargs="+", help="Frequencies in Hz")

    file_parser = subparsers.add_parser("file", help="Detect notes in a WAV file")
    file_parser.add_argument("path", help="WAV file sampled at the configured rate")
    file_parser.add_argument(
        "--output", default=None, help="Write the pass-through audio to this WAV file"
    )
    file_parser.add_argument(
        "--realtime", action="store_true", help="Pace blocks at the audio rate"
    )

    live_parser = subparsers.add_parser("live", help="Detect notes from an audio device")
    live_parser.add_argument("--device", type=int, default=None, help="Audio device ID")
    live_parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Stop after this many seconds (default: run until Ctrl+C)",
    )

    subparsers.add_parser("devices", help="List audio devices")

    return parser


def build_config_manager(args: argparse.Namespace) -> ConfigManager:
    """Apply command line overrides to the pipeline configuration."""
    pipeline = {}
    if args.sample_rate is not None:
        pipeline["sample_rate"] = args.sample_rate
    if args.fft_size is not None:
        # One transform per half of the double buffer
        pipeline["fft_size"] = args.fft_size
        pipeline["double_buffer_size"] = 4 * args.fft_size
    return ConfigManager({"pipeline": pipeline})


def run_note(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    mapper = PitchClassMapper.from_config(config_manager.tuner_config())
    for frequency in args.frequencies:
        note = mapper.frequency_to_note(frequency)
        print(f"{frequency:g} Hz: {note if note is not None else NO_SIGNAL_MESSAGE}")
    return 0


def run_file(args: argparse.Namespace, factory: ComponentFactory) -> int:
    display = factory.create_display("console", single_line=False)
    pipeline = factory.create_pipeline(display=display)
    try:
        host = factory.create_host(
            "wav",
            pipeline=pipeline,
            file_path=args.path,
            output_path=args.output,
            realtime=args.realtime,
        )
        results = host.run()
    except (OSError, sf.SoundFileError) as e:
        logger.error(f"Could not process {args.path}: {e}")
        return 1

    detected = [r for r in results if r.has_signal]
    logger.info(f"{len(detected)}/{len(results)} blocks contained a note")
    return 0


def run_live(args: argparse.Namespace, factory: ComponentFactory) -> int:
    display = factory.create_display("console", changes_only=True)
    pipeline = factory.create_pipeline(display=display)
    host = factory.create_host("sounddevice", pipeline=pipeline, device=args.device)

    if not host.start():
        logger.error("Failed to start audio host")
        return 1

    start_time = time.time()
    try:
        while args.duration is None or time.time() - start_time < args.duration:
            time.sleep(0.1)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    finally:
        host.stop()
        display.close()
    return 0


def run_devices() -> int:
    from ..services.live_audio import list_devices

    for device in list_devices():
        print(f"Device {device['index']}: {device['name']}")
        print(f"  Max input channels: {device['max_input_channels']}")
        print(f"  Max output channels: {device['max_output_channels']}")
        print(f"  Default sample rate: {device['default_samplerate']} Hz")
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    setup_logging("DEBUG" if parsed_args.debug else None)

    try:
        config_manager = build_config_manager(parsed_args)
        factory = ComponentFactory(config_manager)

        if parsed_args.command == "note":
            return run_note(parsed_args, config_manager)
        elif parsed_args.command == "file":
            return run_file(parsed_args, factory)
        elif parsed_args.command == "live":
            return run_live(parsed_args, factory)
        elif parsed_args.command == "devices":
            return run_devices()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
