import threading
import time

import numpy as np
import pytest
import soundfile as sf

from fft_tuner.audio.pipeline import PitchDetectionPipeline
from fft_tuner.core.config import ConfigurationError, TunerConfig
from fft_tuner.mock_display import MockDisplay
from fft_tuner.services.audio_providers import WavFileHost

from audio_helpers import write_tone


@pytest.fixture
def display():
    return MockDisplay()


@pytest.fixture
def pipeline(display):
    return PitchDetectionPipeline(TunerConfig(), display=display)


def test_run_processes_every_block(pipeline, display, tone_file):
    path, _ = tone_file
    host = WavFileHost(pipeline, str(path))

    results = host.run()

    assert len(results) == 3
    assert [r.text for r in results[:2]] == ["A4", "A4"]
    assert len(display.texts) == 3
    assert not host.is_running()


def test_pass_through_written_to_output(pipeline, tone_file, tmp_path):
    path, data = tone_file
    output = tmp_path / "out.wav"
    host = WavFileHost(pipeline, str(path), output_path=str(output))

    host.run()

    written, rate = sf.read(str(output), dtype="int16", always_2d=True)
    assert rate == 16000
    assert written.shape == data.shape
    np.testing.assert_array_equal(written, data)


def test_mono_file_is_duplicated_to_stereo(pipeline, tmp_path):
    path = tmp_path / "mono.wav"
    write_tone(path, 220.0, 4096, channels=1)
    host = WavFileHost(pipeline, str(path))

    results = host.run()

    assert host.channels == 1
    assert [r.text for r in results] == ["A3"]


def test_sample_rate_mismatch_rejected(pipeline, tmp_path):
    path = tmp_path / "cd.wav"
    write_tone(path, 440.0, 4096, sample_rate=44100)
    with pytest.raises(ConfigurationError):
        WavFileHost(pipeline, str(path))


def test_background_run(pipeline, display, tone_file):
    path, _ = tone_file
    host = WavFileHost(pipeline, str(path))

    assert host.start()
    host.wait(timeout=10)

    assert not host.is_running()
    assert len(host.results) == 3
    host.stop()


def test_stop_before_worker_begins_processes_nothing(pipeline, display, tone_file):
    path, _ = tone_file
    host = WavFileHost(pipeline, str(path), realtime=True)

    # Hold the worker until stop() has been requested
    release = threading.Event()
    process_file = host._process_file

    def held_process_file():
        release.wait(5)
        return process_file()

    host._process_file = held_process_file

    assert host.start()
    stopper = threading.Thread(target=host.stop)
    stopper.start()
    assert host._stop_event.wait(5)
    release.set()
    stopper.join(5)

    assert not stopper.is_alive()
    assert host.results == []
    assert display.texts == []
    assert not host.is_running()


def test_stop_interrupts_realtime_run(pipeline, tone_file):
    path, _ = tone_file
    host = WavFileHost(pipeline, str(path), realtime=True)

    assert host.start()
    started = time.monotonic()
    host.stop()

    # A full paced run takes three block periods (about 0.77 s)
    assert time.monotonic() - started < 0.5
    assert len(host.results) < 3
    assert not host.is_running()


def test_run_after_stop_processes_whole_file(pipeline, tone_file):
    path, _ = tone_file
    host = WavFileHost(pipeline, str(path))
    host.stop()

    assert len(host.run()) == 3
