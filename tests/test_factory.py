import unittest

from fft_tuner.audio.pipeline import PitchDetectionPipeline
from fft_tuner.core.config import ConfigManager
from fft_tuner.core.factory import ComponentFactory
from fft_tuner.mock_display import MockDisplay
from fft_tuner.services.audio_providers import WavFileHost
from fft_tuner.ui.console import ConsoleDisplay

from audio_helpers import write_tone


class TestComponentFactory(unittest.TestCase):
    def test_create_displays(self):
        factory = ComponentFactory()
        self.assertIsInstance(factory.create_display(), ConsoleDisplay)
        self.assertIsInstance(factory.create_display("mock"), MockDisplay)
        with self.assertRaises(ValueError):
            factory.create_display("pygame")

    def test_create_pipeline_uses_configuration(self):
        factory = ComponentFactory(ConfigManager({"pipeline": {"sample_rate": 44100}}))
        display = MockDisplay()
        pipeline = factory.create_pipeline(display=display)
        self.assertIsInstance(pipeline, PitchDetectionPipeline)
        self.assertEqual(pipeline.config.sample_rate, 44100)
        self.assertAlmostEqual(pipeline.frequency_axis.bin_width, 44100 / 4096)

    def test_unknown_host(self):
        with self.assertRaises(ValueError):
            ComponentFactory().create_host("jack")


def test_create_wav_host(tmp_path):
    path = tmp_path / "tone.wav"
    write_tone(path, 440.0, 4096)
    factory = ComponentFactory()
    display = factory.create_display("mock")

    host = factory.create_host(
        "wav", pipeline=factory.create_pipeline(display=display), file_path=str(path)
    )

    assert isinstance(host, WavFileHost)
    host.run()
    assert display.texts == ["A4"]


if __name__ == "__main__":
    unittest.main()
