"""Full-duplex audio host backed by sounddevice."""

from __future__ import annotations
import numpy as np
import sounddevice as sd
from typing import Any, Dict, List, Optional

from ..logging_config import get_logger
from ..audio.pipeline import PitchDetectionPipeline
from ..core.config import ConfigurationError
from ..core.interfaces import IAudioHost

logger = get_logger(__name__)


class SoundDeviceHost(IAudioHost):
    """Runs the pipeline from a sounddevice stream callback.

    The stream delivers int16 stereo frames; each callback hands exactly one
    block to the pipeline and plays back the pass-through signal.
    """

    CHANNELS = 2

    def __init__(
        self,
        pipeline: PitchDetectionPipeline,
        device: Optional[Any] = None,
    ) -> None:
        """Initialize the host.

        Args:
            pipeline: Pipeline that processes every block
            device: sounddevice device ID or (input, output) pair, or None for defaults
        """
        self._pipeline = pipeline
        self._device = device
        self._stream: Optional[sd.Stream] = None
        self._running = False

        config = pipeline.config
        self._sample_rate = config.sample_rate
        self._stereo_size = config.stereo_block_size
        self._frames = self._stereo_size // 2

        check_device(self._input_device(), self._sample_rate)

    def _input_device(self):
        if isinstance(self._device, (list, tuple)):
            return self._device[0]
        return self._device

    def _audio_callback(
        self,
        indata: np.ndarray,
        outdata: np.ndarray,
        frames: int,
        _time_info,
        status: sd.CallbackFlags,
    ) -> None:
        """Process one block.

        Note:
            This is called from the audio thread; the pipeline is only ever
            touched from here while the stream runs.
        """
        if status:
            # Overruns and underruns are reported, not recovered
            logger.warning(f"Audio callback status: {status}")

        if frames != self._frames:
            logger.warning(f"Dropping block of {frames} frames, expected {self._frames}")
            outdata.fill(0)
            return

        # C-contiguous (frames, 2) buffers flatten to interleaved views
        self._pipeline.process(
            indata.reshape(-1), outdata.reshape(-1), self._stereo_size
        )

    def start(self) -> bool:
        """Open and start the duplex stream.

        Returns:
            True if started successfully, False otherwise
        """
        if self._running:
            logger.warning("Audio host already running")
            return False

        try:
            self._stream = sd.Stream(
                device=self._device,
                samplerate=self._sample_rate,
                blocksize=self._frames,
                channels=self.CHANNELS,
                dtype="int16",
                callback=self._audio_callback,
            )
            self._stream.start()
        except Exception as e:
            logger.error(f"Could not start audio stream: {e}")
            if self._stream:
                self._stream.close()
                self._stream = None
            return False

        self._running = True
        logger.info(
            f"Audio host started: device={self._device}, rate={self._sample_rate}Hz, "
            f"block={self._frames} frames ({self._pipeline.config.block_period:.3f}s)"
        )
        return True

    def stop(self) -> None:
        """Stop and close the stream."""
        if not self._running:
            return

        try:
            if self._stream:
                self._stream.stop()
                self._stream.close()
                self._stream = None
            logger.info("Audio host stopped")
        finally:
            self._running = False

    def is_running(self) -> bool:
        return self._running


def list_devices() -> List[Dict[str, Any]]:
    """Describe every audio device sounddevice can see."""
    return [dict(device, index=i) for i, device in enumerate(sd.query_devices())]


def check_device(device: Optional[int], sample_rate: int) -> None:
    """Raise ConfigurationError if the device cannot capture int16 stereo at sample_rate."""
    try:
        sd.check_input_settings(
            device=device,
            channels=SoundDeviceHost.CHANNELS,
            dtype="int16",
            samplerate=sample_rate,
        )
    except Exception as e:
        raise ConfigurationError(
            f"Device {device} cannot run at {sample_rate} Hz: {e}"
        ) from e
