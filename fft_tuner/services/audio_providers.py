import soundfile as sf
import numpy as np
import threading
from typing import List, Optional

from fft_tuner.audio.pipeline import PitchDetectionPipeline
from fft_tuner.core.config import ConfigurationError
from fft_tuner.core.interfaces import IAudioHost
from fft_tuner.logging_config import get_logger
from fft_tuner.note_types import DetectionResult

logger = get_logger(__name__)


class WavFileHost(IAudioHost):
    """Feeds a WAV file through the pipeline block by block."""

    def __init__(
        self,
        pipeline: PitchDetectionPipeline,
        file_path: str,
        output_path: Optional[str] = None,
        realtime: bool = False,
    ):
        self._pipeline = pipeline
        self._file_path = file_path
        self._output_path = output_path
        self._realtime = realtime
        self._is_running = False
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.results: List[DetectionResult] = []

        config = pipeline.config
        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate
            self._channels = f.channels

        if self._sample_rate != config.sample_rate:
            raise ConfigurationError(
                f"{file_path} is sampled at {self._sample_rate} Hz, "
                f"pipeline expects {config.sample_rate} Hz"
            )

        self._stereo_size = config.stereo_block_size
        self._frames = self._stereo_size // 2
        self._stereo_in = np.zeros(self._stereo_size, dtype=np.int16)
        self._stereo_out = np.zeros(self._stereo_size, dtype=np.int16)

    @property
    def channels(self) -> int:
        return self._channels

    def _to_stereo(self, data: np.ndarray) -> np.ndarray:
        """Map any channel layout onto two channels."""
        if data.shape[1] == 1:
            return np.repeat(data, 2, axis=1)
        return data[:, :2]

    def run(self) -> List[DetectionResult]:
        """Process the whole file on the calling thread.

        Returns:
            One detection result per block
        """
        self._stop_event.clear()
        self._is_running = True
        return self._process_file()

    def _process_file(self) -> List[DetectionResult]:
        self.results = []
        writer = None
        try:
            if self._output_path:
                writer = sf.SoundFile(
                    self._output_path,
                    "w",
                    samplerate=self._sample_rate,
                    channels=2,
                    subtype="PCM_16",
                )

            with sf.SoundFile(self._file_path) as f:
                while not self._stop_event.is_set():
                    data = f.read(self._frames, dtype="int16", always_2d=True)
                    if len(data) == 0:
                        break

                    frames_read = len(data)
                    # Last block is zero padded to a full block
                    self._stereo_in[:] = 0
                    self._stereo_in[: 2 * frames_read] = self._to_stereo(data).reshape(-1)

                    result = self._pipeline.process(
                        self._stereo_in, self._stereo_out, self._stereo_size
                    )
                    self.results.append(result)

                    if writer is not None:
                        writer.write(self._stereo_out[: 2 * frames_read].reshape(-1, 2))

                    if self._realtime:
                        # Wakes early when stop() is called
                        self._stop_event.wait(self._frames / self._sample_rate)
        finally:
            if writer is not None:
                writer.close()
            self._is_running = False

        logger.info(f"Processed {len(self.results)} blocks from {self._file_path}")
        return self.results

    def start(self) -> bool:
        if self._is_running:
            logger.warning("WAV host already running")
            return False

        # Only start() clears the stop request, so a stop() issued before the
        # worker gets scheduled still holds
        self._stop_event.clear()
        self._is_running = True
        self._thread = threading.Thread(target=self._run_in_thread, daemon=True)
        self._thread.start()
        return True

    def _run_in_thread(self) -> None:
        try:
            self._process_file()
        except Exception as e:
            logger.error(f"Error streaming WAV file: {e}", exc_info=True)
            self._is_running = False

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
        self._is_running = False

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until a background run has finished."""
        if self._thread:
            self._thread.join(timeout)

    def is_running(self) -> bool:
        return self._is_running
