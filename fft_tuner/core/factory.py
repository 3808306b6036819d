"""Factory for creating FFT Tuner components."""

from typing import Callable, Dict, Optional, Type

from ..logging_config import get_logger
from ..audio.pipeline import PitchDetectionPipeline
from ..mock_display import MockDisplay
from ..ui.console import ConsoleDisplay
from .config import ConfigManager
from .interfaces import IAudioHost, IDisplay

logger = get_logger(__name__)


def _wav_host_class() -> Type[IAudioHost]:
    from ..services.audio_providers import WavFileHost

    return WavFileHost


def _sounddevice_host_class() -> Type[IAudioHost]:
    # sounddevice loads PortAudio on import, so only pull it in when asked
    from ..services.live_audio import SoundDeviceHost

    return SoundDeviceHost


class ComponentFactory:
    """Factory for creating FFT Tuner components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
        """
        self.config_manager = config_manager or ConfigManager()

        # Register default component implementations
        self.display_classes: Dict[str, Type[IDisplay]] = {
            "console": ConsoleDisplay,
            "mock": MockDisplay,
        }

        self.host_loaders: Dict[str, Callable[[], Type[IAudioHost]]] = {
            "wav": _wav_host_class,
            "sounddevice": _sounddevice_host_class,
        }

    def create_display(self, implementation: str = "console", **kwargs) -> IDisplay:
        """Create a display.

        Args:
            implementation: Name of the implementation to use
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Display instance

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.display_classes:
            raise ValueError(f"Unknown display implementation: {implementation}")

        instance = self.display_classes[implementation](**kwargs)
        logger.debug(f"Created display: {implementation}")
        return instance

    def create_pipeline(
        self, display: Optional[IDisplay] = None
    ) -> PitchDetectionPipeline:
        """Create a pitch detection pipeline from the pipeline configuration.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = self.config_manager.tuner_config()
        return PitchDetectionPipeline(config=config, display=display)

    def create_host(
        self,
        implementation: str,
        pipeline: Optional[PitchDetectionPipeline] = None,
        **kwargs,
    ) -> IAudioHost:
        """Create an audio host that drives a pipeline.

        Args:
            implementation: "wav" or "sounddevice"
            pipeline: Pipeline to drive, or None to create one with a console display
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Audio host instance

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.host_loaders:
            raise ValueError(f"Unknown audio host implementation: {implementation}")

        if pipeline is None:
            pipeline = self.create_pipeline(display=self.create_display())

        # Host defaults, overridden by explicit parameters
        host_config = self.config_manager.get_config("audio_host")
        if implementation == "sounddevice":
            kwargs.setdefault("device", host_config["device"])
        else:
            kwargs.setdefault("realtime", host_config["realtime"])

        cls = self.host_loaders[implementation]()
        instance = cls(pipeline=pipeline, **kwargs)

        logger.info(f"Created audio host: {implementation}")
        return instance
