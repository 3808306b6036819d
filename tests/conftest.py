import pytest

from audio_helpers import write_tone


@pytest.fixture
def tone_file(tmp_path):
    """Two full 4096-frame blocks of A4 plus a partial block."""
    path = tmp_path / "a4.wav"
    data = write_tone(path, 440.0, 2 * 4096 + 1000)
    return path, data
