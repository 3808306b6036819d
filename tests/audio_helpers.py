import numpy as np
import soundfile as sf

SAMPLE_RATE = 16000


def write_tone(path, frequency, frames, channels=2, sample_rate=SAMPLE_RATE):
    """Write an int16 sine WAV with identical channels."""
    n = np.arange(frames)
    tone = np.round(8000 * np.sin(2 * np.pi * frequency * n / sample_rate)).astype(np.int16)
    data = np.column_stack([tone] * channels) if channels > 1 else tone
    sf.write(str(path), data, sample_rate, subtype="PCM_16")
    return data
