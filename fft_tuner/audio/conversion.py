"""Stereo/mono buffer conversion used around the detection pipeline."""

import numpy as np

INT16_MIN = np.iinfo(np.int16).min
INT16_MAX = np.iinfo(np.int16).max


def stereo_int16_to_mono_float(
    stereo: np.ndarray, mono: np.ndarray, stereo_size: int
) -> None:
    """Average interleaved left/right int16 samples into a float mono buffer.

    Args:
        stereo: Interleaved samples L0, R0, L1, R1, ...
        mono: Output buffer with room for stereo_size // 2 samples
        stereo_size: Number of int16 values to read from stereo
    """
    frames = stereo_size // 2
    left = stereo[0:stereo_size:2]
    right = stereo[1:stereo_size:2]
    np.add(left, right, out=mono[:frames], dtype=mono.dtype)
    mono[:frames] *= 0.5


def mono_float_to_stereo_int16(
    mono: np.ndarray, stereo: np.ndarray, mono_size: int
) -> None:
    """Write a float mono buffer to both channels of an interleaved int16 buffer.

    Samples are rounded and clipped to the int16 range.
    """
    samples = np.clip(np.rint(mono[:mono_size]), INT16_MIN, INT16_MAX).astype(np.int16)
    stereo[0 : 2 * mono_size : 2] = samples
    stereo[1 : 2 * mono_size : 2] = samples
