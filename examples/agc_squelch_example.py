#!/usr/bin/env python3
"""
AGC with Squelch Example

Runs the AGC over a tone burst buried in noise: silence, a raised-cosine
ramp up, a full-scale segment, a ramp down, and silence again. Prints the
signal level every few samples, marking samples where the squelch is
muting the output.
"""

import sys

import numpy as np

# Add src to path for development
sys.path.insert(0, '../src')

from sdr_agc import AGC
from sdr_agc.utils.conversions import linear_to_db


def make_burst(num_samples: int, noise_floor_db: float, seed: int = 0) -> np.ndarray:
    """Build the noisy tone burst test signal."""
    x = np.exp(1j * 2 * np.pi * 0.093 * np.arange(num_samples))

    n0 = num_samples // 6
    ramp = num_samples // 10
    n1 = num_samples // 3
    k = np.arange(ramp)
    envelope = np.concatenate([
        np.zeros(n0),
        0.5 - 0.5 * np.cos(np.pi * k / ramp),
        np.ones(n1),
        0.5 + 0.5 * np.cos(np.pi * k / ramp),
        np.zeros(num_samples - n0 - 2 * ramp - n1),
    ])

    rng = np.random.default_rng(seed)
    noise_std = 10 ** (noise_floor_db / 10) / np.sqrt(2)
    noise = noise_std * (rng.standard_normal(num_samples) + 1j * rng.standard_normal(num_samples))
    return x * envelope + noise


def main():
    """Main entry point."""
    target = 1.0          # target level
    noise_floor = -25.0   # noise floor [dB]
    bandwidth = 0.10      # agc loop bandwidth
    num_samples = 2048
    every = num_samples // 32  # print every n samples

    agc = AGC(target_level=target, bandwidth=bandwidth)
    agc.squelch_activate()
    agc.squelch_set_threshold(noise_floor + 5.0)
    agc.squelch_set_timeout(16)

    print(f"automatic gain control // target: {target:8.4f}, loop bandwidth: {bandwidth:4.2e}")

    x = make_burst(num_samples, noise_floor)
    history = agc.process_with_history(x)
    agc.destroy()

    rssi_db = linear_to_db(history.signal_level)
    for i in range(every - 1, num_samples, every):
        marker = "*" if history.squelch_muted[i] else " "
        print(f"{i + 1:4d}: {history.signal_level[i]:12.8f} {rssi_db[i]:8.2f} dB {marker}")

    muted = int(history.squelch_muted.sum())
    print()
    print(f"muted samples: {muted}/{num_samples}")
    print(f"final gain:    {history.gain[-1]:.4f}")
    print("done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
