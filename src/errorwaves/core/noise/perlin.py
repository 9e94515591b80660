from __future__ import annotations

import hashlib
import numpy as np

from .base import NoiseModel, NoiseParams, register_noise_model


def _xorshift64(seed: int) -> int:
    x = seed & 0xFFFFFFFFFFFFFFFF
    x ^= (x << 13) & 0xFFFFFFFFFFFFFFFF
    x ^= (x >> 7) & 0xFFFFFFFFFFFFFFFF
    x ^= (x << 17) & 0xFFFFFFFFFFFFFFFF
    return x & 0xFFFFFFFFFFFFFFFF


def _perm_table(seed: int) -> np.ndarray:
    nums = list(range(256))
    # Fisher-Yates using xorshift RNG for determinism across Python versions
    rng_state = seed or 1
    for i in range(255, 0, -1):
        rng_state = _xorshift64(rng_state)
        j = rng_state % (i + 1)
        nums[i], nums[j] = nums[j], nums[i]
    p = np.array(nums + nums, dtype=np.int64)
    return p


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def _grad(h: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    # 12 edge directions of the unit cube, padded to 16
    h = h & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


def _perlin3(x: np.ndarray, y: np.ndarray, z: np.ndarray, p: np.ndarray) -> np.ndarray:
    x0 = np.floor(x)
    y0 = np.floor(y)
    z0 = np.floor(z)
    xi = x0.astype(np.int64) & 255
    yi = y0.astype(np.int64) & 255
    zi = z0.astype(np.int64) & 255
    xf = x - x0
    yf = y - y0
    zf = z - z0

    u = _fade(xf)
    v = _fade(yf)
    w = _fade(zf)

    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    x1 = _lerp(_grad(p[aa], xf, yf, zf), _grad(p[ba], xf - 1, yf, zf), u)
    x2 = _lerp(_grad(p[ab], xf, yf - 1, zf), _grad(p[bb], xf - 1, yf - 1, zf), u)
    y1 = _lerp(x1, x2, v)

    x1 = _lerp(_grad(p[aa + 1], xf, yf, zf - 1), _grad(p[ba + 1], xf - 1, yf, zf - 1), u)
    x2 = _lerp(_grad(p[ab + 1], xf, yf - 1, zf - 1), _grad(p[bb + 1], xf - 1, yf - 1, zf - 1), u)
    y2 = _lerp(x1, x2, v)

    return _lerp(y1, y2, w)


class PerlinNoise(NoiseModel):
    """
    Improved Perlin noise over three inputs, rescaled to [0, 1].

    The permutation table is shuffled from the seed, so identical seeds yield
    identical fields on every run.
    """

    def __init__(self, params: NoiseParams):
        super().__init__(params)
        seed_material = str(int(params.seed)).encode("utf-8")
        seed_int = int.from_bytes(hashlib.sha256(seed_material).digest()[:8], "big")
        self._perm = _perm_table(seed_int)

    def sample_array(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        raw = _perlin3(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
            self._perm,
        )
        return np.clip((raw + 1.0) * 0.5, 0.0, 1.0)


register_noise_model("perlin", PerlinNoise)
