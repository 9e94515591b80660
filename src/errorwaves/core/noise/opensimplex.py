from __future__ import annotations

import numpy as np
from opensimplex import OpenSimplex

from .base import NoiseModel, NoiseParams, register_noise_model


class OpenSimplexNoise(NoiseModel):
    """
    Deterministic 3D OpenSimplex noise, rescaled to [0, 1].

    Identical seeds yield identical samples.
    """

    def __init__(self, params: NoiseParams):
        super().__init__(params)
        self._noise = OpenSimplex(seed=int(params.seed))

    def sample_array(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        out = np.empty(len(x), dtype=np.float64)
        for i in range(len(x)):
            out[i] = self._noise.noise3(float(x[i]), float(y[i]), float(z[i]))
        return np.clip((out + 1.0) * 0.5, 0.0, 1.0)


register_noise_model("opensimplex", OpenSimplexNoise)
