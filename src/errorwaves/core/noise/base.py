from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

import numpy as np


@dataclass(frozen=True)
class NoiseParams:
    """Parameters required to build a deterministic coherent-noise source."""

    type: str
    seed: int


class NoiseModel:
    """
    Coherent noise source in the range [0, 1].

    Subclasses implement ``sample_array``; scalar sampling goes through the
    same code path so both forms agree exactly.
    """

    def __init__(self, params: NoiseParams):
        self.params = params

    def sample_array(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def sample(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        arr = self.sample_array(
            np.asarray([x], dtype=np.float64),
            np.asarray([y], dtype=np.float64),
            np.asarray([z], dtype=np.float64),
        )
        return float(arr[0])

    def __call__(self, x, y=0.0, z=0.0):
        if np.ndim(x) == 0 and np.ndim(y) == 0 and np.ndim(z) == 0:
            return self.sample(float(x), float(y), float(z))
        xa, ya, za = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )
        flat = self.sample_array(xa.ravel(), ya.ravel(), za.ravel())
        return flat.reshape(xa.shape)


NoiseFactory = Callable[[NoiseParams], NoiseModel]

NOISE_REGISTRY: Dict[str, NoiseFactory] = {}


def register_noise_model(name: str, factory: NoiseFactory):
    NOISE_REGISTRY[name] = factory


def get_noise_model(params: NoiseParams) -> NoiseModel:
    if params.type not in NOISE_REGISTRY:
        raise ValueError(f"Unknown noise model '{params.type}'. Available: {list_noise_models()}")
    return NOISE_REGISTRY[params.type](params)


def list_noise_models() -> List[str]:
    return sorted(NOISE_REGISTRY.keys())
