# gpwarp/core/state.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Named, mutable hyperparameter state.

A :class:`HyperparameterState` is owned by one base model and shared by
reference with every process derived from it (refitted models, warped
processes). Setting a value through any of them is visible through all.
The key set is fixed at construction; the key order is the order in
which a vector of values is built.
"""
from collections.abc import MutableMapping
from typing import Dict, Iterable, List, Optional
import gpwarp.num as gnp


class HyperparameterState(MutableMapping):
    def __init__(self, values: Optional[Dict[str, float]] = None):
        self._values: Dict[str, float] = {}
        for name, value in (values or {}).items():
            self._values[str(name)] = float(value)

    @classmethod
    def from_vector(cls, names: Iterable[str], vector):
        names = list(names)
        vector = gnp.asarray(vector).reshape(-1)
        if len(names) != vector.shape[0]:
            raise ValueError(
                f"Got {len(names)} names for {vector.shape[0]} values"
            )
        return cls({n: float(v) for n, v in zip(names, vector)})

    def __getitem__(self, name: str) -> float:
        return self._values[name]

    def __setitem__(self, name: str, value: float) -> None:
        if name not in self._values:
            raise KeyError(f"Unknown hyperparameter {name!r}")
        self._values[name] = float(value)

    def __delitem__(self, name: str) -> None:
        raise TypeError("Hyperparameters cannot be removed")

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"HyperparameterState({self._values!r})"

    @property
    def names(self) -> List[str]:
        return list(self._values)

    def update(self, other=(), **kwargs):
        """Set several values at once; unknown names raise ``KeyError``."""
        items = dict(other, **kwargs)
        unknown = [k for k in items if k not in self._values]
        if unknown:
            raise KeyError(f"Unknown hyperparameters {unknown}")
        for k, v in items.items():
            self._values[k] = float(v)

    def as_dict(self) -> Dict[str, float]:
        """Snapshot (a copy) of the current values."""
        return dict(self._values)

    def to_vector(self):
        return gnp.array([self._values[n] for n in self._values])

    def set_vector(self, vector) -> None:
        vector = gnp.asarray(vector).reshape(-1)
        if vector.shape[0] != len(self._values):
            raise ValueError(
                f"Expected {len(self._values)} values, got {vector.shape[0]}"
            )
        for n, v in zip(list(self._values), vector):
            self._values[n] = float(v)
