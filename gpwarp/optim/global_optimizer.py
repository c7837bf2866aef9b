# gpwarp/optim/global_optimizer.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Energy landscapes over hyperparameter configurations.

A configuration is a dict ``{name: value}``. An energy landscape is the
list of ``(net_energy, configuration)`` pairs in exploration order.
Configurations come either from a Cartesian grid anchored at an initial
configuration or, when a prior covers every hyperparameter, from
independent prior draws. With a prior, the net energy is the system
energy plus ``-sum_k log p_k(config[k])``.

Classes
-------
SearchSettings
    Immutable search parameters.
GlobalOptimizer
    Abstract optimizer: grid construction, landscape evaluation and
    copy-on-set setters. Subclasses implement ``optimize``.
"""
import copy
import dataclasses
import itertools
import math
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType
from typing import Any, Mapping, Optional

import gpwarp.num as gnp
from gpwarp.config import get_logger
from gpwarp.errors import DomainError, GPWarpError, SearchCancelledError
from gpwarp.kernel.priors import prior_energy

_logger = get_logger()

_CANCELLED = object()


@dataclasses.dataclass(frozen=True)
class SearchSettings:
    """Parameters of a landscape search.

    Attributes
    ----------
    step : float
        Grid step, in parameter units (linear) or in log units (log scale).
    grid_size : int
        Candidate values per hyperparameter.
    log_scale : bool
        Candidates ``v / exp((i+1)*step)`` instead of ``v - (i+1)*step``.
    num_samples : int
        Number of prior draws in prior mode.
    prior : mapping
        ``{name: prior}``; each prior has ``logpdf(value)`` and either
        ``rvs(random_state=rng)`` or a zero-argument ``sample()``.
    on_failure : str
        "inf" records ``+inf`` for a configuration whose evaluation fails,
        "raise" propagates the error.
    grid_warning_threshold : int
        Grids larger than this are logged as a warning.
    n_workers : int
        Threads used to evaluate the landscape. Each task uses its own
        deep copy of the system.
    deadline : float or None
        Time budget in seconds for one sweep.
    """

    step: float = 0.3
    grid_size: int = 3
    log_scale: bool = False
    num_samples: int = 20
    prior: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    on_failure: str = "inf"
    grid_warning_threshold: int = 10000
    n_workers: int = 1
    deadline: Optional[float] = None

    def __post_init__(self):
        if not math.isfinite(self.step):
            raise ValueError(f"step must be finite, got {self.step}")
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {self.grid_size}")
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be >= 1, got {self.num_samples}")
        if self.on_failure not in ("inf", "raise"):
            raise ValueError("on_failure must be 'inf' or 'raise'")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        if self.deadline is not None and self.deadline < 0:
            raise ValueError("deadline must be nonnegative")
        object.__setattr__(self, "prior", MappingProxyType(dict(self.prior)))


def _sample_prior(prior, rng):
    if hasattr(prior, "rvs"):
        return float(prior.rvs(random_state=rng))
    return float(prior.sample())


class GlobalOptimizer(ABC):
    """Search the configuration space of a system exposing ``energy``.

    Parameters
    ----------
    system : GloballyOptimizable
        Anything with ``energy(configuration, options) -> float``.
    settings : SearchSettings, optional

    Notes
    -----
    The setters never modify an optimizer; they return a copy with
    updated settings:

    >>> opt = GridSearch(model).set_grid_size(5).set_step_size(0.1)
    """

    def __init__(self, system, settings: Optional[SearchSettings] = None):
        self.system = system
        self.settings = SearchSettings() if settings is None else settings

    def __repr__(self):
        return f"<{type(self).__name__} {self.settings}>"

    # ------------------------------------------------------------------
    # Copy-on-set configuration
    # ------------------------------------------------------------------
    def with_settings(self, **changes):
        new = copy.copy(self)
        new.settings = dataclasses.replace(self.settings, **changes)
        return new

    def set_prior(self, prior):
        return self.with_settings(prior=prior)

    def set_num_samples(self, n):
        return self.with_settings(num_samples=int(n))

    def set_log_scale(self, log_scale):
        return self.with_settings(log_scale=bool(log_scale))

    def set_grid_size(self, size):
        return self.with_settings(grid_size=int(size))

    def set_step_size(self, step):
        return self.with_settings(step=float(step))

    # ------------------------------------------------------------------
    # Configurations
    # ------------------------------------------------------------------
    def _axis(self, name, value):
        s = self.settings
        if s.log_scale:
            if not value > 0.0:
                raise DomainError(
                    f"Logarithmic grid needs a positive anchor; {name} = {value}"
                )
            return [value / math.exp((i + 1) * s.step) for i in range(s.grid_size)]
        return [value - (i + 1) * s.step for i in range(s.grid_size)]

    def build_grid(self, initial_config):
        """Cartesian grid anchored at ``initial_config``.

        Each key gets ``grid_size`` candidates; the grid is their product
        in key order and has ``grid_size ** len(initial_config)`` points.
        An empty configuration gives the single trivial point ``{}``.

        Raises
        ------
        DomainError
            On a logarithmic scale with a non-positive initial value.
        """
        keys = list(initial_config)
        if not keys:
            return [{}]
        axes = [self._axis(k, float(initial_config[k])) for k in keys]
        npoints = self.settings.grid_size ** len(keys)
        if npoints > self.settings.grid_warning_threshold:
            _logger.warning(
                "Grid has %d points (%d values for each of %d hyperparameters)",
                npoints,
                self.settings.grid_size,
                len(keys),
            )
        return [dict(zip(keys, values)) for values in itertools.product(*axes)]

    def uses_prior(self, initial_config, prior=None):
        """Whether ``prior`` covers every key of a non-empty ``initial_config``."""
        prior = self.settings.prior if prior is None else prior
        keys = list(initial_config)
        return bool(keys) and bool(prior) and all(k in prior for k in keys)

    def sample_configurations(self, initial_config, prior=None, rng=None):
        """``num_samples`` independent draws from the product prior."""
        prior = self.settings.prior if prior is None else prior
        rng = gnp.get_rng() if rng is None else rng
        keys = list(initial_config)
        return [
            {k: _sample_prior(prior[k], rng) for k in keys}
            for _ in range(self.settings.num_samples)
        ]

    # ------------------------------------------------------------------
    # Landscape
    # ------------------------------------------------------------------
    def compute_landscape(
        self, initial_config, options=None, prior=None, cancel_token=None
    ):
        """Evaluate the system over the grid or over prior draws.

        Parameters
        ----------
        initial_config : dict
        options : dict of str, optional
            Passed to ``system.energy``.
        prior : mapping, optional
            Overrides ``settings.prior``. Prior mode is used only when
            it covers every key; otherwise the grid is used.
        cancel_token : threading.Event, optional
            Checked before each evaluation.

        Returns
        -------
        list of (float, dict)
            ``(net_energy, configuration)`` in exploration order.

        Raises
        ------
        SearchCancelledError
            When ``cancel_token`` is set or ``settings.deadline`` expires;
            ``.landscape`` holds the points evaluated so far.
        """
        prior = self.settings.prior if prior is None else prior
        if self.uses_prior(initial_config, prior):
            configs = self.sample_configurations(initial_config, prior)
            active_prior = prior
        else:
            if prior:
                _logger.debug(
                    "Prior does not cover %s; using the grid",
                    [k for k in initial_config if k not in prior],
                )
            configs = self.build_grid(initial_config)
            active_prior = None

        deadline = (
            None
            if self.settings.deadline is None
            else time.monotonic() + self.settings.deadline
        )

        if self.settings.n_workers == 1:
            landscape = []
            for config in configs:
                reason = _stop_reason(cancel_token, deadline)
                if reason:
                    raise SearchCancelledError(
                        f"Landscape sweep {reason} after {len(landscape)} of "
                        f"{len(configs)} configurations",
                        landscape,
                    )
                landscape.append(
                    self._evaluate(self.system, config, options, active_prior)
                )
            return landscape

        def task(config):
            if _stop_reason(cancel_token, deadline):
                return _CANCELLED
            system = copy.deepcopy(self.system)
            return self._evaluate(system, config, options, active_prior)

        with ThreadPoolExecutor(max_workers=self.settings.n_workers) as pool:
            results = list(pool.map(task, configs))

        landscape = []
        for result in results:
            if result is _CANCELLED:
                raise SearchCancelledError(
                    f"Landscape sweep {_stop_reason(cancel_token, deadline) or 'stopped'} "
                    f"after {len(landscape)} of {len(configs)} configurations",
                    landscape,
                )
            landscape.append(result)
        return landscape

    def _evaluate(self, system, config, options, prior):
        _logger.info("Evaluating Configuration:\n%s", self.pretty_print(config))
        try:
            energy = float(system.energy(config, options))
        except (GPWarpError, gnp.LinAlgError) as exc:
            if self.settings.on_failure == "raise":
                raise
            _logger.warning(
                "Energy evaluation failed (%s: %s); recorded as +inf",
                type(exc).__name__,
                exc,
            )
            energy = math.inf
        _logger.info("Energy = %s", energy)
        if prior is None:
            return energy, dict(config)
        penalty = prior_energy(prior, config)
        net_energy = energy + penalty
        _logger.info("Energy due to Prior = %s", penalty)
        _logger.info("Net Energy = %s", net_energy)
        return net_energy, dict(config)

    @abstractmethod
    def optimize(self, initial_config, options=None):
        """Return ``(system, best_configuration)``."""

    @staticmethod
    def pretty_print(configuration):
        """One `` name = value`` line per hyperparameter."""
        return "".join(f" {k} = {v:4f}\n" for k, v in configuration.items())


def _stop_reason(cancel_token, deadline):
    if cancel_token is not None and cancel_token.is_set():
        return "cancelled"
    if deadline is not None and time.monotonic() > deadline:
        return "timed out"
    return None
