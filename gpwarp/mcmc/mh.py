# gpwarp/mcmc/mh.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Single-chain random-walk Metropolis-Hastings sampler.

The chain is a pull-based iterator: nothing is computed until a sample
is requested. The first request runs the burn-in; every emitted sample
is then ``drop_count + 1`` steps after the previous one.

Example
-------
>>> from scipy import stats
>>> chain = GeneralMetropolisHastings(
...     lambda x: -0.5 * x**2, stats.norm(scale=0.5), init=0.0, burn_in=100
... )
>>> samples = chain.sample(1000)
"""
import math
from typing import Callable

import gpwarp.num as gnp
from gpwarp.config import get_logger
from .groups import RealGroup

_logger = get_logger()


class GeneralMetropolisHastings:
    """Random-walk Metropolis-Hastings over a state space with an addition.

    Parameters
    ----------
    log_likelihood : callable
        ``x -> float``, the unnormalized log target density.
    proposal : object or callable
        Step distribution. Either an object with
        ``rvs(random_state=rng)`` (e.g. a frozen ``scipy.stats``
        distribution) or a callable ``proposal(rng)``. It must be
        symmetric around zero: the transition term of the acceptance
        ratio is taken to be 0.
    init : state
        Initial state.
    burn_in : int
        Steps discarded before the first sample.
    drop_count : int
        Steps discarded between two emitted samples.
    group : AdditiveGroup, optional
        Addition on states. Defaults to :class:`RealGroup`.
    rng : numpy.random.Generator, optional
        Defaults to the global generator of ``gpwarp.num``.
    """

    def __init__(
        self,
        log_likelihood: Callable,
        proposal,
        init,
        burn_in: int = 0,
        drop_count: int = 0,
        group=None,
        rng=None,
    ):
        if burn_in < 0 or drop_count < 0:
            raise ValueError("burn_in and drop_count must be nonnegative")
        self.log_likelihood = log_likelihood
        self.proposal = proposal
        self.init = init
        self.burn_in = int(burn_in)
        self.drop_count = int(drop_count)
        self.group = RealGroup() if group is None else group
        self.rng = gnp.get_rng() if rng is None else rng

        self._current = init
        self._current_ll = self._evaluate(init)
        self._burned_in = self.burn_in == 0
        self.n_steps = 0
        self.n_accepted = 0

    def __repr__(self):
        return (
            f"<GeneralMetropolisHastings burn_in={self.burn_in} "
            f"drop_count={self.drop_count} steps={self.n_steps}>"
        )

    @property
    def current(self):
        return self._current

    @property
    def current_log_likelihood(self):
        return self._current_ll

    @property
    def acceptance_rate(self):
        return self.n_accepted / self.n_steps if self.n_steps else 0.0

    def _evaluate(self, x):
        ll = float(self.log_likelihood(x))
        return -math.inf if math.isnan(ll) else ll

    def _draw_step(self):
        if hasattr(self.proposal, "rvs"):
            return self.proposal.rvs(random_state=self.rng)
        return self.proposal(self.rng)

    def propose(self, x):
        """Current state plus an independent proposal draw."""
        return self.group.plus(x, self._draw_step())

    def log_transition_probability(self, start, end):
        return 0.0

    def step(self):
        """One Metropolis-Hastings transition; returns the new state."""
        candidate = self.propose(self._current)
        candidate_ll = self._evaluate(candidate)
        self.n_steps += 1

        if candidate_ll == -math.inf:
            return self._current
        log_ratio = (
            candidate_ll
            - self._current_ll
            + self.log_transition_probability(candidate, self._current)
            - self.log_transition_probability(self._current, candidate)
        )
        if log_ratio > 0.0 or math.log(self.rng.random()) < log_ratio:
            self._current = candidate
            self._current_ll = candidate_ll
            self.n_accepted += 1
        return self._current

    def __iter__(self):
        return self

    def __next__(self):
        if not self._burned_in:
            for _ in range(self.burn_in):
                self.step()
            self._burned_in = True
        for _ in range(self.drop_count):
            self.step()
        return self.step()

    def draw(self):
        return next(self)

    def sample(self, n: int):
        """The next ``n`` emitted samples, as a list."""
        samples = [next(self) for _ in range(int(n))]
        _logger.debug(
            "MH chain: %d samples, %d steps, acceptance rate %.3f",
            len(samples),
            self.n_steps,
            self.acceptance_rate,
        )
        return samples

    def observe(self, x):
        """A new chain started at ``x``, without burn-in."""
        return GeneralMetropolisHastings(
            self.log_likelihood,
            self.proposal,
            x,
            burn_in=0,
            drop_count=self.drop_count,
            group=self.group,
            rng=self.rng,
        )
