# gpwarp/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process regression model.
"""
import gpwarp.num as gnp

from . import kriging
from . import likelihood
from . import utils
from .distributions import BlockGaussian
from .encoders import ArrayPairsEncoder
from .partitioned import PartitionedVector, PartitionedMatrix
from .process import Process, ErrorBar
from .state import HyperparameterState


class Model(Process):
    """Gaussian Process (GP) regression model over training data.

    Attributes
    ----------
    mean_function : callable or None
        Prior mean of the GP, used when `meantype` is "parameterized".
        It is called as

        m = self.mean_function(x, meanparam),

        where `x` is an (n x d) array and the result has n entries.
        When `meantype` is "zero" it should be set to `None`.

    covariance : callable
        Covariance of the GP, called as

        K = self.covariance(x, y, self.covparam, pairwise),

        where x is (n x d) and y is either an (m x d) array or None,
        meaning y := x. The covariance of x with itself includes the
        observation noise, if any.

    meanparam : array_like, optional
        Parameters of the mean function ('parameterized' only).

    hyperparameters : HyperparameterState
        Named covariance parameters. ``covparam`` is the vector view of
        this state in key order. The state object is shared with models
        created by :meth:`refit` and with warped processes built on this
        model.

    meantype : str
        'zero' or 'parameterized'.

    block_size : int
        Block size used to partition predictive distributions. Defaults
        to the number of training points.

    Examples
    --------
    >>> import gpwarp as gw
    >>> import gpwarp.num as gnp
    >>> xi = gnp.array([0.0, 1.0, 2.0, 3.0, 5.0]).reshape(-1, 1)
    >>> zi = gnp.array([0.0, 1.2, 2.5, 4.2, 4.3])
    >>> covariance = gw.kernel.make_matern_covariance(p=2, noise=True)
    >>> h = gw.kernel.matern_initial_hyperparameters(xi, zi)
    >>> model = gw.core.Model(None, covariance, (xi, zi), h, meantype="zero")
    >>> model.energy({"log_sigma2": 1.0})
    """

    def __init__(
        self,
        mean,
        covariance,
        data,
        hyperparameters,
        meanparam=None,
        meantype="zero",
        block_size=None,
        encoder=None,
    ):
        """
        Parameters
        ----------
        mean : callable or None
            Mean function ``mean(x, meanparam)``.
        covariance : callable
            Covariance function ``covariance(x, y, covparam, pairwise=False)``.
        data : tuple
            Training data ``(xi, zi)``.
        hyperparameters : HyperparameterState or mapping
            Named covariance parameters, in covparam order.
        meanparam : array_like, optional
        meantype : str, optional
            'zero' (default) or 'parameterized'.
        block_size : int, optional
        encoder : Encoder, optional
            Defaults to :class:`ArrayPairsEncoder`.
        """
        utils.validate_model_mean(meantype, mean, meanparam)
        self.meantype = meantype
        self.mean_function = mean
        self.meanparam = meanparam
        self._covariance = covariance

        xi, zi = data
        xi, zi, _ = utils.ensure_shapes_and_type(xi=xi, zi=zi)
        self._xi = xi
        self._zi = zi

        if isinstance(hyperparameters, HyperparameterState):
            self._hyperparameters = hyperparameters
        else:
            self._hyperparameters = HyperparameterState(dict(hyperparameters))

        n = xi.shape[0]
        self._block_size = int(block_size) if block_size is not None else max(n, 1)
        if self._block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self._encoder = ArrayPairsEncoder() if encoder is None else encoder

    def __repr__(self):
        output = str("<gpwarp.core.Model object> " + hex(id(self)))
        return output

    def __str__(self):
        if self.meantype == "zero":
            mean_desc = "Zero Mean"
        else:
            mean_desc = getattr(self.mean_function, "__name__", str(self.mean_function))
        cov_desc = getattr(self._covariance, "__name__", str(self._covariance))
        return (
            f"GP Model:\n"
            f"  Mean Type: {self.meantype}\n"
            f"  Mean Function: {mean_desc}\n"
            f"  Mean Parameters: {self.meanparam}\n"
            f"  Covariance Function: {cov_desc}\n"
            f"  Hyperparameters: {self._hyperparameters.as_dict()}\n"
            f"  Training points: {self.npoints}"
        )

    # ------------------------------------------------------------------
    # Process contract
    # ------------------------------------------------------------------
    @property
    def data(self):
        return self._xi, self._zi

    @property
    def npoints(self):
        return self._xi.shape[0]

    @property
    def block_size(self):
        return self._block_size

    @property
    def encoder(self):
        return self._encoder

    @property
    def hyperparameters(self):
        return self._hyperparameters

    @property
    def covariance(self):
        return self._covariance

    @property
    def covparam(self):
        """Covariance parameters as a vector, in hyperparameter key order."""
        return self._hyperparameters.to_vector()

    @covparam.setter
    def covparam(self, value):
        self._hyperparameters.set_vector(value)

    def mean(self, x):
        """Prior mean at ``x``."""
        _, _, x = utils.ensure_shapes_and_type(xt=x)
        if self.meantype == "zero":
            return gnp.zeros((x.shape[0],))
        return gnp.asarray(self.mean_function(x, self.meanparam)).reshape(-1)

    def energy(self, h, options=None):
        """Apply ``h`` and return the negative log-likelihood of the data.

        Parameters
        ----------
        h : mapping
            Hyperparameter values to set. Unknown names raise ``KeyError``.
        options : dict of str, optional
            ``{"jitter": "<float>"}`` adds a diagonal jitter to the
            covariance matrix.

        Returns
        -------
        float
            The energy, ``+inf`` if the covariance matrix cannot be
            factorized.
        """
        self._hyperparameters.update(h)
        jitter = utils.parse_jitter(options)
        if self.meantype == "zero":
            nll = likelihood.negative_log_likelihood_zero_mean(
                self, self.covparam, self._xi, self._zi, jitter=jitter
            )
        else:
            nll = likelihood.negative_log_likelihood(
                self, self.meanparam, self.covparam, self._xi, self._zi, jitter=jitter
            )
        return float(gnp.to_scalar(nll))

    def predict_moments(self, xt, return_type=0, zero_neg_variances=True):
        """Posterior mean and variance at ``xt``.

        Parameters
        ----------
        xt : array_like, shape (nt, d)
        return_type : int, optional
            -1: no variance, 0: marginal variances (default), 1: full covariance.
        zero_neg_variances : bool, optional
            Clip negative variances to zero (default True).

        Returns
        -------
        zt_posterior_mean : array_like, shape (nt,)
        zt_posterior_variance : array_like or None
        """
        xi, zi, xt = utils.ensure_shapes_and_type(xi=self._xi, zi=self._zi, xt=xt)
        return kriging.posterior_moments(
            self, xi, zi, xt,
            return_type=return_type,
            zero_neg_variances=zero_neg_variances,
        )

    def predictive_distribution(self, xt):
        """Posterior mean and covariance at ``xt`` as a block Gaussian."""
        zt_mean, zt_cov = self.predict_moments(xt, return_type=1)
        bs = self._block_size
        return BlockGaussian(
            PartitionedVector.from_array(zt_mean, bs),
            PartitionedMatrix.from_array(zt_cov, bs),
        )

    def prediction_with_error_bars(self, xt, sigma):
        """Posterior mean plus and minus ``sigma`` standard deviations."""
        _, _, xt = utils.ensure_shapes_and_type(xt=xt)
        zt_mean, zt_var = self.predict_moments(xt)
        std = gnp.sqrt(zt_var)
        return [
            ErrorBar(
                xt[k],
                float(zt_mean[k] - sigma * std[k]),
                float(zt_mean[k]),
                float(zt_mean[k] + sigma * std[k]),
            )
            for k in range(xt.shape[0])
        ]

    def predict(self, point):
        """Posterior mean at a single point."""
        x = gnp.asarray(point).reshape(1, -1)
        zt_mean, _ = self.predict_moments(x, return_type=-1)
        return float(zt_mean[0])

    def refit(self, data):
        """New model over ``data`` sharing the hyperparameter state."""
        return Model(
            self.mean_function,
            self._covariance,
            data,
            self._hyperparameters,
            meanparam=self.meanparam,
            meantype=self.meantype,
            block_size=self._block_size,
            encoder=self._encoder,
        )
