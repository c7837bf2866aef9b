# gpwarp/__init__.py

from . import config
from . import num
from . import core
from . import kernel
from . import warping
from . import mcmc
from . import optim
from . import misc
from .core import Model, WarpedProcess, warp
from .optim import SearchSettings, GridSearch, MetropolisSearch
from .config import get_config

__all__ = [
    "num",
    "kernel",
    "warping",
    "optim",
    "Model",
    "WarpedProcess",
    "warp",
    "SearchSettings",
    "GridSearch",
    "MetropolisSearch",
    "__version__",
]

__version__ = get_config().version
