# gpwarp/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Miscellaneous utility modules for gpwarp.

plotutils (imported explicitly, as it loads matplotlib)
    Figures for error bars, energy landscapes and MCMC traces.
"""
