import os
import sys

import matplotlib

matplotlib.use("Agg")

# the example scripts are imported as `examples.<name>` from the project root
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)
