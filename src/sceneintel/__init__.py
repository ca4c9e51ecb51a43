"""Scene breakdown intelligence.

Turns a scene-by-scene screenplay breakdown into two derived layers:

* an element catalogue, where location variants sharing a root word and
  wardrobe phrases of one character are grouped under a parent name;
* a character ranking with a composite salience score and a narrative tier.

The typical entry points are :func:`sceneintel.report.analyze` and the
``sceneintel`` command line tool.
"""

from .breakdown import Breakdown, parse_breakdown
from .config import ConfigModel, load_config
from .link import build_global_elements
from .rank import rank_characters

__all__ = [
    "__version__",
    "Breakdown",
    "ConfigModel",
    "build_global_elements",
    "load_config",
    "parse_breakdown",
    "rank_characters",
]

__version__ = "0.1.0"
