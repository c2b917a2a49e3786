"""mimac: Energy comparison of a multi-coil MI-MAC protocol against CSMA/CA.

This package provides tools for:
- Modeling per-role protocol state machines with data-driven transition graphs
- Costing packet transmissions and state holds with a current-draw energy model
- RSSI-based selection of the best magnetic-induction coil
- Running deterministic protocol sessions and comparing their energy ledgers
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("mimac")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["__version__"]
