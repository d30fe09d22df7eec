"""Layout algorithms and the tools to drive them.

Public API:
- Eades, FruchtermanReingold: spring embedders
- KamadaKawai: energy minimization over graph distances
- HarelKoren: multiscale Kamada-Kawai
- StressMajorization: Gansner stress majorization
- ExternalLayout: adapter for an outside layout engine
- run_layout, StoppingPolicy: drive any of them to completion
- ALGORITHMS: registry of the built-in algorithms by name
"""

from force_lab.layout.base import Steppable
from force_lab.layout.driver import RunSummary, StoppingPolicy, run_layout
from force_lab.layout.external import ExternalLayout, LayoutEngine
from force_lab.layout.force import Eades, FruchtermanReingold
from force_lab.layout.harel_koren import HarelKoren
from force_lab.layout.initial import radial_layout, random_layout
from force_lab.layout.kamada import KamadaKawai
from force_lab.layout.stress import StressMajorization

ALGORITHMS = {
    cls.name: cls
    for cls in (Eades, FruchtermanReingold, KamadaKawai, HarelKoren, StressMajorization)
}

__all__ = [
    "ALGORITHMS",
    "Eades",
    "ExternalLayout",
    "FruchtermanReingold",
    "HarelKoren",
    "KamadaKawai",
    "LayoutEngine",
    "RunSummary",
    "Steppable",
    "StoppingPolicy",
    "StressMajorization",
    "radial_layout",
    "random_layout",
    "run_layout",
]
