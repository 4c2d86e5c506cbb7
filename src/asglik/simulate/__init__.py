"""
Simulation of genealogies, mutations and samples.

Useful for:
- Generating event histories of the ancestral selection graph
- Overlaying neutral mutations on a history
- Projecting the sampled types from the ultimate ancestor

Available simulators:
- GraphSimulator: the ancestral selection graph (coalescence + branching)
- MutationOverlay: two-state mutations dropped on a fixed history
"""

from .base import Simulator
from .graph import GraphSimulator, simulate_graph
from .mutations import MutationOverlay, overlay_mutations
from .projection import project_sample

__all__ = [
    'Simulator',
    'GraphSimulator',
    'simulate_graph',
    'MutationOverlay',
    'overlay_mutations',
    'project_sample',
]
