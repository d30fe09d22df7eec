"""Graph model, distance oracle and the data structures the layouts share.

Public API:
- Graph, Node: undirected graph with a lazy shortest-path oracle
- UNREACHABLE: distance between disconnected nodes
- IndexedPriorityQueue: min-heap with stable entry ids
- k_centers: farthest-point clustering
"""

from force_lab.graph.centers import k_centers
from force_lab.graph.model import UNREACHABLE, Graph, Node
from force_lab.graph.priority_queue import IndexedPriorityQueue

__all__ = [
    "Graph",
    "IndexedPriorityQueue",
    "Node",
    "UNREACHABLE",
    "k_centers",
]
