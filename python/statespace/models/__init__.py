from statespace.models.graph import GraphEdge, GraphNode, LayoutGraph
from statespace.models.puzzle import Block, PuzzleState

__all__ = ["Block", "GraphEdge", "GraphNode", "LayoutGraph", "PuzzleState"]
