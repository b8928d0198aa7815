"""
Graph reconciliation, link derivation and the rendering surface seam.
"""

from relnet.domain.graph.links import annotate_neighbors, derive_links, highlight_set
from relnet.domain.graph.reconciler import GraphReconciler, ReconcileResult, apply_pins, reconcile
from relnet.domain.graph.surface import InMemorySurface, PinReasserter, RenderingSurface

__all__ = [
    "annotate_neighbors",
    "derive_links",
    "highlight_set",
    "GraphReconciler",
    "ReconcileResult",
    "apply_pins",
    "reconcile",
    "InMemorySurface",
    "PinReasserter",
    "RenderingSurface",
]
