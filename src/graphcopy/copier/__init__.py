"""Copy engine: graph orchestration, collection copiers and composite builder.

Usage:
    from graphcopy.copier import GraphCopier

    copier = GraphCopier(transform, sink=CollectingSink(), detect_cycles=True)
    copy = copier.copy(source)
"""

from graphcopy.copier.graph import GraphCopier, deep_copy_and_apply

__all__ = [
    "GraphCopier",
    "deep_copy_and_apply",
]
