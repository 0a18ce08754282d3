"""
Pipeline spec <-> canvas graph transforms.

compile_to_graph and decompile_from_graph convert between the nested spec and
the node/edge graph; apply_layout assigns node positions.
"""

from .compiler import compile_to_graph
from .decompiler import DecompileReport, decompile_from_graph, decompile_with_report
from .editing import (
    GraphEditError,
    connect,
    delete_node,
    disconnect,
    insert_step_node,
    move_node,
    update_node_data,
)
from .layout import LayoutSpacing, apply_layout, layout_graph
from .session import EditorSession, TrailingDebounce

__all__ = [
    "compile_to_graph",
    "decompile_from_graph",
    "decompile_with_report",
    "DecompileReport",
    "apply_layout",
    "layout_graph",
    "LayoutSpacing",
    "GraphEditError",
    "insert_step_node",
    "connect",
    "disconnect",
    "delete_node",
    "move_node",
    "update_node_data",
    "EditorSession",
    "TrailingDebounce",
]
