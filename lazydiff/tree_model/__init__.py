"""Changed-file tree model: node type, builder, and renderer."""

from .build import build_file_tree
from .rendering import render_file_tree
from .types import TreeNode

__all__ = ["TreeNode", "build_file_tree", "render_file_tree"]
