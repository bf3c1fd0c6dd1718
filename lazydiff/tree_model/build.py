"""Build the changed-file tree from git paths."""

from __future__ import annotations

from .types import TreeNode


def build_file_tree(paths: list[str]) -> TreeNode:
    """Return an unnamed root whose descendants mirror ``paths`` split on ``/``."""
    root = TreeNode(name="")
    for path in paths:
        segments = [segment for segment in path.split("/") if segment]
        node = root
        for idx, segment in enumerate(segments):
            node = node.child(segment, is_file=idx == len(segments) - 1)
    return root
