"""Node type for the changed-file tree panel."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TreeNode:
    """A directory (with children) or a file leaf.

    A file and a directory may share a name under the same parent; they are
    kept as distinct siblings.
    """

    name: str
    is_file: bool = False
    children: list[TreeNode] = field(default_factory=list)

    def child(self, name: str, is_file: bool) -> TreeNode:
        """Return the child named ``name`` of the given kind, creating it if missing."""
        for node in self.children:
            if node.name == name and node.is_file == is_file:
                return node
        node = TreeNode(name=name, is_file=is_file)
        self.children.append(node)
        return node

    def sorted_children(self) -> list[TreeNode]:
        # Files and directories sort together; a directory wins a name tie.
        return sorted(self.children, key=lambda node: (node.name, node.is_file))
