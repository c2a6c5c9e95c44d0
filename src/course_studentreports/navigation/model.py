from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NodeType(str, Enum):
    CONTAINER = "container"
    CUSTOM = "custom"
    SETTING = "setting"


@dataclass
class NavigationNode:
    """One entry of a course navigation tree."""

    key: str
    text: str
    type: NodeType = NodeType.CONTAINER
    url: Optional[str] = None
    icon: Optional[str] = None
    children: list["NavigationNode"] = field(default_factory=list)

    def add(
        self,
        text: str,
        url: Optional[str] = None,
        type: NodeType = NodeType.CUSTOM,
        *,
        key: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> "NavigationNode":
        node = NavigationNode(key=key or text, text=text, type=type, url=url, icon=icon)
        self.children.append(node)
        return node

    def find(self, key: str, type: Optional[NodeType] = None) -> Optional["NavigationNode"]:
        """Depth-first search over the tree, this node included."""
        if self.key == key and (type is None or self.type == type):
            return self
        for child in self.children:
            found = child.find(key, type)
            if found is not None:
                return found
        return None
