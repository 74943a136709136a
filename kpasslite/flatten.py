#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
from typing import List, NamedTuple, Optional

from .vault import GroupNode, VaultTree


class VisibleItem(NamedTuple):
    group: GroupNode
    depth: int
    position: int


def get_visible_items(tree):    # type: (VaultTree) -> List[VisibleItem]
    """Groups reachable through expanded parents, pre-order, root first.

    Positions are invalidated by any change of an ``expanded`` flag.
    """
    items = []    # type: List[VisibleItem]

    def add_visible_items(group, depth):
        items.append(VisibleItem(group=group, depth=depth, position=len(items)))
        if group.expanded:
            for subgroup in tree.get_subgroups(group):
                add_visible_items(subgroup, depth + 1)

    if tree.root is not None:
        add_visible_items(tree.root, 0)
    return items


def find_position(items, group):    # type: (List[VisibleItem], GroupNode) -> Optional[int]
    for item in items:
        if item.group is group:
            return item.position
    return None


def expand_ancestors(tree, group):    # type: (VaultTree, GroupNode) -> None
    for parent in tree.iter_ancestors(group):
        parent.expanded = True


def set_expanded_all(tree, expanded):    # type: (VaultTree, bool) -> None
    for group in tree.traverse():
        group.expanded = expanded
