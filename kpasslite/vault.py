#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
import logging
from typing import Dict, Iterable, Iterator, List, Optional


class Entry:
    """ Credential record. Read-only once built from the decoded database """
    __slots__ = ('_title', '_username', '_password', '_url', '_notes')

    def __init__(self, title='', username='', password='', url='', notes=''):
        self._title = title or ''
        self._username = username or ''
        self._password = password or ''
        self._url = url or ''
        self._notes = notes or ''

    @property
    def title(self):    # type: () -> str
        return self._title

    @property
    def username(self):    # type: () -> str
        return self._username

    @property
    def password(self):    # type: () -> str
        return self._password

    @property
    def url(self):    # type: () -> str
        return self._url

    @property
    def notes(self):    # type: () -> str
        return self._notes

    @staticmethod
    def from_raw(raw_entry):    # type: (any) -> Entry
        return Entry(title=getattr(raw_entry, 'title', ''),
                     username=getattr(raw_entry, 'username', ''),
                     password=getattr(raw_entry, 'password', ''),
                     url=getattr(raw_entry, 'url', ''),
                     notes=getattr(raw_entry, 'notes', ''))

    def __repr__(self):
        return 'Entry(title={!r}, username={!r}, password=***, url={!r})'.format(
            self._title,
            self._username,
            self._url,
        )


class GroupNode:
    """ Group Common Fields"""
    def __init__(self, uid, name='', parent_uid=None):
        self.uid = uid                  # type: int
        self.parent_uid = parent_uid    # type: Optional[int]
        self.name = name or ''
        self.entries = []               # type: List[Entry]
        self.subgroups = []             # type: List[int]
        self.expanded = False

    @property
    def is_root(self):
        return self.parent_uid is None

    def __repr__(self):
        return 'GroupNode(uid={}, parent_uid={}, name={}, subgroups={}, expanded={})'.format(
            self.uid,
            self.parent_uid,
            self.name,
            self.subgroups,
            self.expanded,
        )


class VaultTree:
    """ Arena of groups. Parent and child links are group UIDs into group_cache """
    ROOT_NAME = 'Root'

    def __init__(self):
        self.group_cache = {}    # type: Dict[int, GroupNode]
        self.root = self._add_group(VaultTree.ROOT_NAME, None)
        self.root.expanded = True

    def _add_group(self, name, parent_uid):    # type: (str, Optional[int]) -> GroupNode
        node = GroupNode(len(self.group_cache), name=name, parent_uid=parent_uid)
        self.group_cache[node.uid] = node
        if parent_uid is not None:
            self.group_cache[parent_uid].subgroups.append(node.uid)
        return node

    @classmethod
    def build(cls, raw_groups):    # type: (Iterable[any]) -> VaultTree
        """Build the tree in one pre-order pass.

        raw_groups are the top level groups of a decoded database. Each exposes
        ``name``, ``subgroups`` and ``entries``; entries expose ``title``,
        ``username``, ``password``, ``url`` and ``notes``.
        """
        tree = cls()

        def add(raw_group, parent_uid):
            node = tree._add_group(getattr(raw_group, 'name', ''), parent_uid)
            for raw_entry in getattr(raw_group, 'entries', None) or []:
                node.entries.append(Entry.from_raw(raw_entry))
            for raw_subgroup in getattr(raw_group, 'subgroups', None) or []:
                add(raw_subgroup, node.uid)

        for group in raw_groups or []:
            add(group, tree.root.uid)

        logging.debug('Vault tree: %d groups, %d entries', len(tree.group_cache) - 1, tree.entry_count())
        return tree

    def get_group(self, uid):    # type: (Optional[int]) -> Optional[GroupNode]
        if uid is None:
            return None
        return self.group_cache.get(uid)

    def get_parent(self, group):    # type: (GroupNode) -> Optional[GroupNode]
        return self.get_group(group.parent_uid)

    def get_subgroups(self, group):    # type: (GroupNode) -> List[GroupNode]
        return [self.group_cache[x] for x in group.subgroups]

    def iter_ancestors(self, group):    # type: (GroupNode) -> Iterator[GroupNode]
        parent = self.get_parent(group)
        while parent is not None:
            yield parent
            parent = self.get_parent(parent)

    def depth(self, group):    # type: (GroupNode) -> int
        return sum(1 for _ in self.iter_ancestors(group))

    def traverse(self, group=None):    # type: (Optional[GroupNode]) -> Iterator[GroupNode]
        """Pre-order traversal of all groups regardless of their expanded flag"""
        stack = [group or self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(self.group_cache[x] for x in reversed(node.subgroups))

    def get_path(self, group, delimiter='/'):    # type: (GroupNode, str) -> str
        names = [x.name for x in self.iter_ancestors(group) if not x.is_root]
        names.reverse()
        if not group.is_root:
            names.append(group.name)
        return delimiter + delimiter.join(names)

    def entry_count(self):
        return sum(len(x.entries) for x in self.group_cache.values())
