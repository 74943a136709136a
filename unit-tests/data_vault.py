from typing import List, NamedTuple

from kpasslite.screen import Screen
from kpasslite.vault import VaultTree


class RawEntry(NamedTuple):
    title: str = ''
    username: str = ''
    password: str = ''
    url: str = ''
    notes: str = ''


class RawGroup(NamedTuple):
    name: str
    entries: List[RawEntry] = []
    subgroups: List['RawGroup'] = []


def get_sample_tree():    # type: () -> VaultTree
    """root -> Banking (one entry), Email"""
    return VaultTree.build([
        RawGroup('Banking', entries=[RawEntry('Bank A', 'u1', 'p1', '')]),
        RawGroup('Email'),
    ])


def get_nested_tree():    # type: () -> VaultTree
    """
    Root
      Database
        Internet
          Shopping
          Social
        Work
          Servers
            Linux
        Finance
    """
    return VaultTree.build([
        RawGroup('Database', subgroups=[
            RawGroup('Internet', entries=[
                RawEntry('GitHub', 'octocat', 'hunter2', 'https://github.com', 'personal account'),
            ], subgroups=[
                RawGroup('Shopping', entries=[RawEntry('Store', 'buyer', 'secret', 'https://shop.example.com')]),
                RawGroup('Social', entries=[RawEntry('Forum', 'poster', 'zzzpass', '', 'old forum login')]),
            ]),
            RawGroup('Work', subgroups=[
                RawGroup('Servers', subgroups=[
                    RawGroup('Linux', entries=[RawEntry('db01', 'root', 'toor', 'ssh://db01.internal')]),
                ]),
            ]),
            RawGroup('Finance', entries=[RawEntry('Brokerage', 'investor', 'money', '', 'account 1234')]),
        ]),
    ])


def get_long_tree(group_count=50, entry_count=0):    # type: (int, int) -> VaultTree
    entries = [RawEntry(f'Entry {i}', f'user{i}', f'pass{i}') for i in range(entry_count)]
    return VaultTree.build([RawGroup(f'Group {i}', entries=entries) for i in range(group_count)])


def group_by_name(tree, name):
    for group in tree.traverse():
        if group.name == name:
            return group
    raise KeyError(name)


def names(items):
    return [x.group.name for x in items]


class FakeScreen(Screen):
    """Records drawing calls and replays a scripted key sequence"""
    def __init__(self, keys=None, rows=24, cols=80):
        self.keys = list(keys or [])
        self.rows = rows
        self.cols = cols
        self.lines = {}
        self.boxes = []
        self.highlighted = []
        self.refresh_count = 0

    def size(self):
        return self.rows, self.cols

    def draw_box(self, y, x, height, width, title='', highlight=False):
        self.boxes.append((y, x, height, width, title, highlight))

    def print_at(self, y, x, text, highlight=False):
        self.lines[(y, x)] = text
        if highlight:
            self.highlighted.append(text)

    def read_key(self):
        return self.keys.pop(0)

    def clear(self):
        self.lines.clear()
        self.boxes.clear()
        self.highlighted.clear()

    def refresh(self):
        self.refresh_count += 1

    def text(self):
        return '\n'.join(self.lines[k] for k in sorted(self.lines))
