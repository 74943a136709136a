#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
import enum
import logging
from typing import List, NamedTuple, Optional

from . import viewport
from .flatten import VisibleItem, get_visible_items, find_position, expand_ancestors, set_expanded_all
from .search import SearchResult, SearchStatus, find
from .vault import Entry, GroupNode, VaultTree


class Pane(enum.IntEnum):
    GROUPS = 0
    ENTRIES = 1


class NavEvent(enum.Enum):
    NONE = 'none'
    FOCUS_LEFT = 'focus_left'
    FOCUS_RIGHT = 'focus_right'
    UP = 'up'
    DOWN = 'down'
    TOP = 'top'
    BOTTOM = 'bottom'
    TOGGLE_EXPAND = 'toggle_expand'
    TOGGLE_EXPAND_ALL = 'toggle_expand_all'
    TOGGLE_PASSWORDS = 'toggle_passwords'
    ENTER_SEARCH = 'enter_search'
    RESIZE = 'resize'
    QUIT = 'quit'


class PaneGeometry(NamedTuple):
    """Outer heights of the two panes, borders included"""
    group_rows: int
    entry_rows: int

    @property
    def group_page(self):
        return viewport.page_size(self.group_rows)

    @property
    def entry_page(self):
        return viewport.entries_per_page(self.entry_rows)


class NavigationState:
    def __init__(self):
        self.selected_index = 0
        self.group_scroll = 0
        self.entry_scroll = 0
        self.search_query = None    # type: Optional[str]
        self.search_status = SearchStatus.NONE
        self.in_search_mode = False
        self.show_passwords = False
        self.focused_pane = Pane.GROUPS
        self.expand_all = False
        self.running = True

    def __repr__(self):
        return ('NavigationState(selected_index={}, group_scroll={}, entry_scroll={}, focused_pane={}, '
                'search_status={}, show_passwords={}, expand_all={})').format(
            self.selected_index, self.group_scroll, self.entry_scroll, self.focused_pane.name,
            self.search_status.name, self.show_passwords, self.expand_all)


class ViewModel(NamedTuple):
    items: List[VisibleItem]
    group_range: range
    selected_index: int
    group: Optional[GroupNode]
    entries: List[Entry]
    entry_range: range
    entry_count: int
    state: NavigationState


class Navigator:
    """ Owns the navigation state and the only writer of ``expanded`` flags """

    def __init__(self, tree, show_passwords=False, expand_all=False):
        # type: (VaultTree, bool, bool) -> None
        self.tree = tree
        self.state = NavigationState()
        self.state.show_passwords = show_passwords
        if expand_all:
            self.state.expand_all = True
            set_expanded_all(self.tree, True)
        self.last_search = None    # type: Optional[SearchResult]

    def visible_items(self):    # type: () -> List[VisibleItem]
        return get_visible_items(self.tree)

    def selected_group(self, items=None):    # type: (Optional[List[VisibleItem]]) -> Optional[GroupNode]
        if items is None:
            items = self.visible_items()
        if 0 <= self.state.selected_index < len(items):
            return items[self.state.selected_index].group
        return None

    def current_entries(self, items=None):    # type: (Optional[List[VisibleItem]]) -> List[Entry]
        group = self.selected_group(items)
        return group.entries if group else []

    def dispatch(self, event, geometry):    # type: (NavEvent, PaneGeometry) -> bool
        """Apply one input event. Returns False once the viewer should exit."""
        handler = getattr(self, f'_on_{event.value}', None)
        if handler:
            handler(geometry)
        self._normalize(geometry)
        return self.state.running

    def _on_quit(self, geometry):
        self.state.running = False

    def _on_focus_left(self, geometry):
        self.state.focused_pane = Pane.GROUPS

    def _on_focus_right(self, geometry):
        self.state.focused_pane = Pane.ENTRIES

    def _on_up(self, geometry):
        self._move(-1, geometry)

    def _on_down(self, geometry):
        self._move(1, geometry)

    def _move(self, delta, geometry):
        state = self.state
        items = self.visible_items()
        if state.focused_pane == Pane.GROUPS:
            index = min(max(0, state.selected_index + delta), max(0, len(items) - 1))
            state.selected_index = index
            state.group_scroll = viewport.follow_selection(
                len(items), geometry.group_page, index, state.group_scroll)
        else:
            entry_count = len(self.current_entries(items))
            state.entry_scroll = viewport.clamp_scroll(
                entry_count, geometry.entry_page, state.entry_scroll + delta)

    def _on_top(self, geometry):
        state = self.state
        if state.focused_pane == Pane.GROUPS:
            state.selected_index = 0
            state.group_scroll = 0
        else:
            state.entry_scroll = 0

    def _on_bottom(self, geometry):
        state = self.state
        items = self.visible_items()
        if state.focused_pane == Pane.GROUPS:
            state.selected_index = max(0, len(items) - 1)
            state.group_scroll = viewport.follow_selection(
                len(items), geometry.group_page, state.selected_index, state.group_scroll)
        else:
            entry_count = len(self.current_entries(items))
            state.entry_scroll = viewport.max_scroll(entry_count, geometry.entry_page)

    def _on_toggle_expand(self, geometry):
        state = self.state
        if state.focused_pane != Pane.GROUPS:
            return
        group = self.selected_group()
        if group is None:
            return
        group.expanded = not group.expanded
        expand_ancestors(self.tree, group)
        state.entry_scroll = 0
        logging.debug('Group %d %s', group.uid, 'expanded' if group.expanded else 'collapsed')

    def _on_toggle_passwords(self, geometry):
        self.state.show_passwords = not self.state.show_passwords

    def _on_toggle_expand_all(self, geometry):
        state = self.state
        selected = self.selected_group()
        state.expand_all = not state.expand_all
        set_expanded_all(self.tree, state.expand_all)
        if state.expand_all:
            position = find_position(self.visible_items(), selected) if selected else None
            state.selected_index = position or 0
        else:
            state.selected_index = 0
            state.group_scroll = 0

    def _on_enter_search(self, geometry):
        self.state.in_search_mode = True

    def cancel_search(self):
        self.state.in_search_mode = False

    def submit_search(self, query, geometry):    # type: (str, PaneGeometry) -> SearchResult
        """Jump to the first group matching ``query``, then resume browsing."""
        state = self.state
        result = find(self.tree, query)
        state.search_query = query
        state.search_status = result.status
        if result.found:
            items = self.visible_items()
            position = find_position(items, result.group)
            if position is not None:
                state.selected_index = position
                state.group_scroll = viewport.center_on(len(items), geometry.group_page, position)
                state.entry_scroll = 0
        state.in_search_mode = False
        self.last_search = result
        self._normalize(geometry)
        return result

    def _normalize(self, geometry):
        state = self.state
        items = self.visible_items()
        state.selected_index = min(max(0, state.selected_index), max(0, len(items) - 1))
        state.group_scroll = viewport.follow_selection(
            len(items), geometry.group_page, state.selected_index, state.group_scroll)
        entry_count = len(self.current_entries(items))
        state.entry_scroll = viewport.clamp_scroll(entry_count, geometry.entry_page, state.entry_scroll)

    def view(self, geometry):    # type: (PaneGeometry) -> ViewModel
        items = self.visible_items()
        group = self.selected_group(items)
        entries = group.entries if group else []
        return ViewModel(
            items=items,
            group_range=viewport.visible_range(len(items), geometry.group_page, self.state.group_scroll),
            selected_index=self.state.selected_index,
            group=group,
            entries=entries,
            entry_range=viewport.visible_range(len(entries), geometry.entry_page, self.state.entry_scroll),
            entry_count=len(entries),
            state=self.state,
        )
