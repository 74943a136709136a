#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
from typing import List, NamedTuple

from colorama import init

from .flatten import VisibleItem
from .navigator import Pane, PaneGeometry, ViewModel
from .search import SearchStatus
from .vault import Entry, GroupNode

init()


class bcolors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


HEADER_TEXT = 'kpasslite [kdbx viewer] - (q: quit, [space]: toggle passwords, ' \
              'enter: expand/collapse current group, f: expand/collapse all, /: search)'
NOT_FOUND_TEXT = 'NOT FOUND'
SCROLL_UP = '↑'
SCROLL_DOWN = '↓'


class ScreenLayout(NamedTuple):
    rows: int
    cols: int
    list_width: int

    @property
    def pane_top(self):
        return 1

    @property
    def pane_rows(self):
        return max(3, self.rows - 4)

    @property
    def detail_x(self):
        return self.list_width + 1

    @property
    def detail_width(self):
        return max(3, self.cols - self.list_width - 1)

    @property
    def search_top(self):
        return self.rows - 3

    @property
    def geometry(self):    # type: () -> PaneGeometry
        return PaneGeometry(group_rows=self.pane_rows, entry_rows=self.pane_rows)


def compute_layout(rows, cols):    # type: (int, int) -> ScreenLayout
    return ScreenLayout(rows=rows, cols=cols, list_width=max(3, cols // 3))


def truncate_string(s, max_len):    # type: (str, int) -> str
    if len(s) <= max_len:
        return s
    if max_len <= 3:
        return s[:max(0, max_len)]
    return s[:max_len - 3] + '...'


def group_indicator(group, subgroup_count=None):    # type: (GroupNode, int) -> str
    if subgroup_count is None:
        subgroup_count = len(group.subgroups)
    if subgroup_count == 0:
        return '-'
    return '+' if group.expanded else '>'


def format_group_row(item):    # type: (VisibleItem) -> str
    prefix = '  ' * item.depth
    return f'{prefix}{group_indicator(item.group)} {item.group.name}'


def mask_password(password, show_passwords):    # type: (str, bool) -> str
    if show_passwords:
        return password
    return '*' * len(password)


def format_entry(entry, width, show_passwords):    # type: (Entry, int, bool) -> List[str]
    lines = [
        f'Title: {truncate_string(entry.title, width - 8)}',
        f'Username: {truncate_string(entry.username, width - 11)}',
        f'Password: {mask_password(entry.password, show_passwords)}',
    ]
    if entry.url:
        lines.append(f'URL: {truncate_string(entry.url, width - 6)}')
    lines.append('-' * max(0, width - 2))
    return lines


def search_status_text(state):
    if state.in_search_mode:
        return ' Search: '
    if state.search_status == SearchStatus.NOT_FOUND:
        return f' Search: {NOT_FOUND_TEXT}'
    return f' Search: {state.search_query or ""}'


def paint_groups(screen, layout, model):
    # type: (any, ScreenLayout, ViewModel) -> None
    width = layout.list_width
    height = layout.pane_rows
    screen.draw_box(layout.pane_top, 0, height, width, ' Groups ',
                    highlight=model.state.focused_pane == Pane.GROUPS)
    y = layout.pane_top + 1
    for position in model.group_range:
        text = format_group_row(model.items[position])
        screen.print_at(y, 1, f'{text:<{max(0, width - 3)}}'[:max(0, width - 2)],
                        highlight=position == model.selected_index)
        y += 1
    if model.group_range.start > 0:
        screen.print_at(layout.pane_top + 1, width - 2, SCROLL_UP)
    if model.group_range.stop < len(model.items):
        screen.print_at(layout.pane_top + height - 2, width - 2, SCROLL_DOWN)


def paint_entries(screen, layout, model):
    # type: (any, ScreenLayout, ViewModel) -> None
    x0 = layout.detail_x
    width = layout.detail_width
    height = layout.pane_rows
    title = f' {model.group.name} ' if model.group else ''
    screen.draw_box(layout.pane_top, x0, height, width, title,
                    highlight=model.state.focused_pane == Pane.ENTRIES)
    inner = width - 2
    y = layout.pane_top + 1
    bottom = layout.pane_top + height - 1
    for index in model.entry_range:
        for line in format_entry(model.entries[index], inner, model.state.show_passwords):
            if y >= bottom:
                break
            screen.print_at(y, x0 + 1, line[:inner])
            y += 1
    if model.entry_range.start > 0:
        screen.print_at(layout.pane_top + 1, x0 + width - 2, SCROLL_UP)
    if model.entry_range.stop < model.entry_count:
        screen.print_at(bottom - 1, x0 + width - 2, SCROLL_DOWN)


def paint_search(screen, layout, model):
    # type: (any, ScreenLayout, ViewModel) -> None
    screen.draw_box(layout.search_top, 0, 3, layout.cols, search_status_text(model.state))
    if model.state.in_search_mode:
        screen.print_at(layout.search_top + 1, 1, '/ ')


def paint(screen, layout, model):
    # type: (any, ScreenLayout, ViewModel) -> None
    screen.clear()
    screen.print_at(0, 0, truncate_string(HEADER_TEXT, layout.cols - 1))
    paint_groups(screen, layout, model)
    paint_entries(screen, layout, model)
    paint_search(screen, layout, model)
    screen.refresh()
