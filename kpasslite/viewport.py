#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#

BORDER_ROWS = 2
# title, username, password, URL, separator
ENTRY_ROWS = 5


def page_size(rows, border_rows=BORDER_ROWS):    # type: (int, int) -> int
    return max(1, rows - border_rows)


def entries_per_page(rows):    # type: (int) -> int
    return max(1, (rows - BORDER_ROWS) // ENTRY_ROWS)


def max_scroll(count, height):    # type: (int, int) -> int
    return max(0, count - max(1, height))


def clamp_scroll(count, height, scroll):    # type: (int, int, int) -> int
    return min(max(0, scroll), max_scroll(count, height))


def follow_selection(count, height, selected, scroll):    # type: (int, int, int, int) -> int
    """Scroll offset that keeps ``selected`` inside a window of ``height`` rows."""
    height = max(1, height)
    if selected < scroll:
        scroll = selected
    elif selected >= scroll + height:
        scroll = selected - height + 1
    return clamp_scroll(count, height, scroll)


def center_on(count, height, selected):    # type: (int, int, int) -> int
    return clamp_scroll(count, height, selected - max(1, height) // 2)


def visible_range(count, height, scroll):    # type: (int, int, int) -> range
    start = clamp_scroll(count, height, scroll)
    return range(start, min(count, start + max(1, height)))
