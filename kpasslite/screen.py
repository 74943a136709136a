#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
import abc
import curses
from typing import Optional, Tuple, Union

from .error import TerminalError
from .navigator import NavEvent

Key = Union[str, int]

HIGHLIGHT_PAIR = 1
ESCAPE = '\x1b'
ENTER_KEYS = {'\n', '\r', curses.KEY_ENTER}
BACKSPACE_KEYS = {'\x7f', '\b', curses.KEY_BACKSPACE, 127, 8}

KEY_MAP = {
    'q': NavEvent.QUIT,
    ' ': NavEvent.TOGGLE_PASSWORDS,
    'f': NavEvent.TOGGLE_EXPAND_ALL,
    'g': NavEvent.TOP,
    'G': NavEvent.BOTTOM,
    '/': NavEvent.ENTER_SEARCH,
    'h': NavEvent.FOCUS_LEFT,
    'l': NavEvent.FOCUS_RIGHT,
    'k': NavEvent.UP,
    'j': NavEvent.DOWN,
    '\n': NavEvent.TOGGLE_EXPAND,
    '\r': NavEvent.TOGGLE_EXPAND,
    curses.KEY_ENTER: NavEvent.TOGGLE_EXPAND,
    curses.KEY_LEFT: NavEvent.FOCUS_LEFT,
    curses.KEY_RIGHT: NavEvent.FOCUS_RIGHT,
    curses.KEY_UP: NavEvent.UP,
    curses.KEY_DOWN: NavEvent.DOWN,
    curses.KEY_HOME: NavEvent.TOP,
    curses.KEY_END: NavEvent.BOTTOM,
    curses.KEY_RESIZE: NavEvent.RESIZE,
}


def key_to_event(key):    # type: (Key) -> NavEvent
    return KEY_MAP.get(key, NavEvent.NONE)


class Screen(abc.ABC):
    """ Drawing surface the viewer paints on """

    @abc.abstractmethod
    def size(self):    # type: () -> Tuple[int, int]
        pass

    @abc.abstractmethod
    def draw_box(self, y, x, height, width, title='', highlight=False):
        pass

    @abc.abstractmethod
    def print_at(self, y, x, text, highlight=False):
        pass

    @abc.abstractmethod
    def read_key(self):    # type: () -> Key
        pass

    def clear(self):
        pass

    def refresh(self):
        pass


class CursesScreen(Screen):
    def __init__(self, stdscr):
        self.stdscr = stdscr
        if not curses.has_colors():
            raise TerminalError('Terminal does not support colors')
        curses.raw()
        curses.noecho()
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.keypad(True)
        curses.start_color()
        curses.init_pair(HIGHLIGHT_PAIR, curses.COLOR_WHITE, curses.COLOR_BLUE)

    def size(self):
        return self.stdscr.getmaxyx()

    def _attr(self, highlight):
        return curses.color_pair(HIGHLIGHT_PAIR) if highlight else curses.A_NORMAL

    def draw_box(self, y, x, height, width, title='', highlight=False):
        if height < 2 or width < 2:
            return
        try:
            win = self.stdscr.derwin(height, width, y, x)
            win.box()
            if title:
                win.addnstr(0, 2, title, max(0, width - 4), self._attr(highlight))
        except curses.error:
            # box does not fit into the terminal
            pass

    def print_at(self, y, x, text, highlight=False):
        rows, cols = self.size()
        if y < 0 or y >= rows or x < 0 or x >= cols:
            return
        try:
            self.stdscr.addnstr(y, x, text, cols - x, self._attr(highlight))
        except curses.error:
            # writing the bottom-right cell moves the cursor off screen
            pass

    def read_key(self):
        return self.stdscr.get_wch()

    def clear(self):
        self.stdscr.erase()

    def refresh(self):
        self.stdscr.refresh()


def read_line(screen, y, x, max_len):    # type: (Screen, int, int, int) -> Optional[str]
    """Blocking line editor. Returns None when cancelled with Escape."""
    text = ''
    while True:
        screen.print_at(y, x, ' ' * max_len)
        screen.print_at(y, x, text)
        screen.refresh()
        key = screen.read_key()
        if key in ENTER_KEYS:
            return text
        if key == ESCAPE:
            return None
        if key in BACKSPACE_KEYS:
            text = text[:-1]
        elif isinstance(key, str) and key.isprintable() and len(text) < max_len:
            text += key
