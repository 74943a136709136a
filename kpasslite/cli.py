#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
import contextlib
import curses
import getpass
import locale
import logging

from . import __logging_format__
from .decoder import open_vault
from .display import compute_layout, paint
from .error import TerminalError
from .navigator import Navigator
from .params import ViewerParams
from .screen import CursesScreen, Screen, key_to_event, read_line
from .vault import VaultTree

SEARCH_MAX_LENGTH = 30


def get_password(prompt='Enter database password: '):    # type: (str) -> str
    return getpass.getpass(prompt=prompt)


def run_viewer(screen, navigator):    # type: (Screen, Navigator) -> None
    while navigator.state.running:
        layout = compute_layout(*screen.size())
        geometry = layout.geometry
        paint(screen, layout, navigator.view(geometry))

        event = key_to_event(screen.read_key())
        navigator.dispatch(event, geometry)

        if navigator.state.in_search_mode:
            paint(screen, layout, navigator.view(geometry))
            query = read_line(screen, layout.search_top + 1, 3, min(SEARCH_MAX_LENGTH, max(1, layout.cols - 5)))
            if query is None:
                navigator.cancel_search()
            else:
                navigator.submit_search(query, geometry)


@contextlib.contextmanager
def console_logging_suspended(log_file=None):
    """Console handlers would draw over the curses screen"""
    root = logging.getLogger()
    saved = root.handlers[:]
    for handler in saved:
        root.removeHandler(handler)
    if log_file:
        handler = logging.FileHandler(log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter(__logging_format__))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        yield
    finally:
        root.removeHandler(handler)
        handler.close()
        for h in saved:
            root.addHandler(h)


def _session(stdscr, tree, params):    # type: (any, VaultTree, ViewerParams) -> None
    screen = CursesScreen(stdscr)
    navigator = Navigator(tree, show_passwords=params.unmask_all, expand_all=params.expand_all)
    run_viewer(screen, navigator)


def loop(params):    # type: (ViewerParams) -> int
    if not params.password:
        params.password = get_password()
    try:
        tree = open_vault(params.database, params.password, keyfile=params.keyfile)
    finally:
        params.clear_session()

    locale.setlocale(locale.LC_ALL, '')
    with console_logging_suspended(params.log_file):
        try:
            curses.wrapper(_session, tree, params)
        except curses.error as e:
            raise TerminalError(f'Unable to initialize terminal: {e}')
    return 0
