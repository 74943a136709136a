#
# kpasslite
# Read-only terminal viewer for KeePass databases
# Contact: kpasslite@users.noreply.github.com
#
import enum
import logging
from typing import List, Optional

from .flatten import expand_ancestors
from .vault import Entry, GroupNode, VaultTree


class SearchStatus(enum.Enum):
    NONE = 'none'
    FOUND = 'found'
    NOT_FOUND = 'not_found'


class SearchResult:
    def __init__(self, query, group=None, matches=None):
        self.query = query          # type: str
        self.group = group          # type: Optional[GroupNode]
        self.matches = matches or ([group] if group else [])    # type: List[GroupNode]

    @property
    def status(self):
        return SearchStatus.FOUND if self.group is not None else SearchStatus.NOT_FOUND

    @property
    def found(self):
        return self.group is not None

    def __repr__(self):
        return 'SearchResult(query={!r}, status={}, group={})'.format(
            self.query, self.status.name, self.group.name if self.group else None)


def entry_to_lowerstring(entry):    # type: (Entry) -> str
    """Searchable text of an entry. Passwords are excluded."""
    return '\n'.join(x.lower() for x in (entry.title, entry.username, entry.url, entry.notes) if x)


def search_groups(tree, query):    # type: (VaultTree, str) -> SearchResult
    """First group in pre-order whose name contains the query, ignoring case.

    The synthetic root is never a match.
    """
    if not query:
        return SearchResult(query or '')
    needle = query.lower()
    for group in tree.traverse():
        if group.is_root:
            continue
        if needle in group.name.lower():
            return SearchResult(query, group)
    return SearchResult(query)


def search_entries(tree, query):    # type: (VaultTree, str) -> List[GroupNode]
    """Groups owning at least one entry that contains the query, in pre-order."""
    if not query:
        return []
    needle = query.lower()
    return [group for group in tree.traverse()
            if any(needle in entry_to_lowerstring(x) for x in group.entries)]


def find(tree, query):    # type: (VaultTree, str) -> SearchResult
    """Locate a group by name, then by entry content, and make it reachable.

    On success every ancestor of the match is expanded. The match keeps its
    own flag. On failure no flag is touched.
    """
    result = search_groups(tree, query)
    if not result.found and query:
        matches = search_entries(tree, query)
        if matches:
            result = SearchResult(query, matches[0], matches)
    if result.found:
        expand_ancestors(tree, result.group)
        logging.debug('Search: %d match(es), first "%s"', len(result.matches), tree.get_path(result.group))
    else:
        logging.debug('Search: no match')
    return result
