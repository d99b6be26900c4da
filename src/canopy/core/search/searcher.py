"""Label search over a TreeIndex, with ancestor expansion."""

from collections.abc import Sequence

from canopy.core.events import EventChannel
from canopy.core.index.tree_index import TreeIndex
from canopy.core.state.expansion import ExpansionState
from canopy.models.events import SearchCleared, SearchPerformed
from canopy.models.node import SearchHit, TreeNode
from canopy.models.state import SearchOptions


def _matches_field(value: str, term: str, options: SearchOptions) -> bool:
    if not options.case_sensitive:
        value = value.lower()
    if options.whole_word:
        return term in value.split()
    return term in value


def node_matches(node: TreeNode, term: str, options: SearchOptions) -> bool:
    """Return True when any searched field of node contains term.

    ``term`` must already be lowered when the search is case-insensitive.
    Non-string field values never match.
    """
    for field in options.fields:
        value = node.data.get(field)
        if isinstance(value, str) and value and _matches_field(value, term, options):
            return True
    return False


def search_index(index: TreeIndex, query: str, options: SearchOptions) -> list[SearchHit]:
    """Match every node of the index against query, in depth-first order.

    Returns an empty list for a blank query.
    """
    if not query.strip():
        return []

    term = query if options.case_sensitive else query.lower()
    hits: list[SearchHit] = []
    for node_id in index.iter_depth_first():
        node = index.get_node(node_id)
        if node is not None and node_matches(node, term, options):
            hits.append(SearchHit(node_id=node_id, node=node, path=node.path))
    return hits


class SearchEngine:
    """Current query and match set for one index.

    Matches are always recomputed wholesale. Expanding the ancestors of
    matches is the one place search writes into expansion state; clearing a
    search leaves those expansions in place.
    """

    def __init__(
        self,
        index: TreeIndex,
        channel: EventChannel,
        expansion: ExpansionState,
        *,
        default_fields: Sequence[str],
    ) -> None:
        self._index = index
        self._channel = channel
        self._expansion = expansion
        self._default_fields = tuple(default_fields)
        self._query = ""
        self._results: dict[str, None] = {}

    @property
    def query(self) -> str:
        return self._query

    def rebind(self, index: TreeIndex) -> None:
        self._index = index
        self._query = ""
        self._results = {}

    def is_result(self, node_id: str) -> bool:
        return node_id in self._results

    def result_ids(self) -> tuple[str, ...]:
        return tuple(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def options(
        self,
        *,
        fields: Sequence[str] | None = None,
        case_sensitive: bool = False,
        whole_word: bool = False,
        expand_results: bool = True,
    ) -> SearchOptions:
        return SearchOptions(
            fields=tuple(fields) if fields else self._default_fields,
            case_sensitive=case_sensitive,
            whole_word=whole_word,
            expand_results=expand_results,
        )

    def search(self, query: str, options: SearchOptions) -> list[SearchHit]:
        self._query = query
        hits = search_index(self._index, query, options)
        self._results = dict.fromkeys(h.node_id for h in hits)

        if not query.strip():
            self._channel.track(SearchCleared())
            return []

        with self._channel.batch():
            if options.expand_results:
                for hit in hits:
                    for ancestor_id in hit.path[:-1]:
                        self._expansion.expand(ancestor_id)
            self._channel.track(SearchPerformed(query=query, result_ids=self.result_ids()))
        return hits

    def clear(self) -> None:
        self._query = ""
        self._results = {}
        self._channel.track(SearchCleared())

    def restore(self, query: str, node_ids: Sequence[str]) -> None:
        """Replace query and matches without notifications (snapshot import)."""
        self._query = query
        if not query.strip():
            self._results = {}
            return
        self._results = dict.fromkeys(i for i in node_ids if i in self._index)
