"""
Keyword search over the documentation catalog.

Matching is plain case-insensitive substring containment without
tokenizing or ranking. For each matching document the index reports a
few short context windows around the matching lines so the caller gets
situational text without the whole page.

IMPORTANT:
- Results follow the catalog's fixed order, never a relevance order.
- Windows of adjacent matches may overlap. They are reported as-is,
  neither merged nor deduplicated.
- An empty query is a substring of everything and matches every document.
"""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple

from solafon_mcp.registry.documents import Document


@dataclass(frozen=True)
class ContextWindow:
    """
    A run of document lines surrounding one matching line.

    ``start`` and ``end`` are 0-based, inclusive line indices and always
    lie within the source document.
    """

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class SearchHit:
    key: str
    title: str
    windows: Tuple[ContextWindow, ...]


class DocumentSearchIndex:
    """
    Substring search with line-context extraction.

    The three window constants default to one line before, two lines
    after and three windows per document.
    """

    def __init__(
        self,
        documents: Mapping[str, Document],
        *,
        context_before: int = 1,
        context_after: int = 2,
        max_windows: int = 3,
    ) -> None:
        if context_before < 0 or context_after < 0:
            raise ValueError("Context line counts must not be negative.")
        if max_windows < 1:
            raise ValueError("max_windows must be at least 1.")

        self._documents = documents
        self._context_before = context_before
        self._context_after = context_after
        self._max_windows = max_windows

    def search(self, query: str) -> List[SearchHit]:
        needle = query.lower()
        hits: List[SearchHit] = []

        for key, document in self._documents.items():
            if needle not in document.title.lower() and needle not in document.content.lower():
                continue
            hits.append(
                SearchHit(
                    key=key,
                    title=document.title,
                    windows=tuple(self._windows(document.content, needle)),
                )
            )

        return hits

    def _windows(self, content: str, needle: str) -> Iterable[ContextWindow]:
        lines = content.split("\n")
        last = len(lines) - 1
        found = 0

        for index, line in enumerate(lines):
            if found == self._max_windows:
                return
            if needle not in line.lower():
                continue

            start = max(0, index - self._context_before)
            end = min(last, index + self._context_after)
            found += 1
            yield ContextWindow(
                start=start,
                end=end,
                text="\n".join(lines[start : end + 1]),
            )


def format_search_results(
    query: str,
    hits: List[SearchHit],
    topic_keys: Iterable[str],
) -> str:
    """
    Render search hits as the text returned to the assistant.

    Zero hits render an explicit no-results message listing the topics,
    so an empty answer is never mistaken for success.
    """
    if not hits:
        return (
            f'No results found for "{query}". Try different keywords or use '
            f"solafon_read_docs to browse topics: {', '.join(topic_keys)}"
        )

    sections = [
        f'## {hit.title} (topic: "{hit.key}")\n'
        + "\n---\n".join(window.text for window in hit.windows)
        for hit in hits
    ]
    return (
        f'Found {len(hits)} matching doc(s) for "{query}":\n\n'
        + "\n\n---\n\n".join(sections)
    )
