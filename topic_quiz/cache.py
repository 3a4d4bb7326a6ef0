"""Memoized topic index and topic tree with explicit invalidation."""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from topic_quiz.models import Lesson, SentenceTopicIndex, Taxonomy, TopicNode
from topic_quiz.topics import build_index_from_lessons
from topic_quiz.tree import annotate_topic_tree, build_topic_tree

_log = logging.getLogger("topic_quiz.cache")


class IndexCache:
    """Builds the index and tree lazily, once, until invalidate() is called.

    The loaders are called on every (re)build, so a reset picks up whatever
    the corpus and taxonomy providers return at that point.
    """

    def __init__(
        self,
        load_corpus: Callable[[], Iterable[Lesson]],
        load_taxonomy: Callable[[], Taxonomy],
    ):
        self._load_corpus = load_corpus
        self._load_taxonomy = load_taxonomy
        self._lock = threading.RLock()
        self._index: SentenceTopicIndex | None = None
        self._tree: list[TopicNode] | None = None

    def get_index(self) -> SentenceTopicIndex:
        index = self._index
        if index is not None:
            return index
        with self._lock:
            # Another thread may have finished the build while we waited
            if self._index is None:
                self._index = build_index_from_lessons(self._load_corpus())
            return self._index

    def get_topic_tree(self) -> list[TopicNode]:
        tree = self._tree
        if tree is not None:
            return tree
        with self._lock:
            if self._tree is None:
                raw = build_topic_tree(self._load_taxonomy())
                self._tree = annotate_topic_tree(raw, self.get_index())
            return self._tree

    def invalidate(self) -> None:
        with self._lock:
            self._index = None
            self._tree = None
        _log.info("Topic index invalidated")

    @property
    def is_built(self) -> bool:
        return self._index is not None
