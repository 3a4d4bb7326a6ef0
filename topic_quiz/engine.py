"""Query and generation API over a cached topic index."""
from __future__ import annotations

from pathlib import Path

from topic_quiz.cache import IndexCache
from topic_quiz.generator import generate_quiz, validate_config
from topic_quiz.models import GeneratedQuiz, QuizConfig, SentenceTopicIndex, TopicNode
from topic_quiz.parsers.corpus_parser import parse_corpus_file
from topic_quiz.parsers.taxonomy_parser import parse_taxonomy_file


class QuizEngine:
    def __init__(self, cache: IndexCache):
        self.cache = cache

    @classmethod
    def from_files(cls, corpus_path: Path, taxonomy_path: Path) -> QuizEngine:
        return cls(IndexCache(
            load_corpus=lambda: parse_corpus_file(corpus_path),
            load_taxonomy=lambda: parse_taxonomy_file(taxonomy_path),
        ))

    def get_topic_tree(self) -> list[TopicNode]:
        return self.cache.get_topic_tree()

    def get_sentence_topic_index(self) -> SentenceTopicIndex:
        return self.cache.get_index()

    def reset_index(self) -> None:
        self.cache.invalidate()

    def generate_quiz(self, config: QuizConfig) -> GeneratedQuiz:
        # Bad configs fail before the index is touched
        validate_config(config)
        return generate_quiz(self.cache.get_index(), config)
