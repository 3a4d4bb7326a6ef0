"""Topic extraction and the sentence/topic inverted index.

Topic ids live in three namespaces:
  word:<id>          an exact lexical item, e.g. word:artcl.el
  pos:<tag>          a part of speech, e.g. pos:Article
  group:<segment>    a lexical family, e.g. group:pron, or group:pron.subject
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from topic_quiz.models import (
    Lesson,
    NoTranslation,
    PlainTranslation,
    Sentence,
    SentenceTopicIndex,
    TopicId,
    Translation,
    WordListTranslation,
    WordObject,
    WordTranslation,
)

_log = logging.getLogger("topic_quiz.index")

PRONOUN_FAMILY = "pron"

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3


def word_topics(word: WordObject) -> list[TopicId]:
    topics = [f"word:{word.id}"]
    if word.pos:
        topics.append(f"pos:{word.pos}")
    segs = word.id.split(".")
    # single-segment ids still get a family topic (group:hola)
    topics.append(f"group:{segs[0]}")
    if segs[0] == PRONOUN_FAMILY and len(segs) >= 2:
        topics.append(f"group:{segs[0]}.{segs[1]}")
    return topics


def translation_topics(translation: Translation) -> list[TopicId]:
    if isinstance(translation, (NoTranslation, PlainTranslation)):
        return []
    if isinstance(translation, WordTranslation):
        return word_topics(translation.word)
    if isinstance(translation, WordListTranslation):
        return [t for w in translation.words for t in word_topics(w)]
    raise TypeError(f"Unknown translation variant: {type(translation).__name__}")


def extract_topics(sentence: Sentence) -> frozenset[TopicId]:
    topics: set[TopicId] = set()
    for entry in sentence.data:
        topics.update(translation_topics(entry.translation))
    return frozenset(topics)


def iter_sentences(lessons: Iterable[Lesson]) -> Iterable[Sentence]:
    for lesson in lessons:
        yield from lesson.sentences


def build_index(sentences: Iterable[Sentence]) -> SentenceTopicIndex:
    """Build the inverted index over *sentences*.

    Sentence ids must be unique; a repeated id is skipped (first one wins).
    Buckets keep the order in which sentences were first seen.
    """
    kept: list[Sentence] = []
    seen: set[int] = set()
    topic_to_sentences: dict[TopicId, list[int]] = {}
    sentence_topics: dict[int, frozenset[TopicId]] = {}
    duplicates = 0

    for s in sentences:
        if s.id in seen:
            duplicates += 1
            continue
        seen.add(s.id)
        kept.append(s)
        tset = extract_topics(s)
        sentence_topics[s.id] = tset
        # sorted so bucket insertion order doesn't depend on set hashing
        for topic in sorted(tset):
            topic_to_sentences.setdefault(topic, []).append(s.id)

    if duplicates:
        _log.warning("Skipped %d sentences with duplicate ids", duplicates)

    version = index_version(len(kept), len(topic_to_sentences))
    _log.info(
        "Built topic index %s: %d sentences, %d topics",
        version, len(kept), len(topic_to_sentences),
    )
    return SentenceTopicIndex(
        topic_to_sentences={k: tuple(v) for k, v in topic_to_sentences.items()},
        sentence_topics=sentence_topics,
        sentences=tuple(kept),
        version=version,
    )


def build_index_from_lessons(lessons: Iterable[Lesson]) -> SentenceTopicIndex:
    return build_index(iter_sentences(lessons))


def index_version(sentence_count: int, topic_count: int) -> str:
    """Short change-detector over the index's size (not a content hash)."""
    h = _FNV64_OFFSET
    for byte in f"{sentence_count}:{topic_count}".encode():
        h ^= byte
        h = (h * _FNV64_PRIME) & 0xFFFFFFFFFFFFFFFF
    return f"{h:016x}"[:12]
