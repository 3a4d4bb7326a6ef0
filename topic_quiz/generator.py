"""Deterministic, quota-balanced quiz assembly over the topic index.

The same (seed, topics-in-order) pair always reproduces the same quiz for
a given index: every topic pool is shuffled from one shared PRNG stream,
consumed in request order. Reordering the topics may change the result.
"""
from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import TypeVar

from topic_quiz.models import (
    GeneratedQuiz,
    QuizConfig,
    QuizMeta,
    QuizQuestion,
    SentenceTopicIndex,
    TopicId,
)

_log = logging.getLogger("topic_quiz.quiz")

T = TypeVar("T")

# Upper bound on round-robin sweeps, regardless of pool shape
MAX_SWEEPS = 10_000

_MASK32 = 0xFFFFFFFF


class QuizConfigError(ValueError):
    """The quiz request itself is invalid (nothing to retry)."""


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """Small seeded PRNG, bit-compatible with the common JS Mulberry32."""

    def __init__(self, seed: int):
        self._state = seed & _MASK32

    def random(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296


def hash_seed(seed: str) -> int:
    """32-bit FNV-1a over the UTF-16 code units of *seed*."""
    h = 2166136261
    # surrogatepass: lone surrogates are valid JSON string content
    raw = seed.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(raw), 2):
        h ^= raw[i] | (raw[i + 1] << 8)
        h = _imul(h, 16777619)
    return h


def seeded_shuffle(items: Sequence[T], rnd: Callable[[], float]) -> list[T]:
    """Fisher-Yates shuffle of a copy of *items*, drawing from *rnd*."""
    a = list(items)
    for i in range(len(a) - 1, 0, -1):
        j = math.floor(rnd() * (i + 1))
        a[i], a[j] = a[j], a[i]
    return a


def validate_config(config: QuizConfig) -> None:
    if config.question_count < 1:
        raise QuizConfigError("question_count must be > 0")
    if not config.topics:
        raise QuizConfigError("At least one topic required")


def generate_quiz(
    index: SentenceTopicIndex,
    config: QuizConfig,
    now: datetime | None = None,
) -> GeneratedQuiz:
    validate_config(config)
    topics = list(config.topics)
    question_count = config.question_count

    seed = config.seed or str(int(time.time() * 1000))
    rnd = Mulberry32(hash_seed(seed)).random

    # Shuffled candidate pool per topic, in request order
    per_topic: dict[TopicId, list[int]] = {}
    for t in topics:
        per_topic[t] = seeded_shuffle(index.topic_to_sentences.get(t, ()), rnd)

    quota = max(1, math.ceil(question_count / len(topics)))
    remaining = {t: quota for t in topics}
    chosen: dict[int, QuizQuestion] = {}

    def choose(sentence_id: int) -> frozenset[TopicId]:
        matched = index.sentence_topics.get(sentence_id, frozenset())
        chosen[sentence_id] = QuizQuestion(
            sentence_id=sentence_id,
            sentence=index.sentence(sentence_id),
            matched_topics=tuple(t for t in topics if t in matched),
        )
        return matched

    sweeps = 0
    while len(chosen) < question_count and sweeps < MAX_SWEEPS:
        sweeps += 1
        progress = False
        for t in topics:
            if len(chosen) >= question_count:
                break
            if remaining[t] <= 0:
                continue
            candidate = next((sid for sid in per_topic[t] if sid not in chosen), None)
            if candidate is None:
                continue
            matched = choose(candidate)
            # One sentence discharges every requested topic it covers
            for mt in topics:
                if mt in matched and remaining[mt] > 0:
                    remaining[mt] -= 1
            progress = True
        if not progress:
            break

    if len(chosen) < question_count:
        union = [
            sid for sid in dict.fromkeys(sid for t in topics for sid in per_topic[t])
            if sid not in chosen
        ]
        for sid in seeded_shuffle(union, rnd):
            if len(chosen) >= question_count:
                break
            choose(sid)

    questions = tuple(chosen.values())[:question_count]

    candidate_pool_size = len({sid for t in topics for sid in per_topic[t]})
    meta = QuizMeta(
        per_topic_counts={t: len(per_topic[t]) for t in topics},
        candidate_pool_size=candidate_pool_size,
        shortfall=candidate_pool_size < question_count,
    )
    if meta.shortfall:
        _log.info(
            "Quiz shortfall: %d candidates for %d requested questions",
            candidate_pool_size, question_count,
        )

    created = now or datetime.now(timezone.utc)
    return GeneratedQuiz(
        config=config,
        questions=questions,
        created_at=created.isoformat(),
        index_version=index.version,
        meta=meta,
    )
