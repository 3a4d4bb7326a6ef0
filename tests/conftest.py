"""Shared test fixtures."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from topic_quiz.cache import IndexCache
from topic_quiz.engine import QuizEngine
from topic_quiz.models import (
    Lesson,
    PhraseEntry,
    Sentence,
    WordListTranslation,
    WordObject,
    WordTranslation,
)
from topic_quiz.parsers.corpus_parser import parse_corpus
from topic_quiz.parsers.taxonomy_parser import parse_taxonomy
from topic_quiz.topics import build_index, build_index_from_lessons

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

POS_BY_FAMILY = {
    "artcl": "Article",
    "conj": "Conjunction",
    "pron": "Pronoun",
    "prep": "Preposition",
    "advrb": "Adverb",
    "noun": "Noun",
    "verb": "Verb",
}


def word(word_id: str) -> WordObject:
    family = word_id.split(".")[0]
    return WordObject(id=word_id, word=word_id.split(".")[-1], pos=POS_BY_FAMILY.get(family))


def sentence(sid: int, *word_ids: str | tuple[str, ...]) -> Sentence:
    """A sentence with one phrase per argument; a tuple becomes a multi-word phrase."""
    entries = []
    for w in word_ids:
        if isinstance(w, tuple):
            entries.append(PhraseEntry(" ".join(w), WordListTranslation(tuple(word(x) for x in w))))
        else:
            entries.append(PhraseEntry(w, WordTranslation(word(w))))
    return Sentence(id=sid, data=tuple(entries), sentence=f"sentence {sid}")


@pytest.fixture
def corpus_raw():
    return json.loads((DATA_DIR / "corpus.json").read_text(encoding="utf-8"))


@pytest.fixture
def taxonomy_raw():
    return json.loads((DATA_DIR / "taxonomy.json").read_text(encoding="utf-8"))


@pytest.fixture
def sample_lessons(corpus_raw):
    return parse_corpus(corpus_raw)


@pytest.fixture
def sample_taxonomy(taxonomy_raw):
    return parse_taxonomy(taxonomy_raw)


@pytest.fixture
def sample_index(sample_lessons):
    return build_index_from_lessons(sample_lessons)


@pytest.fixture
def sample_engine(sample_lessons, sample_taxonomy):
    return QuizEngine(IndexCache(
        load_corpus=lambda: sample_lessons,
        load_taxonomy=lambda: sample_taxonomy,
    ))


@pytest.fixture
def scenario_sentences():
    """S1: article only, S2: article + verb, S3: verb only."""
    return [
        sentence(1, "artcl.el", "noun.perro"),
        sentence(2, "artcl.el", "noun.perro", "verb.ser"),
        sentence(3, "pron.subject.yo", "verb.ser"),
    ]


@pytest.fixture
def scenario_index(scenario_sentences):
    return build_index(scenario_sentences)


@pytest.fixture
def large_index():
    """Forty sentences spread over four articles and two verbs, with overlap."""
    articles = ["artcl.el", "artcl.la", "artcl.un", "artcl.una"]
    verbs = ["verb.ser", "verb.tener"]
    sentences = []
    for i in range(40):
        parts: list = [articles[i % 4], "noun.casa"]
        if i % 3 == 0:
            parts.append(verbs[i % 2])
        if i % 5 == 0:
            parts.append(("pron.subject.yo", "pron.dObj.lo"))
        sentences.append(sentence(100 + i, *parts))
    return build_index(sentences)


@pytest.fixture
def lessons_factory():
    def make(*sentences: Sentence) -> list[Lesson]:
        return [Lesson(lesson=1, name="test", sentences=tuple(sentences))]
    return make


@pytest.fixture
def make_sentence():
    return sentence
