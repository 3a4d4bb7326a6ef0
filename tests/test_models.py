"""Tests for data models."""
from __future__ import annotations

import dataclasses

import pytest

from topic_quiz.models import (
    NoTranslation,
    PhraseEntry,
    PlainTranslation,
    QuizConfig,
    Sentence,
    SentenceTopicIndex,
    TopicNode,
    WordListTranslation,
    WordObject,
    WordTranslation,
)


class TestSentence:
    def test_immutable(self):
        s = Sentence(id=1, data=(PhraseEntry("Hola"),))
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.id = 2

    def test_to_dict(self):
        w = WordObject(id="artcl.el", word="el", pos="Article")
        s = Sentence(
            id=1,
            sentence="El perro.",
            translation="The dog.",
            data=(
                PhraseEntry("The", WordTranslation(w)),
                PhraseEntry("dog", PlainTranslation("perro")),
                PhraseEntry("."),
            ),
        )
        d = s.to_dict()
        assert d["data"][0]["translation"]["id"] == "artcl.el"
        assert d["data"][1]["translation"] == "perro"
        assert "translation" not in d["data"][2]


class TestTranslation:
    def test_default_is_absent(self):
        assert PhraseEntry("x").translation == NoTranslation()

    def test_list_to_json(self):
        t = WordListTranslation((WordObject(id="a.b", word="b"), WordObject(id="a.c", word="c")))
        assert [w["id"] for w in t.to_json()] == ["a.b", "a.c"]


class TestSentenceTopicIndex:
    def test_lookup_by_id(self):
        s = Sentence(id=42, data=())
        index = SentenceTopicIndex({}, {42: frozenset()}, (s,), "abc")
        assert index.sentence(42) is s
        with pytest.raises(KeyError):
            index.sentence(7)


class TestQuizConfig:
    def test_optional_fields_omitted(self):
        d = QuizConfig(question_count=5, topics=("word:a.b",)).to_dict()
        assert d == {"questionCount": 5, "topics": ["word:a.b"]}


class TestTopicNode:
    def test_unannotated_to_dict(self):
        d = TopicNode(id="word:a.b", label="b").to_dict()
        assert d == {"id": "word:a.b", "label": "b", "info": []}
