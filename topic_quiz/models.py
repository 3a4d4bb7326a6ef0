from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

TopicId = str


# ── Lexical data ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class WordObject:
    id: str  # dotted, e.g. "pron.subject.yo"
    word: str
    pos: str | None = None
    translations: tuple[str, ...] = ()
    info: tuple[str, ...] = ()
    forms: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "word": self.word,
            "pos": self.pos,
            "translations": list(self.translations),
            "info": list(self.info),
        }
        if self.forms:
            d["forms"] = list(self.forms)
        return d


@dataclass(frozen=True)
class WordGroup:
    id: str
    name: str
    info: tuple[str, ...] = ()
    words: tuple[WordObject, ...] = ()


@dataclass(frozen=True)
class PronounGroup(WordGroup):
    subgroups: dict[str, WordGroup] = field(default_factory=dict)


@dataclass(frozen=True)
class Taxonomy:
    artcl: WordGroup
    conj: WordGroup
    pron: PronounGroup
    prep: WordGroup
    advrb: WordGroup
    noun: WordGroup
    verb: WordGroup


# ── Translation annotation (one of four variants) ─────────────────────────

@dataclass(frozen=True)
class NoTranslation:
    def to_json(self) -> None:
        return None


@dataclass(frozen=True)
class PlainTranslation:
    text: str

    def to_json(self) -> str:
        return self.text


@dataclass(frozen=True)
class WordTranslation:
    word: WordObject

    def to_json(self) -> dict:
        return self.word.to_dict()


@dataclass(frozen=True)
class WordListTranslation:
    words: tuple[WordObject, ...]

    def to_json(self) -> list[dict]:
        return [w.to_dict() for w in self.words]


Translation = Union[NoTranslation, PlainTranslation, WordTranslation, WordListTranslation]


# ── Corpus ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PhraseEntry:
    phrase: str
    translation: Translation = NoTranslation()

    def to_dict(self) -> dict:
        d: dict = {"phrase": self.phrase}
        value = self.translation.to_json()
        if value is not None:
            d["translation"] = value
        return d


@dataclass(frozen=True)
class Sentence:
    id: int
    data: tuple[PhraseEntry, ...]
    sentence: str = ""
    translation: str = ""
    lesson: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sentence": self.sentence,
            "translation": self.translation,
            "lesson": self.lesson,
            "data": [p.to_dict() for p in self.data],
        }


@dataclass(frozen=True)
class Lesson:
    lesson: int
    name: str
    sentences: tuple[Sentence, ...] = ()


@dataclass(frozen=True)
class SentenceTopicIndex:
    topic_to_sentences: dict[TopicId, tuple[int, ...]]
    sentence_topics: dict[int, frozenset[TopicId]]
    sentences: tuple[Sentence, ...]
    version: str
    _by_id: dict[int, Sentence] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        if not self._by_id:
            self._by_id.update((s.id, s) for s in self.sentences)

    def sentence(self, sentence_id: int) -> Sentence:
        return self._by_id[sentence_id]


# ── Topic tree ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TopicNode:
    id: TopicId
    label: str
    info: tuple[str, ...] = ()
    children: tuple[TopicNode, ...] = ()
    candidate_count: int | None = None
    path_label: str | None = None

    def to_dict(self) -> dict:
        d: dict = {"id": self.id, "label": self.label, "info": list(self.info)}
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        if self.candidate_count is not None:
            d["candidateCount"] = self.candidate_count
        if self.path_label is not None:
            d["pathLabel"] = self.path_label
        return d


# ── Quiz ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class QuizConfig:
    question_count: int
    topics: tuple[TopicId, ...]
    seed: str | None = None
    boost_topics: tuple[TopicId, ...] | None = None  # accepted, currently unused

    def to_dict(self) -> dict:
        d: dict = {"questionCount": self.question_count, "topics": list(self.topics)}
        if self.seed is not None:
            d["seed"] = self.seed
        if self.boost_topics is not None:
            d["boostTopics"] = list(self.boost_topics)
        return d


@dataclass(frozen=True)
class QuizQuestion:
    sentence_id: int
    sentence: Sentence
    matched_topics: tuple[TopicId, ...]

    def to_dict(self) -> dict:
        return {
            "sentenceId": self.sentence_id,
            "sentence": self.sentence.to_dict(),
            "matchedTopics": list(self.matched_topics),
        }


@dataclass(frozen=True)
class QuizMeta:
    per_topic_counts: dict[TopicId, int]
    candidate_pool_size: int
    shortfall: bool

    def to_dict(self) -> dict:
        return {
            "perTopicCounts": dict(self.per_topic_counts),
            "candidatePoolSize": self.candidate_pool_size,
            "shortfall": self.shortfall,
        }


@dataclass(frozen=True)
class GeneratedQuiz:
    config: QuizConfig
    questions: tuple[QuizQuestion, ...]
    created_at: str
    index_version: str
    meta: QuizMeta

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "questions": [q.to_dict() for q in self.questions],
            "createdAt": self.created_at,
            "indexVersion": self.index_version,
            "meta": self.meta.to_dict(),
        }
