"""Parse a lesson corpus (JSON) into Lesson/Sentence objects.

Expected shape:
  {"lessons": [{"lesson": 1, "name": "...", "sentences": [
      {"id": 101, "sentence": "...", "translation": "...",
       "data": [{"phrase": "el", "translation": {"id": "artcl.el", ...}}]}
  ]}]}

A bare list of lessons is accepted too. Records that don't fit (no numeric
id, no phrase list) are skipped, not raised.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from topic_quiz.models import (
    Lesson,
    NoTranslation,
    PhraseEntry,
    PlainTranslation,
    Sentence,
    Translation,
    WordListTranslation,
    WordObject,
    WordTranslation,
)

_log = logging.getLogger("topic_quiz.parsers")


def parse_corpus_file(path: Path) -> list[Lesson]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    lessons, skipped = _parse_lessons(raw)
    if skipped:
        _log.warning("%s: skipped %d malformed sentence records", path.name, skipped)
    return lessons


def parse_corpus(raw: dict | list) -> list[Lesson]:
    lessons, _ = _parse_lessons(raw)
    return lessons


def _parse_lessons(raw: dict | list) -> tuple[list[Lesson], int]:
    items = raw.get("lessons", []) if isinstance(raw, dict) else raw
    lessons: list[Lesson] = []
    skipped = 0

    for i, item in enumerate(items or []):
        if not isinstance(item, dict):
            continue
        number = item.get("lesson")
        if not isinstance(number, int) or isinstance(number, bool):
            number = i + 1
        sentences: list[Sentence] = []
        raw_sentences = item.get("sentences")
        if not isinstance(raw_sentences, list):
            lessons.append(Lesson(lesson=number, name=str(item.get("name", ""))))
            continue
        for s in raw_sentences:
            sentence = parse_sentence(s, lesson=number)
            if sentence is None:
                skipped += 1
                continue
            sentences.append(sentence)
        lessons.append(Lesson(
            lesson=number,
            name=str(item.get("name", "")),
            sentences=tuple(sentences),
        ))

    return lessons, skipped


def parse_sentence(raw: object, lesson: int | None = None) -> Sentence | None:
    """Return a Sentence, or None when the record has no numeric id or phrase list."""
    if not isinstance(raw, dict):
        return None
    sid = raw.get("id")
    data = raw.get("data")
    # bool is an int subclass; true/false is not an id
    if not isinstance(sid, int) or isinstance(sid, bool) or not isinstance(data, list):
        return None

    entries = []
    for part in data:
        if isinstance(part, dict) and isinstance(part.get("phrase"), str):
            entries.append(PhraseEntry(
                phrase=part["phrase"],
                translation=parse_translation(part.get("translation")),
            ))

    return Sentence(
        id=sid,
        data=tuple(entries),
        sentence=str(raw.get("sentence", "")),
        translation=str(raw.get("translation", "")),
        lesson=lesson,
    )


def parse_translation(value: object) -> Translation:
    if value is None or value == "":
        return NoTranslation()
    if isinstance(value, str):
        return PlainTranslation(value)
    if isinstance(value, list):
        words = [w for w in (parse_word(v) for v in value) if w is not None]
        return WordListTranslation(tuple(words)) if words else NoTranslation()
    word = parse_word(value)
    return WordTranslation(word) if word else NoTranslation()


def parse_word(value: object) -> WordObject | None:
    if not isinstance(value, dict):
        return None
    wid = value.get("id")
    if not isinstance(wid, str) or not wid:
        return None
    pos = value.get("pos")
    return WordObject(
        id=wid,
        word=str(value.get("word", "")),
        pos=pos if isinstance(pos, str) and pos else None,
        translations=_str_tuple(value.get("translations")),
        info=_str_tuple(value.get("info")),
        forms=_str_tuple(value.get("forms")),
    )


def _str_tuple(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(v) for v in value)
    return ()
