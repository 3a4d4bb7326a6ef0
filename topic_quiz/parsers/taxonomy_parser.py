"""Parse the grouped word dictionary (JSON) into a Taxonomy.

Top-level keys are the fixed families: artcl, conj, pron, prep, advrb,
noun, verb. Each family is {"id", "name", "info", "words"} where "words"
maps a key to a word object (a list of word objects is accepted too).
The pronoun family additionally carries demonstrative, interrogative,
subject and dObj sub-groups of the same shape.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from topic_quiz.models import PronounGroup, Taxonomy, WordGroup, WordObject
from topic_quiz.parsers.corpus_parser import parse_word

_log = logging.getLogger("topic_quiz.parsers")

FAMILIES = ("artcl", "conj", "pron", "prep", "advrb", "noun", "verb")
PRONOUN_SUBGROUPS = ("demonstrative", "interrogative", "subject", "dObj")


def parse_taxonomy_file(path: Path) -> Taxonomy:
    raw = json.loads(path.read_text(encoding="utf-8"))
    taxonomy = parse_taxonomy(raw)
    missing = [f for f in FAMILIES if f not in raw]
    if missing:
        _log.warning("%s: missing word families %s", path.name, ", ".join(missing))
    return taxonomy


def parse_taxonomy(raw: dict) -> Taxonomy:
    groups = {key: parse_group(key, raw.get(key)) for key in FAMILIES if key != "pron"}
    pron = raw.get("pron") if isinstance(raw.get("pron"), dict) else {}
    base = parse_group("pron", pron)
    subgroups = {
        part: parse_group(part, pron[part])
        for part in PRONOUN_SUBGROUPS
        if isinstance(pron.get(part), dict)
    }
    return Taxonomy(
        pron=PronounGroup(
            id=base.id,
            name=base.name,
            info=base.info,
            words=base.words,
            subgroups=subgroups,
        ),
        **groups,
    )


def parse_group(key: str, raw: object) -> WordGroup:
    if not isinstance(raw, dict):
        return WordGroup(id=key, name="")
    words_raw = raw.get("words") or {}
    values = words_raw.values() if isinstance(words_raw, dict) else words_raw
    words = tuple(w for w in (parse_word(v) for v in values) if w is not None)
    info = raw.get("info") or []
    return WordGroup(
        id=str(raw.get("id") or key),
        name=str(raw.get("name") or ""),
        info=tuple(str(i) for i in info) if isinstance(info, list) else (str(info),),
        words=words,
    )
