"""FastAPI application: quiz generation and topic introspection routes."""
from __future__ import annotations

import json
import logging
import time

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from topic_quiz.config import Settings, load_settings
from topic_quiz.engine import QuizEngine
from topic_quiz.generator import QuizConfigError
from topic_quiz.models import QuizConfig
from topic_quiz.tree import flatten_topic_tree


class AsciiJSONResponse(JSONResponse):
    """JSON with non-ASCII escaped, so lone surrogates (e.g. in a seed) survive."""

    def render(self, content) -> bytes:
        return json.dumps(content, ensure_ascii=True, separators=(",", ":")).encode("ascii")


app = FastAPI(title="Topic Quiz", default_response_class=AsciiJSONResponse)

# Global state (initialized in startup)
_engine: QuizEngine | None = None
_settings: Settings | None = None

_log = logging.getLogger("topic_quiz.api")


def get_engine() -> QuizEngine:
    assert _engine is not None
    return _engine


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


@app.on_event("startup")
async def startup():
    global _engine, _settings
    if _engine is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _engine = QuizEngine.from_files(_settings.corpus_full_path, _settings.taxonomy_full_path)
    _log.info("Corpus: %s, taxonomy: %s", _settings.corpus_full_path, _settings.taxonomy_full_path)


def _error(status: int, message: str, **extra) -> JSONResponse:
    return AsciiJSONResponse({"error": message, **extra}, status_code=status)


# ── API: Quiz generation ──────────────────────────────────────────────────

@app.post("/api/quiz/generate")
async def api_quiz_generate(request: Request):
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return _error(400, "Invalid payload")
    if not isinstance(body, dict):
        return _error(400, "Invalid payload")

    count = body.get("questionCount")
    topics = body.get("topics")
    if not count or not isinstance(count, int) or not isinstance(topics, list):
        return _error(400, "Invalid payload")

    seed = body.get("seed")
    boost = body.get("boostTopics")
    config = QuizConfig(
        question_count=get_settings().clamp_question_count(count),
        topics=tuple(str(t) for t in topics),
        seed=str(seed) if seed else None,
        boost_topics=tuple(str(t) for t in boost) if isinstance(boost, list) else None,
    )

    try:
        quiz = get_engine().generate_quiz(config)
    except QuizConfigError as e:
        return _error(400, str(e))
    except Exception as e:
        _log.exception("Quiz generation failed")
        return _error(500, str(e) or "Failed")

    if quiz.meta.candidate_pool_size == 0 or not quiz.questions:
        return _error(
            400,
            "No candidate sentences found for selected topics",
            meta=quiz.meta.to_dict(),
        )
    return quiz.to_dict()


# ── API: Topics ───────────────────────────────────────────────────────────

@app.get("/api/quiz/topics")
async def api_quiz_topics():
    tree = get_engine().get_topic_tree()
    # version is a timestamp so clients never cache this response
    return {"topics": [n.to_dict() for n in tree], "version": int(time.time() * 1000)}


@app.get("/api/quiz/debug")
async def api_quiz_debug(request: Request):
    engine = get_engine()
    topics_filter = request.query_params.getlist("t")  # ?t=group:prep&t=group:conj
    reset = request.query_params.get("reset") == "1"
    if reset:
        engine.reset_index()

    index = engine.get_sentence_topic_index()
    node_map = {n.id: n for n in flatten_topic_tree(engine.get_topic_tree())}

    entries = []
    for topic_id, sentence_ids in index.topic_to_sentences.items():
        if topics_filter and topic_id not in topics_filter:
            continue
        node = node_map.get(topic_id)
        entries.append({
            "id": topic_id,
            "count": len(sentence_ids),
            "label": (node.path_label or node.label or None) if node else None,
        })

    result = {
        "version": index.version,
        "topicCount": len(index.topic_to_sentences),
        "sentenceCount": len(index.sentences),
        "entries": entries,
    }
    if reset:
        result = {"reset": True, **result}
    return result


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()
