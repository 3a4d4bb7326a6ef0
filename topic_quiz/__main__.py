"""CLI entry point for topic-quiz.

Usage:
  python -m topic_quiz serve [--port PORT] [--host HOST]
  python -m topic_quiz stop
  python -m topic_quiz status
  python -m topic_quiz topics
  python -m topic_quiz index
  python -m topic_quiz generate --topic TOPIC [--topic TOPIC ...] [--count N] [--seed SEED]
"""
from __future__ import annotations

import contextlib
import json
import os
import signal
import sys
from pathlib import Path

PID_FILE = Path(__file__).resolve().parent.parent / ".server.pid"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "status":
        _status()
    elif command == "topics":
        _topics()
    elif command == "index":
        _index()
    elif command == "generate":
        _generate(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, status, topics, index, generate")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _parse_multi_flag(args: list[str], name: str) -> list[str]:
    return [args[i + 1] for i, a in enumerate(args) if a == name and i + 1 < len(args)]


def _alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True  # exists, owned by another user
    return True


def _server_pid() -> int | None:
    """PID of the running server; a stale or unreadable PID file is removed."""
    try:
        pid = int(PID_FILE.read_text())
    except FileNotFoundError:
        return None
    except ValueError:
        pid = None
    if pid is None or not _alive(pid):
        PID_FILE.unlink(missing_ok=True)
        return None
    return pid


def _stop() -> bool:
    pid = _server_pid()
    if pid is None:
        print("Server is not running.")
        return False
    with contextlib.suppress(ProcessLookupError):
        os.kill(pid, signal.SIGTERM)
    PID_FILE.unlink(missing_ok=True)
    print(f"Sent SIGTERM to server (PID {pid}).")
    return True


def _status():
    pid = _server_pid()
    print(f"Server is running (PID {pid})." if pid else "Server is not running.")


def _serve(args: list[str]):
    import uvicorn

    from topic_quiz.config import load_settings

    existing = _server_pid()
    if existing is not None:
        print(f"Server already running (PID {existing}). Use 'stop' first.")
        sys.exit(1)

    settings = load_settings()
    port = int(_parse_flag(args, "--port", str(settings.port)))
    host = _parse_flag(args, "--host", settings.host)
    PID_FILE.write_text(str(os.getpid()))

    print(f"Starting Topic Quiz on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(
            "topic_quiz.app:app",
            host=host,
            port=port,
            reload=False,
            timeout_graceful_shutdown=5,
        )
    finally:
        PID_FILE.unlink(missing_ok=True)


def _load_engine():
    from topic_quiz.config import load_settings
    from topic_quiz.engine import QuizEngine

    settings = load_settings()
    for p in (settings.corpus_full_path, settings.taxonomy_full_path):
        if not p.exists():
            print(f"Not found: {p}")
            sys.exit(1)
    return QuizEngine.from_files(settings.corpus_full_path, settings.taxonomy_full_path)


def _topics():
    from topic_quiz.tree import flatten_topic_tree

    engine = _load_engine()
    for node in flatten_topic_tree(engine.get_topic_tree()):
        depth = node.path_label.count(" / ") if node.path_label else 0
        print(f"{'  ' * depth}{node.label}  [{node.id}]  {node.candidate_count}")


def _index():
    engine = _load_engine()
    index = engine.get_sentence_topic_index()
    print(f"Index version: {index.version}")
    print(f"{len(index.sentences)} sentences, {len(index.topic_to_sentences)} topics\n")
    for topic_id in sorted(index.topic_to_sentences):
        print(f"  {len(index.topic_to_sentences[topic_id]):5d}  {topic_id}")


def _generate(args: list[str]):
    from topic_quiz.generator import QuizConfigError
    from topic_quiz.models import QuizConfig

    topics = _parse_multi_flag(args, "--topic")
    count = int(_parse_flag(args, "--count", "10"))
    seed = _parse_flag(args, "--seed", "") or None

    engine = _load_engine()
    try:
        quiz = engine.generate_quiz(QuizConfig(question_count=count, topics=tuple(topics), seed=seed))
    except QuizConfigError as e:
        print(f"Invalid quiz request: {e}")
        sys.exit(1)

    print(json.dumps(quiz.to_dict(), indent=2, ensure_ascii=False))
    if quiz.meta.shortfall:
        print(
            f"\nOnly {quiz.meta.candidate_pool_size} candidate sentences "
            f"for {count} requested questions",
            file=sys.stderr,
        )


if __name__ == "__main__":
    main()
