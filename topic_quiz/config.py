from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "corpus_path": "data/corpus.json",
    "taxonomy_path": "data/taxonomy.json",
    "min_question_count": 10,
    "max_question_count": 50,
    "host": "127.0.0.1",
    "port": 8765,
}


@dataclass
class Settings:
    corpus_path: str = DEFAULTS["corpus_path"]
    taxonomy_path: str = DEFAULTS["taxonomy_path"]
    min_question_count: int = DEFAULTS["min_question_count"]
    max_question_count: int = DEFAULTS["max_question_count"]
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def corpus_full_path(self) -> Path:
        return self.project_root / self.corpus_path

    @property
    def taxonomy_full_path(self) -> Path:
        return self.project_root / self.taxonomy_path

    def clamp_question_count(self, count: int) -> int:
        return min(self.max_question_count, max(self.min_question_count, count))

    def to_dict(self) -> dict:
        return {
            "corpus_path": self.corpus_path,
            "taxonomy_path": self.taxonomy_path,
            "min_question_count": self.min_question_count,
            "max_question_count": self.max_question_count,
            "host": self.host,
            "port": self.port,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
