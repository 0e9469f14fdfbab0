"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from docnav.index.scanner import DEFAULT_MODULE
from docnav.index.search import DEFAULT_SEARCH_LIMIT

DOCS_PATH_ENV_VAR = "DOCNAV_DOCS_PATH"


def _get_default_docs_path() -> Path:
    """Get the docs root from the environment, falling back to ``docs/``."""
    env_path = os.environ.get(DOCS_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path("docs")


@dataclass(slots=True)
class AppConfig:
    docs_path: Path | None = None
    search_limit: int = DEFAULT_SEARCH_LIMIT
    fallback_module: str = DEFAULT_MODULE

    def __post_init__(self) -> None:
        if self.docs_path is None:
            self.docs_path = _get_default_docs_path()

    def resolve_docs_path(self, base_dir: Path | None = None) -> Path:
        if self.docs_path is None:
            self.docs_path = _get_default_docs_path()
        if Path(self.docs_path).is_absolute() or base_dir is None:
            return Path(self.docs_path)
        return base_dir / self.docs_path
