"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_POSTS_DIR = Path("posts")


@dataclass(slots=True)
class AppConfig:
    posts_dir: Path = DEFAULT_POSTS_DIR
    host: str = "127.0.0.1"
    port: int = 8000

    def resolve_posts_dir(self, base_dir: Path | None = None) -> Path:
        posts_dir = Path(self.posts_dir).expanduser()
        if posts_dir.is_absolute() or base_dir is None:
            return posts_dir
        return base_dir / posts_dir
