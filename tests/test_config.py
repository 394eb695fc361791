"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

from postcache.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.posts_dir == Path("posts")
        assert config.host == "127.0.0.1"
        assert config.port == 8000

    def test_custom_config(self) -> None:
        config = AppConfig(posts_dir=Path("/srv/posts"), host="0.0.0.0", port=9000)

        assert config.posts_dir == Path("/srv/posts")
        assert config.host == "0.0.0.0"
        assert config.port == 9000

    def test_resolve_posts_dir_absolute(self) -> None:
        """Should return absolute path as-is."""
        config = AppConfig(posts_dir=Path("/absolute/posts"))

        assert config.resolve_posts_dir(Path("/base")) == Path("/absolute/posts")

    def test_resolve_posts_dir_relative_no_base(self) -> None:
        config = AppConfig(posts_dir=Path("relative/posts"))

        assert config.resolve_posts_dir(base_dir=None) == Path("relative/posts")

    def test_resolve_posts_dir_relative_with_base(self) -> None:
        """Should resolve relative path against base_dir."""
        config = AppConfig(posts_dir=Path("relative/posts"))

        assert config.resolve_posts_dir(base_dir=Path("/base")) == Path("/base/relative/posts")

    def test_resolve_default(self) -> None:
        assert AppConfig().resolve_posts_dir(Path("/project")) == Path("/project/posts")
