"""postcache - lazily refreshed in-memory cache of HTML posts."""
