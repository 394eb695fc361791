"""FastAPI application serving cached posts."""

from __future__ import annotations

from typing import Any, List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from postcache.cache.post_cache import PostCache, PostNotFoundError


class PostSummary(BaseModel):
    id: int
    title: str


class PostDetail(BaseModel):
    id: int
    title: str
    body: str


class PostList(BaseModel):
    posts: List[PostSummary]


def get_post_cache(request: Request) -> PostCache:
    return request.app.state.post_cache


def create_app(cache: PostCache) -> FastAPI:
    """Build the web app around an already initialised cache."""
    app = FastAPI(title="postcache", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.state.post_cache = cache

    @app.get("/posts", response_model=PostList)
    def list_posts(cache: PostCache = Depends(get_post_cache)) -> PostList:
        documents = cache.get_all()
        return PostList(posts=[PostSummary(id=doc.id, title=doc.title) for doc in documents])

    @app.get("/posts/{post_id}", response_model=PostDetail)
    def read_post(post_id: int, cache: PostCache = Depends(get_post_cache)) -> PostDetail:
        try:
            document = cache.get_by_id(post_id)
        except PostNotFoundError:
            raise HTTPException(status_code=404, detail=f"Post with ID {post_id} not found")
        return PostDetail(id=document.id, title=document.title, body=document.body)

    @app.get("/health")
    def health(cache: PostCache = Depends(get_post_cache)) -> dict[str, Any]:
        stats = cache.stats
        return {
            "status": "ok",
            "posts_dir": str(cache.posts_dir),
            "stats": {
                "document_count": stats.document_count,
                "refreshes": stats.refreshes,
                "stale_fallbacks": stats.stale_fallbacks,
                "skipped_files": stats.skipped_files,
                "last_refresh": stats.last_refresh,
            },
        }

    return app
