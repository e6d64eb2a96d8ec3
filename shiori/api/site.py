"""Site-wide endpoints: slug checks, categories and the sitemap."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from shiori.api.dependencies import get_post_service
from shiori.config import get_settings
from shiori.constants import CATEGORIES
from shiori.database import get_db
from shiori.models.post import Post
from shiori.schemas.post import SlugCheckResponse
from shiori.services.posts import PostService
from shiori.services.sitemap import build_sitemap

router = APIRouter(tags=["site"])

settings = get_settings()

SITEMAP_CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"


@router.get("/api/check-slug", response_model=SlugCheckResponse)
def check_slug(
    service: Annotated[PostService, Depends(get_post_service)],
    slug: str = Query(default=""),
):
    """Check whether a slug is already taken by a post."""
    return SlugCheckResponse(exists=service.slug_exists(slug))


@router.get("/api/categories", response_model=list[str])
def list_categories():
    """Known post categories, in display order."""
    return CATEGORIES


@router.get("/sitemap.xml")
def sitemap(db: Annotated[Session, Depends(get_db)]):
    """XML sitemap of static pages and all posts."""
    posts = db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()
    return Response(
        content=build_sitemap(settings.site_url, posts),
        media_type="application/xml",
        headers={"Cache-Control": SITEMAP_CACHE_CONTROL},
    )
