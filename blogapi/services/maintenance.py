from __future__ import annotations

import structlog

from blogapi.repositories.blog import list_all_posts
from blogapi.services.counters import recount_all_categories, recount_all_tags
from blogapi.services.transaction import atomic

logger = structlog.get_logger(__name__)

LOCAL_HOST_MARKER = "localhost"
UPLOADS_SEGMENT = "/uploads/"


def _rewrite(url: str | None, base_url: str) -> str | None:
    if not url or LOCAL_HOST_MARKER not in url:
        return None
    parts = url.split(UPLOADS_SEGMENT, 1)
    if len(parts) < 2 or not parts[1]:
        return None
    return f"{base_url.rstrip('/')}{UPLOADS_SEGMENT}{parts[1]}"


def rewrite_local_image_urls(base_url: str) -> int:
    """Point localhost upload URLs at ``base_url``.

    Covers the post main image and image content blocks. Returns the number of
    posts changed.
    """
    changed = 0
    with atomic():
        for p in list_all_posts():
            touched = False
            new_image = _rewrite(p.image, base_url)
            if new_image:
                p.image = new_image
                touched = True

            blocks = []
            for block in p.content_blocks or []:
                new_content = _rewrite(block.get("content"), base_url) if block.get("type") == "image" else None
                if new_content:
                    block = {**block, "content": new_content}
                    touched = True
                blocks.append(block)

            if touched:
                # JSON columns only notice reassignment
                p.content_blocks = blocks
                changed += 1
                logger.info("image_urls_rewritten", post_id=p.id)
    return changed


def recount_everything() -> tuple[dict[int, int], dict[int, int]]:
    with atomic():
        categories = recount_all_categories()
        tags = recount_all_tags()
    logger.info("counters_rebuilt", categories=len(categories), tags=len(tags))
    return categories, tags
