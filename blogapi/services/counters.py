"""Recompute the denormalized ``posts_count`` columns from their source relations.

Writes are staged only; callers commit them together with the mutation that
made the counter stale.
"""
from __future__ import annotations

from typing import Iterable

import structlog

from blogapi.repositories.blog import (
    count_posts_in_category,
    count_posts_with_tag,
    list_all_category_ids,
    list_all_tag_ids,
    set_category_posts_count,
    set_tag_posts_count,
)

logger = structlog.get_logger(__name__)


def recount_category_posts(category_id: int | None) -> int:
    if category_id is None:
        return 0
    count = count_posts_in_category(category_id)
    set_category_posts_count(category_id, count)
    logger.debug("counter_recomputed", owner="category", owner_id=category_id, posts_count=count)
    return count


def recount_tag_posts(tag_id: int) -> int:
    count = count_posts_with_tag(tag_id)
    set_tag_posts_count(tag_id, count)
    logger.debug("counter_recomputed", owner="tag", owner_id=tag_id, posts_count=count)
    return count


def recount_tags(tag_ids: Iterable[int]) -> dict[int, int]:
    return {tag_id: recount_tag_posts(tag_id) for tag_id in sorted(set(tag_ids))}


def recount_all_tags() -> dict[int, int]:
    return recount_tags(list_all_tag_ids())


def recount_all_categories() -> dict[int, int]:
    return {cid: recount_category_posts(cid) for cid in list_all_category_ids()}
