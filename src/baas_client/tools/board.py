from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from baas_client.core.client import BaaSClient
from baas_client.models import PostFetchOptions

NOTICE_BOARD = "notice"
FAQ_BOARD = "faq"


def _posts_path(board: str, project_id: str) -> str:
    return f"/public/board/{board}/{quote(project_id, safe='')}/posts"


async def _list_posts(
    client: BaaSClient,
    board: str,
    *,
    offset: Optional[int],
    limit: Optional[int],
    keyword: Optional[str],
    project_id: Optional[str],
) -> Dict[str, Any]:
    # Raises pydantic.ValidationError on negative offset / non-positive limit.
    options = PostFetchOptions(offset=offset, limit=limit, keyword=keyword)
    resolved = client.resolve_project_id(project_id)
    return await client.get(
        _posts_path(board, resolved),
        params=options.to_params(),
        operation=f"list_{board}_posts",
    )


async def _get_post(
    client: BaaSClient, board: str, post_id: str, project_id: Optional[str]
) -> Dict[str, Any]:
    if not post_id:
        raise ValueError("post_id must be provided")
    resolved = client.resolve_project_id(project_id)
    return await client.get(
        f"{_posts_path(board, resolved)}/{quote(post_id, safe='')}",
        operation=f"get_{board}_post",
    )


async def list_notice_posts(
    client: BaaSClient,
    *,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    keyword: Optional[str] = None,
    project_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    List public notices.

    Returns:
        {"items": [...], "total_count": int, "offset": int, "limit": int}
    """
    return await _list_posts(
        client,
        NOTICE_BOARD,
        offset=offset,
        limit=limit,
        keyword=keyword,
        project_id=project_id,
    )


async def get_notice_post(
    client: BaaSClient, post_id: str, *, project_id: Optional[str] = None
) -> Dict[str, Any]:
    """Fetch one notice with its content and attachments."""
    return await _get_post(client, NOTICE_BOARD, post_id, project_id)


async def list_faq_posts(
    client: BaaSClient,
    *,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    keyword: Optional[str] = None,
    project_id: Optional[str] = None,
) -> Dict[str, Any]:
    """List FAQ entries (title is the question, content the answer)."""
    return await _list_posts(
        client,
        FAQ_BOARD,
        offset=offset,
        limit=limit,
        keyword=keyword,
        project_id=project_id,
    )


async def get_faq_post(
    client: BaaSClient, post_id: str, *, project_id: Optional[str] = None
) -> Dict[str, Any]:
    return await _get_post(client, FAQ_BOARD, post_id, project_id)


__all__ = [
    "NOTICE_BOARD",
    "FAQ_BOARD",
    "list_notice_posts",
    "get_notice_post",
    "list_faq_posts",
    "get_faq_post",
]
