from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Account ----------------------------------------------------------------- #


class TokenResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"

    model_config = ConfigDict(extra="ignore")


class AccountInfo(BaseModel):
    id: str
    user_id: str
    name: str
    phone: str
    is_profile_completed: bool = False
    last_logged_at: Optional[str] = None
    created_at: str
    data: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")


# --- Messaging --------------------------------------------------------------- #


class Recipient(BaseModel):
    id: str
    project_id: str
    name: str
    phone: str
    description: Optional[str] = None
    # JSON-encoded metadata string, as stored by the server
    data: str = "{}"
    created_at: str
    removed_at: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# --- Board ------------------------------------------------------------------- #


class FileAttachment(BaseModel):
    id: int
    file_name: str
    url: str

    model_config = ConfigDict(extra="ignore")


class PostListItem(BaseModel):
    id: str
    title: str
    views: int = 0
    recommends: int = 0
    author_name: str
    is_hidden: bool = False
    created_at: str

    model_config = ConfigDict(extra="ignore")


class PostList(BaseModel):
    items: List[PostListItem] = Field(default_factory=list)
    total_count: int = 0
    offset: int = 0
    limit: int = 0

    model_config = ConfigDict(extra="ignore")


class Post(BaseModel):
    """Notice or FAQ detail. For FAQ, title is the question and content the answer."""

    id: str
    board_id: str
    title: str
    content: str
    views: int = 0
    recommends: int = 0
    author_id: str
    author_name: str
    created_at: str
    updated_at: Optional[str] = None
    attachments: List[FileAttachment] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class FaqListItem(PostListItem):
    content: str
    category_id: Optional[str] = None
    category_name: Optional[str] = None


class FaqList(BaseModel):
    items: List[FaqListItem] = Field(default_factory=list)
    total_count: int = 0
    offset: int = 0
    limit: int = 0

    model_config = ConfigDict(extra="ignore")


# --- Input Models (request payloads) ---------------------------------------- #


class SignupOptions(BaseModel):
    terms_agreed: Optional[bool] = None
    privacy_agreed: Optional[bool] = None
    is_reserved: Optional[bool] = None
    data: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="forbid")


class RecipientCreateRequest(BaseModel):
    name: str
    phone: str
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="forbid")


class PostFetchOptions(BaseModel):
    offset: Optional[int] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)
    keyword: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.offset is not None:
            params["offset"] = self.offset
        if self.limit is not None:
            params["limit"] = self.limit
        if self.keyword:
            params["keyword"] = self.keyword
        return params


__all__ = [
    "TokenResponse",
    "AccountInfo",
    "Recipient",
    "FileAttachment",
    "PostListItem",
    "PostList",
    "Post",
    "FaqListItem",
    "FaqList",
    "SignupOptions",
    "RecipientCreateRequest",
    "PostFetchOptions",
]
