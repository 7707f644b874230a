"""
Pydantic models for suggestion board records.

Field aliases follow the backend record names (``Description__c`` and so on),
while attributes stay snake_case. Either name is accepted on input.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterType(str, Enum):
    """Server-side ordering/filtering applied to the suggestion list."""

    ALL = "All Suggestions"
    RECENT = "Recent Suggestions"
    HIGHEST_RANKED = "Highest Ranked Suggestions"


class Comment(BaseModel):
    """A comment on a suggestion."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="Id")
    suggestion_id: Optional[str] = Field(default=None, alias="Suggestion__c")
    text: str = Field(default="", alias="Comment_Text__c")
    submitter: Optional[str] = Field(default=None, alias="Submitter__c")
    comment_date: Optional[datetime] = Field(default=None, alias="Comment_Date__c")

    @field_validator("text", mode="before")
    @classmethod
    def null_text_is_empty(cls, v):
        return "" if v is None else v


class Suggestion(BaseModel):
    """
    A user-submitted suggestion.

    ``comments`` is never part of the list payload; it is filled in locally
    from a separate comments fetch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="Id")
    title: str = Field(alias="Name")
    description: Optional[str] = Field(default=None, alias="Description__c")
    category: Optional[str] = Field(default=None, alias="Category__c")
    submitter: Optional[str] = Field(default=None, alias="Submitter__c")
    submission_date: Optional[datetime] = Field(default=None, alias="Submission_Date__c")
    upvote_count: int = Field(default=0, alias="Upvote_Count__c")
    downvote_count: int = Field(default=0, alias="Downvote_Count__c")
    comments: Tuple[Comment, ...] = ()

    @field_validator("upvote_count", "downvote_count", mode="before")
    @classmethod
    def null_count_is_zero(cls, v):
        # Unset number fields come back as null
        return 0 if v is None else v

    @field_validator("title", mode="before")
    @classmethod
    def null_title_is_empty(cls, v):
        return "" if v is None else v


class NewSuggestion(BaseModel):
    """Request body for creating a suggestion."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description__c")
    category: str = Field(default="", alias="Category__c")
    submitter: Optional[str] = Field(default=None, alias="Submitter__c")


class NewComment(BaseModel):
    """Request body for adding a comment."""

    model_config = ConfigDict(populate_by_name=True)

    suggestion_id: str = Field(alias="Suggestion__c")
    text: str = Field(default="", alias="Comment_Text__c")
    submitter: str = Field(default="", alias="Submitter__c")
