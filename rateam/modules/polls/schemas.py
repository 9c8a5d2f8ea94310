from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime


class PollStatus(str, Enum):
    REQUESTED = "requested"
    ACTIVE = "active"


class PollCreate(BaseModel):
    title: str
    description: Optional[str] = None
    options: List[str]
    ends_at: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Poll title is required")
        return value

    @field_validator("options")
    @classmethod
    def at_least_two_options(cls, value: List[str]) -> List[str]:
        options = [o.strip() for o in value if o and o.strip()]
        if len(options) < 2:
            raise ValueError("A poll needs at least 2 options")
        return options


class PollRequestCreate(PollCreate):
    reason: Optional[str] = None


class VoteCreate(BaseModel):
    option_index: int


class OptionTally(BaseModel):
    index: int
    label: str
    votes: int
    percentage: float


class PollResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    options: List[str]
    status: PollStatus
    ends_at: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PollWithResultsResponse(PollResponse):
    results: List[OptionTally]
    total_votes: int
    my_vote: Optional[int] = None


class VoteResponse(BaseModel):
    poll_id: str
    user_id: str
    option_index: int
    changed: bool
