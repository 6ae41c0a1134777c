from typing import Dict, List

from pydantic import Field

from taskexchange.models.base import Base
from taskexchange.models.message import Message
from taskexchange.models.rating import Rating, Review
from taskexchange.models.task import Task
from taskexchange.models.user import Profile, User

# collection name -> key of its id counter in "_counters"
COUNTER_KEYS: Dict[str, str] = {
    "users": "userId",
    "tasks": "taskId",
    "profiles": "profileId",
    "reviews": "reviewId",
    "ratings": "ratingId",
    "messages": "messageId",
}


def initial_counters() -> Dict[str, int]:
    return {key: 1 for key in COUNTER_KEYS.values()}


class Document(Base):
    """The whole dataset, persisted as one JSON object."""

    users: List[User] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    profiles: List[Profile] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)
    ratings: List[Rating] = Field(default_factory=list)
    messages: List[Message] = Field(default_factory=list)

    counters: Dict[str, int] = Field(default_factory=initial_counters, alias="_counters")
