from datetime import datetime
from enum import Enum
from typing import Optional, Set

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    ENDED = "ENDED"
    ONGOING = "ONGOING"
    ABANDONED = "ABANDONED"
    HIATUS = "HIATUS"


class ReadingDirection(str, Enum):
    LEFT_TO_RIGHT = "LEFT_TO_RIGHT"
    RIGHT_TO_LEFT = "RIGHT_TO_LEFT"
    VERTICAL = "VERTICAL"
    WEBTOON = "WEBTOON"


class SeriesMetadata(BaseModel):
    # Values are replaced, never edited in place: use model_copy(update=...)
    model_config = ConfigDict(frozen=True)

    series_id: str = Field(min_length=1)

    status: Status = Status.ONGOING
    title: Optional[str] = None
    title_sort: Optional[str] = None
    summary: Optional[str] = None
    reading_direction: Optional[ReadingDirection] = None
    publisher: Optional[str] = None
    age_rating: Optional[int] = None
    language: Optional[str] = None
    genres: Set[str] = Field(default_factory=set)
    tags: Set[str] = Field(default_factory=set)

    # Locked fields are skipped by automatic metadata refresh
    status_lock: bool = False
    title_lock: bool = False
    title_sort_lock: bool = False
    summary_lock: bool = False
    reading_direction_lock: bool = False
    publisher_lock: bool = False
    age_rating_lock: bool = False
    language_lock: bool = False
    genres_lock: bool = False
    tags_lock: bool = False

    created_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
