from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from seriesmeta.core.dates import utc_now
from seriesmeta.database import Base


class SeriesMetadataRecord(Base):
    __tablename__ = "series_metadata"

    series_id = Column(String, primary_key=True)

    # Enums are stored by name (e.g. "ONGOING", "RIGHT_TO_LEFT")
    status = Column(String, nullable=False)
    title = Column(String, nullable=True)
    title_sort = Column(String, nullable=True)
    summary = Column(Text, nullable=True)
    reading_direction = Column(String, nullable=True)
    publisher = Column(String, nullable=True)
    age_rating = Column(Integer, nullable=True)
    language = Column(String, nullable=True)

    status_lock = Column(Boolean, nullable=False, default=False)
    title_lock = Column(Boolean, nullable=False, default=False)
    title_sort_lock = Column(Boolean, nullable=False, default=False)
    summary_lock = Column(Boolean, nullable=False, default=False)
    reading_direction_lock = Column(Boolean, nullable=False, default=False)
    publisher_lock = Column(Boolean, nullable=False, default=False)
    age_rating_lock = Column(Boolean, nullable=False, default=False)
    language_lock = Column(Boolean, nullable=False, default=False)
    genres_lock = Column(Boolean, nullable=False, default=False)
    tags_lock = Column(Boolean, nullable=False, default=False)

    # Naive UTC
    created_date = Column(DateTime, nullable=False, default=utc_now)
    last_modified_date = Column(DateTime, nullable=False, default=utc_now)


class SeriesMetadataGenre(Base):
    __tablename__ = "series_metadata_genre"

    id = Column(Integer, primary_key=True, autoincrement=True)
    series_id = Column(String, nullable=False, index=True)
    genre = Column(String)


class SeriesMetadataTag(Base):
    __tablename__ = "series_metadata_tag"

    id = Column(Integer, primary_key=True, autoincrement=True)
    series_id = Column(String, nullable=False, index=True)
    tag = Column(String)
