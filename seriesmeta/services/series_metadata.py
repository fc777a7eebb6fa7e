import logging
from typing import Collection, List, Optional, Set

from sqlalchemy import func, insert
from sqlalchemy.orm import Session

from seriesmeta.core.dates import utc_now, to_current_timezone
from seriesmeta.database import transaction
from seriesmeta.exceptions import NotFoundError, InvalidDataError
from seriesmeta.models import SeriesMetadataRecord, SeriesMetadataGenre, SeriesMetadataTag
from seriesmeta.schemas.series_metadata import SeriesMetadata, Status, ReadingDirection


class SeriesMetadataStore:
    """
    Persists a SeriesMetadata aggregate across three tables:
    the parent row (scalars + lock flags) and the genre / tag child rows.

    Writes replace the aggregate as a whole. Child rows are never diffed,
    they are deleted and reinserted inside the same transaction.
    Reads also run in a transaction of their own, so the session is
    never left idle inside one between calls.
    """

    # Keeps each IN (...) well under the database bound-parameter limit
    DELETE_BATCH_SIZE = 500

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(__name__)

    # --- READS ---

    def find_by_id(self, series_id: str) -> SeriesMetadata:
        metadata = self.find_by_id_or_none(series_id)
        if metadata is None:
            raise NotFoundError(series_id)
        return metadata

    def find_by_id_or_none(self, series_id: str) -> Optional[SeriesMetadata]:
        with transaction(self.db):
            record = self._find_one(series_id)
            if record is None:
                return None
            return self._to_domain(record, self._find_genres(series_id), self._find_tags(series_id))

    def count(self) -> int:
        with transaction(self.db):
            return self.db.query(func.count(SeriesMetadataRecord.series_id)).scalar()

    def _find_one(self, series_id: str) -> Optional[SeriesMetadataRecord]:
        return self.db.query(SeriesMetadataRecord).filter(
            SeriesMetadataRecord.series_id == series_id
        ).first()

    def _find_genres(self, series_id: str) -> Set[str]:
        rows = self.db.query(SeriesMetadataGenre.genre).filter(
            SeriesMetadataGenre.series_id == series_id
        ).all()
        return {row.genre for row in rows if row.genre is not None}

    def _find_tags(self, series_id: str) -> Set[str]:
        rows = self.db.query(SeriesMetadataTag.tag).filter(
            SeriesMetadataTag.series_id == series_id
        ).all()
        return {row.tag for row in rows if row.tag is not None}

    # --- WRITES ---

    def insert(self, metadata: SeriesMetadata):
        now = utc_now()
        with transaction(self.db):
            # Core insert so a duplicate id surfaces as the database's IntegrityError
            self.db.execute(
                insert(SeriesMetadataRecord).values(
                    series_id=metadata.series_id,
                    created_date=now,
                    last_modified_date=now,
                    **self._scalar_columns(metadata)
                )
            )
            self._insert_genres(metadata)
            self._insert_tags(metadata)

        self.logger.debug(
            f"Inserted metadata for series {metadata.series_id} "
            f"({len(metadata.genres)} genres, {len(metadata.tags)} tags)"
        )

    def update(self, metadata: SeriesMetadata):
        with transaction(self.db):
            values = self._scalar_columns(metadata)
            values["last_modified_date"] = utc_now()

            # Zero matched rows is not an error
            updated = self.db.query(SeriesMetadataRecord).filter(
                SeriesMetadataRecord.series_id == metadata.series_id
            ).update(values, synchronize_session=False)

            self.db.query(SeriesMetadataGenre).filter(
                SeriesMetadataGenre.series_id == metadata.series_id
            ).delete(synchronize_session=False)

            self.db.query(SeriesMetadataTag).filter(
                SeriesMetadataTag.series_id == metadata.series_id
            ).delete(synchronize_session=False)

            self._insert_genres(metadata)
            self._insert_tags(metadata)

        self.logger.debug(f"Updated metadata for series {metadata.series_id} (rows matched: {updated})")

    def delete(self, series_id: str):
        with transaction(self.db):
            # Children first, then the parent row
            self.db.query(SeriesMetadataGenre).filter(
                SeriesMetadataGenre.series_id == series_id
            ).delete(synchronize_session=False)
            self.db.query(SeriesMetadataTag).filter(
                SeriesMetadataTag.series_id == series_id
            ).delete(synchronize_session=False)
            deleted = self.db.query(SeriesMetadataRecord).filter(
                SeriesMetadataRecord.series_id == series_id
            ).delete(synchronize_session=False)

        self.logger.debug(f"Deleted metadata for series {series_id} (rows: {deleted})")

    def delete_many(self, series_ids: Collection[str]):
        """
        Batch delete in one transaction. Ids are sent in chunks of
        DELETE_BATCH_SIZE, three statements per chunk.
        """
        series_ids = list(dict.fromkeys(series_ids))
        if not series_ids:
            return

        deleted = 0
        with transaction(self.db):
            for start in range(0, len(series_ids), self.DELETE_BATCH_SIZE):
                deleted += self._delete_chunk(series_ids[start:start + self.DELETE_BATCH_SIZE])

        self.logger.debug(f"Deleted metadata for {deleted} of {len(series_ids)} series")

    def _delete_chunk(self, series_ids: List[str]) -> int:
        self.db.query(SeriesMetadataGenre).filter(
            SeriesMetadataGenre.series_id.in_(series_ids)
        ).delete(synchronize_session=False)
        self.db.query(SeriesMetadataTag).filter(
            SeriesMetadataTag.series_id.in_(series_ids)
        ).delete(synchronize_session=False)
        return self.db.query(SeriesMetadataRecord).filter(
            SeriesMetadataRecord.series_id.in_(series_ids)
        ).delete(synchronize_session=False)

    def _insert_genres(self, metadata: SeriesMetadata):
        if metadata.genres:
            self.db.execute(
                insert(SeriesMetadataGenre),
                [{"series_id": metadata.series_id, "genre": genre} for genre in metadata.genres]
            )

    def _insert_tags(self, metadata: SeriesMetadata):
        if metadata.tags:
            self.db.execute(
                insert(SeriesMetadataTag),
                [{"series_id": metadata.series_id, "tag": tag} for tag in metadata.tags]
            )

    # --- MAPPING ---

    @staticmethod
    def _scalar_columns(metadata: SeriesMetadata) -> dict:
        """Every parent column except the id and the timestamps"""
        return {
            "status": metadata.status.name,
            "title": metadata.title,
            "title_sort": metadata.title_sort,
            "summary": metadata.summary,
            "reading_direction": metadata.reading_direction.name if metadata.reading_direction else None,
            "publisher": metadata.publisher,
            "age_rating": metadata.age_rating,
            "language": metadata.language,
            "status_lock": metadata.status_lock,
            "title_lock": metadata.title_lock,
            "title_sort_lock": metadata.title_sort_lock,
            "summary_lock": metadata.summary_lock,
            "reading_direction_lock": metadata.reading_direction_lock,
            "publisher_lock": metadata.publisher_lock,
            "age_rating_lock": metadata.age_rating_lock,
            "language_lock": metadata.language_lock,
            "genres_lock": metadata.genres_lock,
            "tags_lock": metadata.tags_lock,
        }

    def _to_domain(self, record: SeriesMetadataRecord, genres: Set[str], tags: Set[str]) -> SeriesMetadata:
        try:
            status = Status[record.status]
        except KeyError:
            raise InvalidDataError(f"Unknown status '{record.status}' for series {record.series_id}")

        reading_direction = None
        if record.reading_direction is not None:
            try:
                reading_direction = ReadingDirection[record.reading_direction]
            except KeyError:
                raise InvalidDataError(
                    f"Unknown reading direction '{record.reading_direction}' for series {record.series_id}"
                )

        return SeriesMetadata(
            series_id=record.series_id,
            status=status,
            title=record.title,
            title_sort=record.title_sort,
            summary=record.summary,
            reading_direction=reading_direction,
            publisher=record.publisher,
            age_rating=record.age_rating,
            language=record.language,
            genres=genres,
            tags=tags,

            status_lock=record.status_lock,
            title_lock=record.title_lock,
            title_sort_lock=record.title_sort_lock,
            summary_lock=record.summary_lock,
            reading_direction_lock=record.reading_direction_lock,
            publisher_lock=record.publisher_lock,
            age_rating_lock=record.age_rating_lock,
            language_lock=record.language_lock,
            genres_lock=record.genres_lock,
            tags_lock=record.tags_lock,

            created_date=to_current_timezone(record.created_date),
            last_modified_date=to_current_timezone(record.last_modified_date),
        )
