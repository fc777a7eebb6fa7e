import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from seriesmeta.database import Base
from seriesmeta.schemas.series_metadata import SeriesMetadata, Status, ReadingDirection
from seriesmeta.services.series_metadata import SeriesMetadataStore
import seriesmeta.models  # noqa: F401  registers every table on Base.metadata


# 1. SETUP TEST DATABASE
# SQLite in-memory with StaticPool so every session in a test
# talks to the same connection.
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# 2. DB SESSION FIXTURE
@pytest.fixture(scope="function")
def db():
    """
    Creates a fresh database for every single test case.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    yield session

    # Cleanup
    session.close()
    Base.metadata.drop_all(bind=engine)


# 3. STORE FIXTURE
@pytest.fixture(scope="function")
def store(db):
    return SeriesMetadataStore(db)


# 4. DATA FIXTURES
@pytest.fixture
def make_metadata():
    """Factory for a fully populated aggregate; override any field by keyword."""
    def _make(series_id: str = "series-1", **overrides) -> SeriesMetadata:
        fields = dict(
            series_id=series_id,
            status=Status.ENDED,
            title="Saga",
            title_sort="Saga",
            summary="Star-crossed lovers on the run.",
            reading_direction=ReadingDirection.LEFT_TO_RIGHT,
            publisher="Image",
            age_rating=18,
            language="en",
            genres={"Science Fiction", "Fantasy"},
            tags={"space", "war"},
            status_lock=True,
            title_lock=False,
            title_sort_lock=True,
            summary_lock=False,
            reading_direction_lock=True,
            publisher_lock=False,
            age_rating_lock=True,
            language_lock=False,
            genres_lock=True,
            tags_lock=False,
        )
        fields.update(overrides)
        return SeriesMetadata(**fields)

    return _make
