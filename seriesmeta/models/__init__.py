# Import all models here so Base.metadata knows every table
from seriesmeta.models.series_metadata import SeriesMetadataRecord, SeriesMetadataGenre, SeriesMetadataTag

__all__ = [
    'SeriesMetadataRecord', 'SeriesMetadataGenre', 'SeriesMetadataTag',
]
