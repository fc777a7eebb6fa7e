"""
seriesmeta - Custom Exceptions
"""
import logging

logger = logging.getLogger(__name__)


class SeriesMetaException(Exception):
    """Base exception for seriesmeta"""
    def __init__(self, message: str, code: str = "SERIESMETA_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': True,
            'code': self.code,
            'message': self.message
        }


class NotFoundError(SeriesMetaException):
    """No metadata row exists for the requested series"""
    def __init__(self, series_id: str):
        self.series_id = series_id
        super().__init__(f"Series metadata not found: {series_id}", code="NOT_FOUND")


class InvalidDataError(SeriesMetaException):
    """Persisted data does not match a known value (corruption or version skew)"""
    def __init__(self, message: str):
        super().__init__(message, code="INVALID_DATA")
        logger.error(f"Invalid data: {message}")
