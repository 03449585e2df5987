from .inflight import Inflight
from .log import get_logger, setup_logging
from .mime import (
    FOLDER_MIME,
    SUPPORTED_TYPES,
    clean_resource_type,
    is_folder,
    is_supported,
)

__all__ = [
    "Inflight",
    "get_logger",
    "setup_logging",
    "FOLDER_MIME",
    "SUPPORTED_TYPES",
    "clean_resource_type",
    "is_folder",
    "is_supported",
]
