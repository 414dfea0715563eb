# Utils module initialization
from .config import Config
from .storage import LocalStorage
from .signals import Signal, Subscription
from .scheduler import TimerQueue, TimerHandle
from .helpers import (
    image_to_data_url,
    data_url_to_bytes,
    is_data_url,
    save_uploaded_audio,
    get_timestamp,
    sanitize_filename,
)

__all__ = [
    "Config",
    "LocalStorage",
    "Signal",
    "Subscription",
    "TimerQueue",
    "TimerHandle",
    "image_to_data_url",
    "data_url_to_bytes",
    "is_data_url",
    "save_uploaded_audio",
    "get_timestamp",
    "sanitize_filename",
]
