"""User interface components"""

from .progress import ProgressListener, NullListener, CallbackListener, ConsoleProgress

__all__ = [
    "ProgressListener",
    "NullListener",
    "CallbackListener",
    "ConsoleProgress",
]
