from .submission import Submission  # noqa: F401
from .stat import Stat  # noqa: F401

# Import ALL models so SQLAlchemy registers them

__all__ = [
    "Submission",
    "Stat",
]
