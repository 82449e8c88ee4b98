from poolcare.models.organization import Organization
from poolcare.models.pool import Pool
from poolcare.models.reading import Reading
from poolcare.models.user import User

__all__ = [
    "Organization",
    "Pool",
    "Reading",
    "User",
]
