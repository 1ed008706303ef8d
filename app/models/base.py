# File: app/models/base.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Bootstrap creates every table registered on ``Base.metadata``.
    """
    pass
