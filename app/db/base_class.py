# /app/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class _TableNameMixin:
    """
    Gives every model a default table name derived from its class name
    (e.g. `SemesterPerformance` -> `semesterperformances`). Models that need a
    friendlier name set `__tablename__` explicitly.
    """
    @declared_attr
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"


Base = declarative_base(cls=_TableNameMixin)
