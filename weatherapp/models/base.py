from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base for the ORM models.

    Models inheriting from it are registered in `Base.metadata`, which
    `init_db` uses to create the schema on startup.
    """
    pass
