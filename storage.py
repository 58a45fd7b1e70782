from sqlalchemy import func

from models import db


class SchemaService:
    """Create missing tables; existing tables are left untouched."""

    def __init__(self, database=None):
        self.database = database if database is not None else db

    def ensure_created(self) -> None:
        self.database.create_all()


class EntityStore:
    """Minimal repository over one mapped model."""

    def __init__(self, model, session=None):
        self.model = model
        self.session = session if session is not None else db.session

    def any(self) -> bool:
        return self.session.query(self.model.id).first() is not None

    def count(self) -> int:
        return self.session.query(func.count(self.model.id)).scalar() or 0

    def add_range(self, entities) -> None:
        self.session.add_all(list(entities))

    def commit(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
