# freshbite/repos/base_repo.py
from sqlalchemy.orm import Session


class BaseRepo:
    """
    Repozytoria tylko flushuja, commit/rollback robi serwis
    jedna operacja use case = jedna transakcja
    """

    def __init__(self, db: Session):
        self.db = db

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
