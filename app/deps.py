from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.repositories import Repositories


def require_db(db: Session = Depends(get_db)) -> Session:
    return db


def require_repos(db: Session = Depends(get_db)) -> Repositories:
    # same request-scoped session as require_db, so both share one transaction
    return Repositories.from_session(db)
