from contextlib import contextmanager
from typing import Iterator
from sqlmodel import Session


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Commit everything done in the block, or roll it all back on error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
