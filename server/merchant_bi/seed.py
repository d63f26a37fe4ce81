import logging
import os
import sys

from sqlalchemy.orm import Session

from .db import Base, SessionLocal, engine
from .importer.service import import_ledger

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.getenv("LEDGER_DATA_DIR", "data")


def run_seed(directory: str = DEFAULT_DATA_DIR) -> None:
    if os.getenv("SEED_CREATE_TABLES", "0") in {"1", "true", "TRUE", "yes", "YES"}:
        Base.metadata.create_all(engine)

    db: Session = SessionLocal()
    try:
        result = import_ledger(db, directory)
        if any(warning.severity == "error" for warning in result.warnings):
            db.rollback()
            for warning in result.warnings:
                logger.error("%s", warning.message)
            raise SystemExit(1)
        db.commit()
        for warning in result.warnings:
            logger.warning("%s", warning.message)
        logger.info("Seeded %s ledger rows from %s", result.total_created, directory)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    run_seed(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_DATA_DIR)
