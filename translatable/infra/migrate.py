from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import MetaData

from . import db
from .models import Base

log = logging.getLogger(__name__)


def migrate(metadata: Optional[MetaData] = None) -> None:
    assert db.engine is not None, "Engine not initialized"
    metadata = metadata if metadata is not None else Base.metadata
    with db.engine.begin() as conn:
        metadata.create_all(conn)
    db.set_sqlite_pragmas()
    log.info("Schema ready (%d tables)", len(metadata.tables))
