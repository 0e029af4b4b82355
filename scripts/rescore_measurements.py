"""One-off maintenance script to recompute stored HAZ scores.

Run manually after editing heights or changing the reference table:

    python -m scripts.rescore_measurements

Every measurement's haz_score, haz_category and haz_color is recomputed
from its stored height, age and the baby's sex.
"""
from __future__ import annotations

import logging

from app.db.session import init_db
from app.services.measurement_service import rescore_all


logger = logging.getLogger(__name__)


def migrate() -> int:
    init_db()
    changed = rescore_all()
    logger.info("Rescored measurements: %d row(s) changed", changed)
    return changed


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    migrate()
