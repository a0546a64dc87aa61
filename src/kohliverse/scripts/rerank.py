"""Recompute cached hot scores so time decay shows up in the hot feed."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from kohliverse.db.session import SessionLocal, create_tables
from kohliverse.ranking.scoring import ScoreModel
from kohliverse.services.post_service import rerank_posts

logger = logging.getLogger("kohliverse.rerank")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Re-rank every post's hot score")
    parser.add_argument(
        "--gravity",
        type=float,
        default=None,
        help="Override the configured decay exponent for this run.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    model = ScoreModel.from_settings()
    if args.gravity is not None:
        model = ScoreModel(gravity=args.gravity, hour_offset=model.hour_offset)

    create_tables()
    session = SessionLocal()
    try:
        count = rerank_posts(session, score_model=model)
    except SQLAlchemyError as exc:
        logger.error("Re-rank failed: %s", exc)
        return 1
    finally:
        session.close()

    print(f"[rerank] re-scored {count} posts")
    return 0


if __name__ == "__main__":
    sys.exit(main())
