# db/maintenance.py
from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from api.schemas.species import SpeciesUpdate
from db.engine import get_engine, healthcheck, session_scope
from db.models import Base, Species

logger = logging.getLogger(__name__)

# ---------- Shared helpers ----------


def iter_species(db: Session, author: Optional[str] = None) -> Iterable[Species]:
    q = select(Species)
    if author:
        q = q.where(Species.author == author)
    q = q.order_by(Species.scientific_name.asc())
    for sp in db.execute(q).scalars():
        yield sp


def read_seed_rows(path: Path) -> Iterator[dict]:
    """CSV rows with blank cells dropped so the schema sees them as absent."""
    with path.open(newline="", encoding="utf-8") as fh:
        for row in csv.DictReader(fh):
            yield {k: v for k, v in row.items() if k and v is not None and v.strip()}


def seed_species(
    db: Session, rows: Iterable[dict], default_author: str
) -> tuple[int, int]:
    """Insert rows not already present (by scientific name). Returns (added, skipped)."""
    added = skipped = 0
    seen: set[str] = set()
    for i, raw in enumerate(rows, start=1):
        author = raw.pop("author", None) or default_author
        try:
            values = SpeciesUpdate.model_validate(raw).to_values()
        except ValidationError as e:
            logger.warning("row %d rejected: %s", i, e.errors()[0]["msg"])
            skipped += 1
            continue
        exists = db.scalar(
            select(Species.species_id).where(
                Species.scientific_name == values["scientific_name"]
            )
        )
        if exists is not None or values["scientific_name"] in seen:
            skipped += 1
            continue
        db.add(Species(author=author, **values))
        seen.add(values["scientific_name"])
        added += 1
    db.flush()
    return added, skipped


# ---------- Subcommands ----------


def cmd_init_db(args: argparse.Namespace) -> None:
    Base.metadata.create_all(get_engine())
    print("Created tables.")


def cmd_seed(args: argparse.Namespace) -> None:
    with session_scope() as db:
        added, skipped = seed_species(db, read_seed_rows(Path(args.file)), args.author)
    print(f"Seeded {added} species ({skipped} skipped)")


def cmd_list(args: argparse.Namespace) -> None:
    with session_scope() as db:
        for sp in iter_species(db, author=args.author):
            print(
                f"{sp.species_id:>6}  {sp.scientific_name:<32} {sp.kingdom:<9} {sp.author}"
            )


def cmd_healthcheck(args: argparse.Namespace) -> None:
    ok = healthcheck()
    print("ok" if ok else "unreachable")
    if not ok:
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Species database maintenance")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("init-db", help="Create tables without running migrations")
    sp.set_defaults(func=cmd_init_db)

    sp = sub.add_parser("seed", help="Load species from a CSV file")
    sp.add_argument("file", type=str, help="CSV with a header row of species fields")
    sp.add_argument(
        "--author",
        type=str,
        required=True,
        help="Session id owning rows without an author column",
    )
    sp.set_defaults(func=cmd_seed)

    sp = sub.add_parser("list", help="Print species")
    sp.add_argument("--author", type=str, default=None, help="Only this author's rows")
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("healthcheck", help="Check database connectivity")
    sp.set_defaults(func=cmd_healthcheck)

    return p


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    p = build_parser()
    args = p.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
