from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Sequence

import orjson
from tqdm import tqdm

from common.config import yaml_config
from common.logger import get_logger
from common.settings import settings
from feed.creators import InMemoryCreator
from feed.document_models import Doc, DocStatus
from feed.handler import FeedHandler, summarize
from feed.repository import InMemoryRepository

log = get_logger(__name__)


def load_feed(path: Path) -> List[Doc]:
    """Read a JSON list of {"type", "api_id", "metadata"} objects."""
    raw = orjson.loads(Path(path).read_bytes())
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON list of documents in {path}")
    return [Doc.from_dict(d) for d in raw if isinstance(d, dict)]


def write_manifest(outcomes: Sequence[Doc], out: Path) -> Path:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(
        orjson.dumps([d.to_dict() for d in outcomes], option=orjson.OPT_INDENT_2)
    )
    log.info("Wrote manifest to %s", out)
    return out


def default_output_path() -> Path:
    out_dir = settings.output_dir or yaml_config.app.output_dir
    return Path(out_dir) / yaml_config.app.manifest_name


def run(
    feed_path: Path,
    seed_path: Path | None = None,
    special_ids: Sequence[str] | None = None,
    output: Path | None = None,
    show_progress: bool = True,
) -> List[Doc]:
    """
    Handle a feed file against an in-memory repository and write the
    outcome manifest.
    """
    docs = load_feed(feed_path)
    log.info("Loaded %d documents from %s", len(docs), feed_path)

    repository = (
        InMemoryRepository.from_json(seed_path) if seed_path else InMemoryRepository()
    )
    if special_ids is None:
        special_ids = yaml_config.creator.special_ids
    creator = InMemoryCreator(repository, special_ids=special_ids)
    handler = FeedHandler(repository)

    iterator = tqdm(docs, desc="Handling feed", unit="doc") if show_progress else docs
    outcomes = handler.handle(iterator, creator)

    summary = summarize(outcomes)
    log.info(
        "Feed complete: %d processed, %d failed, %d dropped",
        summary.processed,
        summary.failed,
        len(docs) - summary.total,
    )
    for doc in outcomes:
        if doc.status is DocStatus.FAILED:
            log.warning("api_id=%r failed: %s", doc.api_id, doc.payload.message)

    write_manifest(outcomes, output or default_output_path())
    return outcomes


def main(argv: Sequence[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Create resources for the important documents of a JSON feed."
    )
    parser.add_argument(
        "--feed", type=str, required=True, help="JSON list of documents"
    )
    parser.add_argument(
        "--seed",
        type=str,
        default="",
        help="Optional JSON list of already existing resources",
    )
    parser.add_argument(
        "--special_ids",
        nargs="*",
        default=None,
        help="api ids to report as a special condition",
    )
    parser.add_argument(
        "--output", type=str, default="", help="Manifest path (default from config)"
    )
    parser.add_argument("--no_progress", action="store_true")
    args = parser.parse_args(argv)

    feed_path = Path(args.feed)
    seed_path = Path(args.seed) if args.seed else None

    if not feed_path.exists():
        log.error("Feed file does not exist: %s", feed_path)
        raise SystemExit(1)
    if seed_path and not seed_path.exists():
        log.error("Seed file does not exist: %s", seed_path)
        raise SystemExit(1)

    try:
        run(
            feed_path,
            seed_path=seed_path,
            special_ids=args.special_ids,
            output=Path(args.output) if args.output else None,
            show_progress=not args.no_progress,
        )
    except ValueError as e:
        # orjson.JSONDecodeError is a ValueError
        log.error("Invalid input file: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
