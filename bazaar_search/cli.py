# bazaar_search/cli.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .catalog import load_catalog
from .config import DEFAULT_LOG_LEVEL, DEFAULT_PAGE_SIZE, load_matcher_config
from .matcher import FuzzyMatcher
from .paging import paginate


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Search a marketplace catalog export.")
    ap.add_argument("--catalog", type=Path, required=True, help="CSV / JSON / XLSX / parquet export")
    ap.add_argument("--query", required=True)
    ap.add_argument("--config", type=Path, default=None, help="JSON file of matcher overrides")
    ap.add_argument("--limit", type=int, default=DEFAULT_PAGE_SIZE)
    ap.add_argument("--scores", action="store_true", help="print relevance scores")
    ap.add_argument("--json", action="store_true", help="emit JSON rows instead of titles")
    ap.add_argument("--log-level", default=DEFAULT_LOG_LEVEL)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    try:
        items = load_catalog(args.catalog)
        config = load_matcher_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error("{}", e)
        return 2

    ranked = FuzzyMatcher(config).rank(items, args.query)
    page = paginate(ranked, 0, args.limit)

    if args.json:
        rows = []
        for s in page.items:
            row = s.item.model_dump()
            if args.scores:
                row["score"] = round(s.score, 4)
            rows.append(row)
        print(json.dumps(rows, ensure_ascii=False, indent=2))
    else:
        for s in page.items:
            if args.scores:
                print(f"{s.score:.2f}\t{s.item.title}")
            else:
                print(s.item.title)
    logger.info("{} of {} matches shown", len(page.items), page.total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
