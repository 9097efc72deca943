"""
Import or preview a campaign file from the CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from app.config import get_campaign_import_settings
from app.domain.errors import StoreFailureError, UnparseableFileError, ValidationFailedError
from app.services.campaign_import_service import get_campaign_import_service


def _preview(content: bytes) -> tuple[dict, int]:
    settings = get_campaign_import_settings()
    preview = get_campaign_import_service().parse_and_validate(content)
    payload = {
        "total_rows": len(preview.rows),
        "is_valid": preview.is_valid,
        "delimiter": preview.diagnostics.delimiter,
        "unrecognized_columns": list(preview.diagnostics.unrecognized_columns),
        "rows": preview.rows[: settings.preview_rows],
        "errors": [asdict(error) for error in preview.errors],
    }
    return payload, 0 if preview.is_valid else 1


async def _import(content: bytes, file_name: str) -> tuple[dict, int]:
    from app.repositories.campaign_store import SQLAlchemyCampaignStore
    from db.session import dispose_engine

    settings = get_campaign_import_settings()
    try:
        result = await get_campaign_import_service().import_file(
            content=content,
            file_name=file_name,
            store=SQLAlchemyCampaignStore(),
        )
    except ValidationFailedError as exc:
        return exc.to_dict(max_errors=settings.max_display_errors), 1
    finally:
        await dispose_engine()

    return {"committed_count": result.committed_count, "file_name": file_name}, 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Import a campaign CSV file.")
    parser.add_argument("path", type=Path, help="CSV or TXT file to import.")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Parse and validate only; nothing is written to the database.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    content = args.path.read_bytes()
    try:
        if args.preview:
            payload, exit_code = _preview(content)
        else:
            payload, exit_code = asyncio.run(_import(content, args.path.name))
    except UnparseableFileError as exc:
        print(json.dumps({"error": str(exc)}, indent=2), file=sys.stderr)
        return 2
    except StoreFailureError as exc:
        print(json.dumps({"error": str(exc)}, indent=2), file=sys.stderr)
        return 3

    print(json.dumps(payload, indent=2, default=str))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
