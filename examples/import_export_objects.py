"""Export a dashboard to NDJSON and import it back with overwrite.

Connection settings come from KIBANA_* environment variables, e.g.

    KIBANA_URL=http://localhost:5601 KIBANA_USERNAME=elastic KIBANA_PASSWORD=changeme \
        python examples/import_export_objects.py <dashboard-id>
"""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from core.config import get_settings
from core.logging_config import CLIENT_LOGGERS, configure_logging, get_logger
from kbapi import APIError
from kbapi.models import SavedObjectRef
from kbapi.saved_objects import ExportBody, ImportParams, SavedObjectExportRequest, SavedObjectImportRequest
from kibana import Client

logger = get_logger("examples.import_export")


async def run(dashboard_id: str, output: Path) -> None:
    async with Client(get_settings()) as client:
        exported = await client.saved_objects.export(
            SavedObjectExportRequest(
                body=ExportBody(
                    objects=[SavedObjectRef(id=dashboard_id, type="dashboard")],
                    include_references_deep=True,
                )
            )
        )
        exported.write_to_file(output)
        logger.info("exported", records=len(exported.body or []), path=str(output))

        imported = await client.saved_objects.import_(
            SavedObjectImportRequest(file=output.read_bytes(), params=ImportParams(overwrite=True))
        )
        logger.info(
            "imported",
            success=imported.body.success,
            count=imported.body.success_count,
            errors=imported.body.errors or [],
        )


def main() -> None:
    ap = argparse.ArgumentParser(description="Saved objects export/import demo")
    ap.add_argument("dashboard_id", help="Dashboard saved object id")
    ap.add_argument("--output", type=Path, default=Path("export.ndjson"))
    args = ap.parse_args()

    configure_logging(logger_names=(*CLIENT_LOGGERS, "examples"))
    try:
        asyncio.run(run(args.dashboard_id, args.output))
    except APIError as e:
        logger.error("kibana request failed", status_code=e.status_code, error=str(e))
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
