import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from inventory_recon import parsers, settings, utils
from inventory_recon.merge import merge_fba_awd, summarize_merge
from inventory_recon.pipeline import DataPipeline
from inventory_recon.schemas import SnapshotRow
from inventory_recon.snapshot import (
    HealthThresholds,
    build_snapshot_rows,
    summarize_snapshot,
)

logger = logging.getLogger(__name__)


def _parse_fba_payload(payload: Any) -> dict:
    return parsers.build_fba_inventory(parsers.extract_inventory_items(payload, "FBA"))


def _parse_awd_payload(payload: Any) -> dict:
    return parsers.build_awd_inventory(parsers.extract_inventory_items(payload, "AWD"))


class InventoryPipeline(DataPipeline):
    def __init__(
        self,
        test_mode: bool = False,
        input_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
    ):
        super().__init__(
            "inventory",
            test_mode=test_mode,
            input_dir=input_dir,
            output_dir=output_dir,
        )
        self.thresholds = HealthThresholds(
            critical_days=settings.CRITICAL_DAYS,
            low_days=settings.LOW_DAYS,
            overstock_days=settings.OVERSTOCK_DAYS,
        )
        self.velocity: dict[str, float] = {}

        # Inventory sources, one per channel
        self.PARSER_REGISTRY = [
            {
                "channel_name": "FBA",
                "prefix": settings.FBA_FILENAME_PREFIX,
                "loader": utils.load_json,
                "parser_func": _parse_fba_payload,
            },
            {
                "channel_name": "AWD",
                "prefix": settings.AWD_FILENAME_PREFIX,
                "loader": utils.load_json,
                "parser_func": _parse_awd_payload,
            },
            {
                "channel_name": "3PL",
                "prefix": settings.THREEPL_FILENAME_PREFIX,
                "loader": utils.load_csv,
                "parser_func": parsers.parse_threepl_report,
            },
            {
                "channel_name": "HOME",
                "prefix": settings.HOME_FILENAME_PREFIX,
                "loader": utils.load_csv,
                "parser_func": parsers.parse_home_report,
            },
        ]

    def _load_latest(self, prefix: str, loader) -> tuple[Any, Any] | None:
        found_file_info = utils.find_latest_report(self.input_dir, prefix)
        if not found_file_info:
            return None
        path, report_date = found_file_info
        logger.info(f"  > Found: {path.name} ({report_date})")
        raw = loader(path)
        if raw is None:
            return None
        return raw, report_date

    def extract(self) -> dict[str, Any] | None:
        logger.info("--- Starting Inventory Reconciliation ---")

        sources: dict[str, Any] = {}

        for parser_config in self.PARSER_REGISTRY:
            source_name = parser_config["channel_name"]
            logger.info(f"\n-- Processing Source: {source_name} --")

            loaded = self._load_latest(parser_config["prefix"], parser_config["loader"])
            if loaded is None:
                logger.warning(f"Skipping source '{source_name}': no readable report.")
                self.status_summary[source_name] = None
                continue

            raw, report_date = loaded
            parsed = parser_config["parser_func"](raw)
            logger.info(f"  > Parsed {len(parsed)} SKU(s) from {source_name}.")
            sources[source_name] = parsed
            self.status_summary[source_name] = report_date

        if not sources:
            return None

        # Velocity is optional and feeds stock health only.
        loaded = self._load_latest(settings.VELOCITY_FILENAME_PREFIX, utils.load_csv)
        if loaded is not None:
            self.velocity = parsers.parse_velocity_report(loaded[0])
        else:
            logger.info("INFO: No velocity report found. Stock health will be 'unknown'.")

        return sources

    def transform(self, raw_data: dict[str, Any]) -> list[SnapshotRow] | None:
        logger.info("\n--- Reconciling FBA + AWD ---")
        fba = raw_data.get("FBA")
        awd = raw_data.get("AWD")

        try:
            merged = merge_fba_awd(fba, awd)
            logger.info(f"Merged Amazon inventory: {len(merged)} SKU(s).")

            logger.info("Building multi-channel snapshot...")
            rows = build_snapshot_rows(
                merged,
                threepl=raw_data.get("3PL"),
                home=raw_data.get("HOME"),
                velocity=self.velocity,
                suffix=settings.SKU_CHANNEL_SUFFIX,
                thresholds=self.thresholds,
            )
        except ValidationError as e:
            logger.error("❌ Data validation failed!")
            logger.error(e)
            return None

        self.summary = {
            "amazon": summarize_merge(fba, awd),
            "snapshot": summarize_snapshot(rows),
        }
        logger.info(
            f"✅ Snapshot ready: {self.summary['snapshot']['skuCount']} SKU(s), "
            f"{self.summary['snapshot']['totalUnits']} total units."
        )
        return list(rows.values())
