import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from . import settings, data_handler

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(
        self,
        report_type: str,
        channels: Optional[list[str]] = None,
        test_mode: bool = False,
        input_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
    ):
        self.report_type = report_type
        self.channels = channels if channels is not None else settings.CHANNEL_ORDER
        self.test_mode = test_mode
        self.input_dir = input_dir or settings.INPUT_DIR
        self.output_dir = output_dir or settings.OUTPUT_DIR
        # Status summary tracks the report date for each channel
        self.status_summary = {ch: None for ch in self.channels}
        self.summary: dict[str, Any] = {}
        self.output_path: Optional[Path] = None

    def run(self) -> Optional[list[BaseModel]]:
        """
        Orchestrates the pipeline execution. Returns the validated rows, or
        None when transformation failed.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if not raw_data:
            logger.warning(f"⚠️ No data extracted for {self.report_type}. Sending empty status.")
            self.load([])
            return []

        # --- 2. TRANSFORM ---
        validated_data = self.transform(raw_data)
        if validated_data is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(validated_data)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return validated_data

    @abstractmethod
    def extract(self) -> dict[str, Any] | None:
        """
        Responsible for finding files, running parsers, and returning the parsed
        sources keyed by channel. Should also populate self.status_summary.
        """
        pass

    @abstractmethod
    def transform(self, raw_data: dict[str, Any]) -> list[BaseModel] | None:
        """
        Responsible for reconciliation and validation.
        Returns a list of validated Pydantic models.
        """
        pass

    def load(self, validated_data: list[BaseModel]):
        """
        Saves data to disk and posts to webhook.
        """
        if self.channels:
            logger.info("\n--- Final Status Summary ---")
            for ch in self.channels:
                date_val = self.status_summary.get(ch)
                logger.info(f"{ch}: {date_val.isoformat() if date_val else 'No data'}")

        if validated_data:
            self.output_path = data_handler.save_outputs(
                validated_data,
                settings.COMBINED_FILENAME_BASE,
                output_dir=self.output_dir,
            )
        else:
            logger.warning("No data to save to disk.")

        if not self.test_mode:
            data_handler.post_to_webhook(
                validated_data=validated_data,
                metadata=self.status_summary,
                report_type=self.report_type,
                summary=self.summary,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
