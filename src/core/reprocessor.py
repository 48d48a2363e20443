import json
import math
import os
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from src.core.flow_detection import detect_flow_type, load_property_details
from src.flows.factory import FlowServiceFactory
from src.logger_setup import get_logger

logger = get_logger(__name__)

OUTPUT_MODES = ("overwrite", "new")
ROW_META_FIELDS = ("id", "owner_id", "status", "created_at")
OUTPUT_COLUMNS = ["id", "owner_id", "status", "created_at", "flow_type", "property_details"]


def _clean_raw_record(record: dict) -> dict:
    """
    Clean a row loaded from CSV.

    Pandas reads empty cells as NaN and numeric-looking ids as int/float;
    turn those back into None and strings.
    """
    cleaned = {}
    for key, value in record.items():
        if isinstance(value, float):
            if math.isnan(value):
                cleaned[key] = None
            elif value.is_integer():
                cleaned[key] = str(int(value))
            else:
                cleaned[key] = str(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            cleaned[key] = str(value)
        else:
            cleaned[key] = value
    return cleaned


def _timestamp_for_filename() -> str:
    return datetime.now().strftime("%Y_%m_%d_%H_%M_%S")


class Reprocessor:
    """Re-runs flow normalization over exported listing rows."""

    def normalize_row(self, row: dict[str, Any]) -> dict[str, Any]:
        """
        Normalize one stored listing row.

        The row's own id/owner/status/created_at fill the document's meta
        where the stored document lacks them.

        Returns:
            Output row with the flow type and the normalized document as JSON.
        """
        form_data = dict(load_property_details(row.get("property_details")))
        meta = dict(form_data["meta"]) if isinstance(form_data.get("meta"), dict) else {}
        for field in ROW_META_FIELDS:
            if meta.get(field) is None and row.get(field) is not None:
                meta[field] = row[field]
        form_data["meta"] = meta

        flow_type = detect_flow_type(row)
        service = FlowServiceFactory.get_flow_service_by_type(flow_type)
        document = service.format_data(form_data).to_document()

        return {
            "id": row.get("id"),
            "owner_id": row.get("owner_id"),
            "status": document["meta"]["status"],
            "created_at": document["meta"]["created_at"],
            "flow_type": flow_type.value,
            "property_details": json.dumps(document, ensure_ascii=False),
        }

    def reprocess_file(
        self,
        raw_file: Path,
        output_dir: Path | None = None,
        output_mode: str = "overwrite",
    ) -> Path | None:
        """
        Reprocess a single exported CSV file.

        Args:
            raw_file: Path to the exported CSV file
            output_dir: Directory to save output (default: next to the input)
            output_mode: "overwrite" to replace, "new" to create timestamped file

        Returns:
            Path to the created file, or None if no rows were normalized
        """
        raw_file = Path(raw_file)
        output_dir = Path(output_dir) if output_dir else raw_file.parent
        logger.info(f"Reprocessing {raw_file}")

        raw_df = pd.read_csv(raw_file)
        if raw_df.empty:
            logger.warning(f"Empty file: {raw_file}")
            return None

        processed_rows = []
        for raw in raw_df.to_dict("records"):
            row = _clean_raw_record(raw)
            try:
                processed_rows.append(self.normalize_row(row))
            except Exception as e:
                logger.warning(f"Failed to normalize listing {row.get('id')}: {e}")
                continue

        if not processed_rows:
            logger.warning(f"No listings normalized from {raw_file}")
            return None

        processed_df = pd.DataFrame(processed_rows, columns=OUTPUT_COLUMNS)

        os.makedirs(output_dir, exist_ok=True)

        if output_mode == "overwrite":
            output_file = output_dir / raw_file.name
        else:
            output_file = output_dir / f"{raw_file.stem}_reprocessed_{_timestamp_for_filename()}.csv"

        processed_df.to_csv(output_file, index=False, encoding="utf-8")
        flow_counts = processed_df["flow_type"].value_counts().to_dict()
        logger.info(f"Saved {len(processed_df)} rows to {output_file} ({flow_counts})")

        return output_file

    def reprocess_folder(
        self,
        folder: Path,
        output_dir: Path | None = None,
        output_mode: str = "overwrite",
    ) -> list[Path]:
        """Reprocess every CSV file in a folder."""
        folder = Path(folder)
        if not folder.exists():
            logger.error(f"Directory not found: {folder}")
            return []

        raw_files = sorted(folder.glob("*.csv"))
        if not raw_files:
            logger.warning(f"No CSV files in {folder}")
            return []

        logger.info(f"Found {len(raw_files)} files in {folder}")

        output_files = []
        for raw_file in raw_files:
            result = self.reprocess_file(raw_file, output_dir, output_mode)
            if result:
                output_files.append(result)

        return output_files


def reprocess_listings(
    path: str,
    output_mode: str = "overwrite",
    output_dir: str | None = None,
) -> list[Path]:
    """
    Main entry point for re-normalizing exported listings.

    Args:
        path: A CSV export or a folder of them
        output_mode: "overwrite" to replace existing, "new" for timestamped files
        output_dir: Where to write results (default: next to each input file)

    Returns:
        List of created file paths

    Examples:
        reprocess_listings("exports/properties.csv")
        reprocess_listings("exports", output_mode="new")
    """
    if output_mode not in OUTPUT_MODES:
        raise ValueError(f"Invalid output_mode: {output_mode}. Must be 'overwrite' or 'new'")

    reprocessor = Reprocessor()
    path_obj = Path(path)
    target_dir = Path(output_dir) if output_dir else None

    if path_obj.is_file():
        result = reprocessor.reprocess_file(path_obj, target_dir, output_mode)
        return [result] if result else []

    return reprocessor.reprocess_folder(path_obj, target_dir, output_mode)
