"""Export and import of the tracker document as JSON."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tradetracker.db.store import DataStore
from tradetracker.exceptions import InvalidSnapshotError
from tradetracker.models import TrackerData

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "trade-tracker-backup.json"

# Collections that may be missing or null in an interchange document
OPTIONAL_KEYS = ("days", "cashflows", "withdrawal")


def dumps_snapshot(data: TrackerData) -> str:
    """Serialize a snapshot to the interchange document."""
    return json.dumps(data.model_dump(mode="json", by_alias=True), indent=2)


def loads_snapshot(text: str) -> TrackerData:
    """Parse an interchange document.

    ``settings`` must be present but may be null. Missing collections
    default to empty. Unknown top-level keys and non-finite numbers are
    rejected, as is anything else that does not match the snapshot shape.

    Args:
        text: JSON text.

    Returns:
        Parsed TrackerData.

    Raises:
        InvalidSnapshotError: If the text is not a valid tracker document.
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidSnapshotError(f"Invalid JSON file: {e}") from e

    if not isinstance(parsed, dict):
        raise InvalidSnapshotError("Invalid tracker file: expected a JSON object.")
    if "settings" not in parsed:
        raise InvalidSnapshotError("Invalid tracker file: missing 'settings'.")

    document = {
        key: value
        for key, value in parsed.items()
        if not (key in OPTIONAL_KEYS and value is None)
    }

    try:
        return TrackerData.model_validate(document)
    except ValidationError as e:
        raise InvalidSnapshotError(
            f"Invalid tracker file: {e.error_count()} field error(s)"
        ) from e


def export_snapshot(data: TrackerData, path: Path) -> Path:
    """Write a snapshot to a JSON file.

    Returns:
        Path written.
    """
    path.write_text(dumps_snapshot(data), encoding="utf-8")
    logger.info("Exported %d days to %s", len(data.days), path)
    return path


def import_snapshot(path: Path, store: DataStore) -> TrackerData:
    """Replace the stored snapshot with the contents of a JSON file.

    The file is fully validated before anything is written, so a rejected
    file leaves the store untouched.

    Raises:
        InvalidSnapshotError: If the file cannot be read or is not valid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidSnapshotError(f"Could not read {path}: {e}", source=str(path)) from e

    try:
        data = loads_snapshot(text)
    except InvalidSnapshotError as e:
        logger.warning("Rejected import of %s: %s", path, e)
        e.source = str(path)
        raise

    store.save_snapshot(data)
    logger.info("Imported %d days from %s", len(data.days), path)
    return data
