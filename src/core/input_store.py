"""
Input snapshots and load hand-off between calculators.

Inputs are saved as flat JSON key/value text files (e.g. combo-inputs.txt).
The store directory plays the role of browser local storage: one JSON file
per storage key, including the one-shot "loadsForCombinator" hand-off that
the snow calculator writes and the combinator consumes.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .constants import LOADS_FOR_COMBOS_KEY

logger = logging.getLogger(__name__)


class InputFileError(ValueError):
    """Raised when an input file or stored snapshot cannot be read"""


def dump_inputs(inputs: Dict[str, Any], input_ids: Optional[Iterable[str]] = None) -> str:
    """Serialize inputs to the flat JSON text format.

    Args:
        inputs: Values keyed by input id
        input_ids: Ids to include; all keys when None

    Returns:
        Indented JSON text
    """
    if input_ids is None:
        data = dict(inputs)
    else:
        data = {input_id: inputs[input_id] for input_id in input_ids if input_id in inputs}
    return json.dumps(data, indent=2)


def parse_inputs(text: str, input_ids: Iterable[str]) -> Dict[str, Any]:
    """Parse a saved input file.

    Only known ids are returned; ids missing from the file are skipped so
    the current form values stay in place.

    Raises:
        InputFileError: If the text is not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputFileError(f"Invalid input file: {e.msg} (line {e.lineno})") from e

    if not isinstance(data, dict):
        raise InputFileError("Invalid input file: expected a JSON object of input values.")

    return {input_id: data[input_id] for input_id in input_ids if input_id in data}


def meaningful_imports(loads: Dict[str, Any]) -> List[str]:
    """Ids in a load hand-off that carry a non-zero numeric value"""
    imported = []
    for input_id, value in loads.items():
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if number != 0:
            imported.append(input_id)
    return imported


class InputStore:
    """File-backed key/value store for input snapshots.

    Attributes:
        data_dir: Directory holding one `<key>.json` file per storage key
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _write(self, key: str, payload: Dict[str, Any]) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    def _read(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InputFileError(f"Stored data for '{key}' is corrupt: {e.msg}") from e
        if not isinstance(data, dict):
            raise InputFileError(f"Stored data for '{key}' is not a JSON object.")
        return data

    def save_snapshot(self, key: str, inputs: Dict[str, Any]) -> Path:
        """Persist the current inputs under a storage key."""
        path = self._write(key, dict(inputs))
        logger.info(f"Saved {len(inputs)} inputs to {path}")
        return path

    def load_snapshot(self, key: str, input_ids: Iterable[str]) -> Dict[str, Any]:
        """Load a saved snapshot, keeping only known ids.

        Returns:
            Known ids found in the snapshot (empty if nothing is stored)

        Raises:
            InputFileError: If the stored snapshot is corrupt
        """
        data = self._read(key)
        if data is None:
            return {}
        ids = list(input_ids)
        loaded = {input_id: data[input_id] for input_id in ids if input_id in data}
        logger.info(f"Loaded {len(loaded)} of {len(ids)} inputs from '{key}'")
        return loaded

    def clear(self, key: str) -> None:
        """Remove a stored key if present."""
        self._path(key).unlink(missing_ok=True)

    def send_loads_to_combos(self, loads: Dict[str, float], source: str, load_type: str) -> Path:
        """Hand calculated loads over to the load combinator.

        Args:
            loads: Combinator input ids -> values
            source: Name of the sending calculator (e.g. "Snow Calculator")
            load_type: Load family (e.g. "snow")
        """
        payload = {"loads": dict(loads), "source": source, "type": load_type}
        path = self._write(LOADS_FOR_COMBOS_KEY, payload)
        logger.info(f"{source} sent {len(loads)} {load_type} loads to the combinator")
        return path

    def pop_loads_for_combos(self) -> Optional[Dict[str, Any]]:
        """Read and remove the pending load hand-off.

        Corrupt hand-off data is logged and discarded.

        Returns:
            {"loads", "source", "type"} or None when nothing is pending
        """
        try:
            payload = self._read(LOADS_FOR_COMBOS_KEY)
        except InputFileError:
            logger.warning("Discarding unreadable load hand-off data", exc_info=True)
            self.clear(LOADS_FOR_COMBOS_KEY)
            return None

        if payload is None:
            return None

        self.clear(LOADS_FOR_COMBOS_KEY)
        if not isinstance(payload.get("loads"), dict):
            logger.warning("Discarding load hand-off without a loads mapping")
            return None
        return payload
