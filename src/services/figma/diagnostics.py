"""Diagnostics snapshots for development mode.

Writes raw API payloads and simplified designs as JSON so a developer can
inspect what the simplifier saw. A failed write never fails the retrieval.
"""

import json
import os
from pathlib import Path
from typing import Any

from src.lib.logging import get_logger


def _to_jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


class DiagnosticsSink:
    """Writes named JSON blobs to a logs directory when enabled."""

    def __init__(self, enabled: bool, logs_dir: str = "logs", logger: Any = None):
        self.enabled = enabled
        self.logs_dir = Path(logs_dir)
        self.logger = logger if logger is not None else get_logger(__name__)

    def write(self, name: str, value: Any) -> None:
        """Write value as logs_dir/name; no-op unless enabled.

        Args:
            name: File name (e.g. "figma-raw.json")
            value: JSON-serializable value or object with to_dict()
        """
        if not self.enabled:
            return

        try:
            if not os.access(Path.cwd(), os.W_OK):
                self.logger.info(f"Failed to write logs: {Path.cwd()} is not writable")
                return

            self.logs_dir.mkdir(parents=True, exist_ok=True)
            (self.logs_dir / name).write_text(
                json.dumps(_to_jsonable(value), indent=2, default=str), encoding="utf-8"
            )
        except Exception as e:
            self.logger.debug(f"Failed to write logs: {e!r}")
