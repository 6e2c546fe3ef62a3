"""Persist the finished export as a single JSON document."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from helpscout_export.results import ResultSet


def write_conversations_json(results: ResultSet, output_path: Path) -> Path:
    """Write *results* to *output_path* as a JSON array.

    The document is written to a temporary file in the destination directory
    and renamed into place, so *output_path* either holds a complete export
    or is left untouched.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(results.to_json_payload(), ensure_ascii=False, indent=2) + "\n"

    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return output_path
