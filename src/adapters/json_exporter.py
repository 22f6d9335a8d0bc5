"""JSON export of a demo run.

Why JSON:
- Lets the closure order and the reported errors of each routine be diffed
  between runs or fed to other tools.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import RoutineOutcome


def export_outcomes_json(*, outcomes: Sequence[RoutineOutcome], output_path: Path) -> Path:
    """Export routine outcomes to UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"routines": [o.model_dump(mode="json") for o in outcomes]}
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
