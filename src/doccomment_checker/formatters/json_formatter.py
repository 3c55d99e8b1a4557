"""JSON formatter for doccomment-checker."""

import json
from dataclasses import asdict

from ..checker import RunResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render findings and counters as JSON."""

    def render(self, result: RunResult) -> None:
        print(self.format(result))

    def format(self, result: RunResult) -> str:
        data = {
            "findings": [asdict(f) for f in result.findings],
            "counters": result.counters.to_dict(),
            "reported": result.reported,
            "missing_paths": [str(p) for p in result.missing_paths],
            "unreadable_paths": [str(p) for p in result.unreadable_paths],
        }
        return json.dumps(data, indent=2)
