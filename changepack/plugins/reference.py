"""Reference lifecycle plugin implementations."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path

from changepack.plugins.base import DiffEndEvent, DiffStartEvent, LifecyclePlugin


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    """Appends every diff hook to an NDJSON trace file."""

    output_path: str = "runs/plugins/diff-trace.ndjson"
    name: str = "lifecycle-trace"

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self._append("on_diff_start", event)

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self._append("on_diff_end", event)

    def _append(self, hook: str, event: object) -> None:
        path = Path(self.output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        record = {"hook": hook, "plugin": self.name, "event": asdict(event)}
        with path.open("a", encoding="utf-8") as handle:
            handle.write(
                json.dumps(record, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
                + "\n"
            )


@dataclass(slots=True)
class ChangeTallyPlugin(LifecyclePlugin):
    """Keeps running totals of diff outcomes in memory."""

    name: str = "change-tally"
    totals: dict[str, int] = field(
        default_factory=lambda: {"diffs": 0, "errors": 0, "added": 0, "removed": 0, "modified": 0}
    )

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self.totals["diffs"] += 1
        if event.status == "error":
            self.totals["errors"] += 1
            return
        self.totals["added"] += event.added or 0
        self.totals["removed"] += event.removed or 0
        self.totals["modified"] += event.modified or 0
