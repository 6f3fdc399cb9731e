"""
Event log and run report.

Events are streamed to the report file as they happen, so an interrupted
run still leaves a usable partial log. The summary block is appended at
shutdown.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple

from ..models.events import Event, EventPhase
from ..models.results import ComponentStatus, RunState

SEPARATOR = "=" * 60


class EventLog:
    """Ordered, append-only event log with an optional file sink."""

    def __init__(self, sink_path: Optional[Path] = None):
        self.logger = logging.getLogger(__name__)
        self.sink_path = Path(sink_path) if sink_path else None
        self._events: List[Event] = []
        self._sink: Optional[TextIO] = None

        if self.sink_path:
            self.sink_path.parent.mkdir(parents=True, exist_ok=True)
            self._sink = open(self.sink_path, "a", encoding="utf-8")

    def open_run(self, profile: str) -> None:
        """Write the run header to the sink."""
        self._write(f"{SEPARATOR}\ndevsetup run {datetime.utcnow().isoformat()} profile={profile}\n{SEPARATOR}")

    def emit(self, component_id: str, phase: EventPhase, message: str = "") -> Event:
        event = Event(component_id=component_id, phase=phase, message=message)
        self._events.append(event)
        self._write(event.to_line())

        level = logging.WARNING if phase == EventPhase.FAILED else logging.INFO
        self.logger.log(level, f"{component_id} {phase.value}: {message}")
        return event

    def append_block(self, text: str) -> None:
        self._write(text)

    def _write(self, line: str) -> None:
        if not self._sink:
            return
        self._sink.write(line + "\n")
        self._sink.flush()

    @property
    def events(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def for_component(self, component_id: str) -> List[Event]:
        return [e for e in self._events if e.component_id == component_id]

    def close(self) -> None:
        if self._sink:
            self._sink.close()
            self._sink = None

    def __enter__(self) -> "EventLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class SummaryRenderer:
    """Renders the human-readable summary block for a finished run."""

    def render(self, state: RunState) -> str:
        counts = state.counts()
        results = state.results
        lines = [
            SEPARATOR,
            "SUMMARY",
            SEPARATOR,
            f"Profile: {state.profile}",
            f"Components: {len(results)}",
        ]
        for status in ComponentStatus:
            lines.append(f"  {status.value}: {counts[status.value]}")
        if state.duration_seconds is not None:
            lines.append(f"Duration: {state.duration_seconds:.2f} seconds")

        succeeded = [r for r in results if r.status in (ComponentStatus.SUCCESS, ComponentStatus.ALREADY_PRESENT)]
        if succeeded:
            lines.append("")
            lines.append("Installed:")
            for r in succeeded:
                how = r.chosen_method if r.status == ComponentStatus.SUCCESS else "already present"
                version = f" {r.version}" if r.version else ""
                lines.append(f"  - {r.component_id}{version} ({how})")

        failed = [r for r in results if r.status == ComponentStatus.FAILED]
        if failed:
            lines.append("")
            lines.append("Failed:")
            for r in failed:
                tried = ", ".join(a.method_name for a in r.attempts) or "no methods"
                lines.append(f"  - {r.component_id} [tried: {tried}]: {r.diagnostic or 'no diagnostic'}")

        skipped = [r for r in results if r.status == ComponentStatus.SKIPPED]
        if skipped:
            lines.append("")
            lines.append("Skipped:")
            for r in skipped:
                lines.append(f"  - {r.component_id}: {r.skip_reason.value}")

        lines.append("")
        if state.halted:
            lines.append(f"Run HALTED after critical failure of {state.halted_by}")
        elif state.critical_failure:
            lines.append("A critical component failed; later critical components were skipped")
        lines.append(f"Exit code: {state.exit_code}")
        lines.append(SEPARATOR)
        return "\n".join(lines)


def summary_dict(state: RunState) -> Dict[str, Any]:
    """Machine-readable summary of a run."""
    return {
        "profile": state.profile,
        "force_reinstall": state.force_reinstall,
        "started_at": state.started_at.isoformat(),
        "completed_at": state.completed_at.isoformat() if state.completed_at else None,
        "duration_seconds": state.duration_seconds,
        "counts": state.counts(),
        "critical_failure": state.critical_failure,
        "halted": state.halted,
        "halted_by": state.halted_by,
        "exit_code": state.exit_code,
        "components": [r.model_dump(mode="json") for r in state.results],
    }


class ReportWriter:
    """Persists the summary after the event log has been streamed."""

    def __init__(self, summary_json_path: Optional[Path] = None,
                 renderer: Optional[SummaryRenderer] = None):
        self.logger = logging.getLogger(__name__)
        self.summary_json_path = Path(summary_json_path) if summary_json_path else None
        self.renderer = renderer or SummaryRenderer()

    def finalize(self, state: RunState, events: EventLog) -> Optional[str]:
        """
        Render and persist the summary.

        A rendering failure is logged and leaves the already written event
        log untouched.

        Returns:
            The rendered summary, or None if rendering failed
        """
        try:
            summary = self.renderer.render(state)
        except Exception as e:
            self.logger.error(f"Failed to render run summary: {e}", exc_info=True)
            events.append_block(f"(summary unavailable: {e})")
            return None

        events.append_block(summary)
        if self.summary_json_path:
            self.save_json(self.summary_json_path, summary_dict(state))
        return summary

    def save_json(self, path: Path, data: Dict[str, Any]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if 'timestamp' not in data:
            data['timestamp'] = datetime.utcnow().isoformat()
        try:
            with open(path, 'w') as f:
                json.dump(data, f, indent=2, default=str)
        except OSError as e:
            self.logger.error(f"Failed to write summary JSON {path}: {e}")
            return path
        self.logger.info(f"Saved JSON to {path}")
        return path
