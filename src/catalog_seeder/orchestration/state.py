from __future__ import annotations

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import TypedDict, cast

from catalog_seeder.config import get_settings

STATUS_QUEUED = "queued"
STATUS_RUNNING = "running"
STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


class JobRecord(TypedDict):
    job_id: str
    dag_name: str
    status: str
    queued_at: str
    started_at: str | None
    finished_at: str | None
    duration_ms: float | None
    error: str | None
    completed_tasks: list[str]
    created: dict[str, int]


class JobStateStore:
    """Seeding runs persisted as one JSON document per job."""

    def __init__(self, jobs_dir: Path | None = None) -> None:
        self.jobs_dir = jobs_dir or get_settings().jobs_dir
        self.jobs_dir.mkdir(parents=True, exist_ok=True)

    def _job_file(self, job_id: str) -> Path:
        return self.jobs_dir / f"{job_id}.json"

    def _write_state(self, state: JobRecord) -> None:
        self._job_file(state["job_id"]).write_text(json.dumps(state, indent=2), encoding="utf-8")

    def create_job(self, dag_name: str) -> JobRecord:
        timestamp = datetime.utcnow().strftime("%Y%m%d%H%M%S%f")
        job_id = f"{dag_name}-{timestamp}-{uuid.uuid4().hex[:6]}"
        state: JobRecord = {
            "job_id": job_id,
            "dag_name": dag_name,
            "status": STATUS_QUEUED,
            "queued_at": datetime.utcnow().isoformat(),
            "started_at": None,
            "finished_at": None,
            "duration_ms": None,
            "error": None,
            "completed_tasks": [],
            "created": {},
        }
        self._write_state(state)
        return state

    def mark_running(self, job_id: str) -> JobRecord:
        state = self.get_job(job_id)
        state["status"] = STATUS_RUNNING
        state["started_at"] = datetime.utcnow().isoformat()
        self._write_state(state)
        return state

    def mark_task_done(self, job_id: str, task_name: str) -> JobRecord:
        state = self.get_job(job_id)
        state["completed_tasks"].append(task_name)
        self._write_state(state)
        return state

    def mark_finished(
        self,
        job_id: str,
        status: str,
        error: str | None = None,
        created: dict[str, int] | None = None,
    ) -> JobRecord:
        state = self.get_job(job_id)
        finished = datetime.utcnow()
        state["status"] = status
        state["finished_at"] = finished.isoformat()
        started_at = state.get("started_at")
        if started_at:
            start_dt = datetime.fromisoformat(started_at)
            state["duration_ms"] = (finished - start_dt).total_seconds() * 1000
        if error:
            state["error"] = error
        if created is not None:
            state["created"] = created
        self._write_state(state)
        return state

    def get_job(self, job_id: str) -> JobRecord:
        path = self._job_file(job_id)
        if not path.exists():
            raise FileNotFoundError(f"Job {job_id} not found")
        return cast(JobRecord, json.loads(path.read_text(encoding="utf-8")))

    def list_jobs(self, limit: int = 10) -> list[JobRecord]:
        files = sorted(self.jobs_dir.glob("*.json"), key=lambda p: p.stat().st_mtime, reverse=True)
        return [
            cast(JobRecord, json.loads(path.read_text(encoding="utf-8"))) for path in files[:limit]
        ]
