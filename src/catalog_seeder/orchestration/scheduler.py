from __future__ import annotations

from catalog_seeder.monitoring.logger import NullLogger, StructuredLogger
from catalog_seeder.orchestration.dag import DAG, JobContext
from catalog_seeder.orchestration.state import STATUS_FAILED, STATUS_SUCCESS, JobStateStore


def _created_counts(context: JobContext) -> dict[str, int]:
    created = context.get("created_ids")
    if not isinstance(created, dict):
        return {}
    return {str(kind): len(ids) for kind, ids in created.items() if isinstance(ids, list)}


class Scheduler:
    def __init__(
        self,
        dags: dict[str, DAG],
        store: JobStateStore | None = None,
        logger: StructuredLogger | None = None,
    ) -> None:
        self.dags = dags
        self.store = store or JobStateStore()
        self.logger = logger or NullLogger()

    def run(self, dag_name: str, context: JobContext | None = None) -> str:
        """Run a DAG to completion and return its job id.

        Task failures mark the job failed and are re-raised. Whatever the
        finished tasks created is still recorded on the job.
        """
        if dag_name not in self.dags:
            raise ValueError(f"Unknown DAG {dag_name}")
        dag = self.dags[dag_name]
        job_id = self.store.create_job(dag_name)["job_id"]
        context = context if context is not None else {}
        context["job_id"] = job_id

        def on_task_done(task_name: str, duration_ms: float) -> None:
            self.store.mark_task_done(job_id, task_name)
            self.logger.log_event(
                {
                    "event": "plan_task_complete",
                    "job_id": job_id,
                    "task": task_name,
                    "duration_ms": round(duration_ms, 2),
                },
            )

        self.store.mark_running(job_id)
        try:
            dag.execute(context, on_task_done=on_task_done)
        except Exception as exc:
            self.store.mark_finished(
                job_id,
                STATUS_FAILED,
                error=str(exc),
                created=_created_counts(context),
            )
            raise
        self.store.mark_finished(job_id, STATUS_SUCCESS, created=_created_counts(context))
        return job_id
