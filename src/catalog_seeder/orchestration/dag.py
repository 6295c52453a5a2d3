from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

JobContext = dict[str, object]


@dataclass
class Task:
    name: str
    fn: Callable[[JobContext], None]
    deps: list[str] = field(default_factory=list)

    def run(self, context: JobContext) -> float:
        start = time.perf_counter()
        self.fn(context)
        return (time.perf_counter() - start) * 1000


class DAG:
    def __init__(self, name: str, tasks: list[Task]) -> None:
        self.name = name
        self.tasks = {task.name: task for task in tasks}
        self._validate_dependencies()
        self._ordered_tasks = self._topological_sort()

    def _validate_dependencies(self) -> None:
        for task in self.tasks.values():
            for dep in task.deps:
                if dep not in self.tasks:
                    raise ValueError(f"Task {task.name} depends on unknown task {dep}")

    def _topological_sort(self) -> list[Task]:
        visited: set[str] = set()
        temp_mark: set[str] = set()
        order: list[str] = []

        def visit(node: str) -> None:
            if node in temp_mark:
                raise ValueError("Cycle detected in DAG definition")
            if node not in visited:
                temp_mark.add(node)
                for dep in self.tasks[node].deps:
                    visit(dep)
                temp_mark.remove(node)
                visited.add(node)
                order.append(node)

        for task_name in self.tasks:
            visit(task_name)
        return [self.tasks[name] for name in order]

    def execute(
        self,
        context: JobContext | None = None,
        on_task_done: Callable[[str, float], None] | None = None,
    ) -> JobContext:
        context = context if context is not None else {}
        for task in self._ordered_tasks:
            duration_ms = task.run(context)
            if on_task_done is not None:
                on_task_done(task.name, duration_ms)
        return context

    def task_names(self) -> list[str]:
        return [task.name for task in self._ordered_tasks]
