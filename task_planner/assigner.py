"""Core task assignment logic for Task Planner."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

import pandas as pd
import yaml

from .config import Config
from .validators import ValidationError, validate_input


logger = logging.getLogger(__name__)


class TaskAssigner:
    """Main class for assigning prioritized tasks to workers."""

    def __init__(self, config: Config):
        """Initialize the task assigner.

        Args:
            config: Configuration object with assignment settings
        """
        self.config = config

    def assign(self, workers: list, tasks: list) -> dict:
        """Assign tasks to workers, reporting bad input in the result.

        Args:
            workers: Worker records, in matching order
            tasks: Task records

        Returns:
            Dictionary with ``assignments`` (worker name -> tasks and total
            hours) and ``unassigned`` (task names in processing order). On
            invalid input both are empty and ``error`` holds the reason.
        """
        try:
            return self.plan(workers, tasks)
        except ValidationError as e:
            logger.error("An error occurred: %s", e)
            return {'assignments': {}, 'unassigned': [], 'error': str(e)}

    def plan(self, workers: list, tasks: list) -> dict:
        """Assign tasks to workers.

        Same as :meth:`assign`, but invalid input is raised.

        Raises:
            ValidationError: If the workers or tasks are malformed
        """
        validate_input(workers, tasks)

        # Ledger and completed set are per run
        ledger = {worker['name']: {'tasks': [], 'total_hours': 0} for worker in workers}
        completed: Set[str] = set()

        pending = self.sort_tasks(tasks)
        while pending:
            residue = [
                task for task in pending
                if not self._place_task(task, workers, ledger, completed)
            ]
            progressed = len(residue) < len(pending)
            pending = residue
            # Fixpoint mode retries the residue until a pass places nothing
            if self.config.dependency_mode == 'single_pass' or not progressed:
                break

        unassigned = [task['name'] for task in pending]
        logger.info(
            "Assigned %d of %d tasks; %d unassigned",
            len(tasks) - len(unassigned), len(tasks), len(unassigned),
        )

        return {'assignments': ledger, 'unassigned': unassigned}

    def _place_task(
        self,
        task: dict,
        workers: list,
        ledger: Dict[str, dict],
        completed: Set[str]
    ) -> bool:
        """Try to place one task, updating the ledger on success."""
        if not self.dependencies_met(task, completed):
            logger.debug("Task '%s' blocked by unmet dependencies", task['name'])
            return False

        # Strict pass honours preferences, relaxed pass ignores them
        worker = self.find_worker(task, workers, ledger)
        if worker is None and self.config.relax_task_type:
            worker = self.find_worker(task, workers, ledger, allow_any_type=True)

        if worker is None:
            logger.debug("No worker available for task '%s'", task['name'])
            return False

        entry = ledger[worker['name']]
        entry['tasks'].append(task['name'])
        entry['total_hours'] += task['hours_required']
        completed.add(task['name'])
        logger.debug("Assigned task '%s' to %s", task['name'], worker['name'])
        return True

    def sort_tasks(self, tasks: list) -> List[dict]:
        """Order tasks by priority, highest first.

        ``sorted`` is stable, so tasks with equal priority keep their input
        order. The caller's list is left untouched.
        """
        return sorted(tasks, key=lambda task: task.get('priority') or 0, reverse=True)

    @staticmethod
    def dependencies_met(task: dict, completed: Set[str]) -> bool:
        """Check if every dependency of a task has already been assigned."""
        return all(dep in completed for dep in task.get('dependencies') or [])

    def find_worker(
        self,
        task: dict,
        workers: list,
        ledger: Dict[str, dict],
        allow_any_type: bool = False
    ) -> Optional[dict]:
        """Find the first worker able to take a task.

        Workers are scanned in their input order, so reordering the same
        workers can give a different (equally valid) plan.

        Args:
            task: Task to place
            workers: Worker records
            ledger: Current per-worker assignments
            allow_any_type: Ignore the worker's preferred task type

        Returns:
            The first qualifying worker, or None
        """
        for worker in workers:
            committed = ledger[worker['name']]['total_hours']
            if not (
                worker['skill_level'] >= task['difficulty']
                and committed + task['hours_required'] <= worker['max_hours']
            ):
                continue
            if not allow_any_type and not self.config.accepts_task_type(
                worker.get('preferred_task_type'),
                task.get('task_type'),
            ):
                continue
            return worker
        return None

    def get_plan_summary(self, result: dict, workers: list) -> Dict[str, any]:
        """Get a summary of an assignment plan.

        Args:
            result: Result returned by :meth:`assign`
            workers: The workers the plan was computed for

        Returns:
            Dictionary with plan statistics
        """
        assignments = result.get('assignments', {})
        unassigned = result.get('unassigned', [])

        worker_hours = {name: entry['total_hours'] for name, entry in assignments.items()}
        assigned_count = sum(len(entry['tasks']) for entry in assignments.values())

        utilization = {}
        for worker in workers:
            name = worker['name']
            if name not in worker_hours:
                continue
            capacity = worker['max_hours']
            utilization[name] = round(worker_hours[name] / capacity, 2) if capacity else 0.0

        return {
            'total_tasks': assigned_count + len(unassigned),
            'assigned_tasks': assigned_count,
            'unassigned_tasks': len(unassigned),
            'worker_hours': worker_hours,
            'utilization': utilization,
        }

    def save_plan_csv(self, result: dict, output_path: Path) -> None:
        """Save a plan to CSV with one row per task.

        Unassigned tasks are written last with an empty worker column.

        Args:
            result: Result returned by :meth:`assign`
            output_path: Path where to save the plan CSV
        """
        rows = []
        for worker, entry in result.get('assignments', {}).items():
            for task in entry['tasks']:
                rows.append({'worker': worker, 'task': task})
        for task in result.get('unassigned', []):
            rows.append({'worker': None, 'task': task})

        plan_df = pd.DataFrame(rows, columns=['worker', 'task'])
        plan_df.to_csv(output_path, index=False)

    def save_plan_yaml(self, result: dict, output_path: Path) -> None:
        """Save a plan to YAML, keeping worker and task order.

        Args:
            result: Result returned by :meth:`assign`
            output_path: Path where to save the plan YAML
        """
        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.dump(result, f, default_flow_style=False, sort_keys=False)

    def save_plan_json(self, result: dict, output_path: Path) -> None:
        """Save a plan to indented JSON."""
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(result, f, indent=2)
            f.write('\n')


def assign_tasks(workers: list, tasks: list, config: Optional[Config] = None) -> dict:
    """Assign tasks to workers with default or given settings.

    See :meth:`TaskAssigner.assign`.
    """
    return TaskAssigner(config or Config()).assign(workers, tasks)
