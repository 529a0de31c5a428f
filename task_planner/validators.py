"""Validation utilities for Task Planner."""

import math
import numbers
from collections.abc import Mapping
from pathlib import Path

import pandas as pd
import yaml


YAML_SUFFIXES = {'.yaml', '.yml'}


class ValidationError(ValueError):
    """Raised when worker or task input is malformed."""


def is_number(value) -> bool:
    """Check if a value is a finite real number (booleans excluded)."""
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _has_name(record: Mapping) -> bool:
    name = record.get('name')
    return isinstance(name, str) and bool(name.strip())


def validate_input(workers, tasks) -> None:
    """Validate the worker and task collections handed to the assigner.

    Checks run in order and the first violation wins:
    - Both collections are lists (or tuples)
    - Every worker has a name, a numeric skill level and numeric max hours
    - Every task has a name, a numeric difficulty and numeric hours required
    - Worker names and task names are unique
    - Capacities are non-negative
    - Optional priorities are numeric and optional dependencies are lists of names

    Args:
        workers: Sequence of worker records
        tasks: Sequence of task records

    Raises:
        ValidationError: On the first malformed collection or record
    """
    if not isinstance(workers, (list, tuple)) or not isinstance(tasks, (list, tuple)):
        raise ValidationError("Invalid input: workers and tasks should be lists.")

    for worker in workers:
        if (
            not isinstance(worker, Mapping)
            or not _has_name(worker)
            or not is_number(worker.get('skill_level'))
            or not is_number(worker.get('max_hours'))
        ):
            raise ValidationError(
                "Invalid worker data: each worker should have a name, skill level, and max hours."
            )

    for task in tasks:
        if (
            not isinstance(task, Mapping)
            or not _has_name(task)
            or not is_number(task.get('difficulty'))
            or not is_number(task.get('hours_required'))
        ):
            raise ValidationError(
                "Invalid task data: each task should have a name, difficulty, and hours required."
            )

    validate_unique_names([worker['name'] for worker in workers], 'worker')
    validate_unique_names([task['name'] for task in tasks], 'task')

    for worker in workers:
        if worker['max_hours'] < 0:
            raise ValidationError(f"Worker '{worker['name']}' has negative max hours")

    for task in tasks:
        if task.get('priority') is not None and not is_number(task['priority']):
            raise ValidationError(f"Task '{task['name']}' has a non-numeric priority")

        dependencies = task.get('dependencies')
        if dependencies is None:
            continue
        if not isinstance(dependencies, (list, tuple)) or not all(
            isinstance(dep, str) for dep in dependencies
        ):
            raise ValidationError(
                f"Task '{task['name']}' dependencies must be a list of task names"
            )


def validate_unique_names(names, kind: str) -> None:
    """Validate that no name appears twice.

    Args:
        names: Names in input order
        kind: Label used in the error message ("worker" or "task")

    Raises:
        ValidationError: If a name is repeated
    """
    seen = set()
    duplicates = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)

    if duplicates:
        raise ValidationError(f"Duplicate {kind} names: {duplicates}")


def validate_input_file(path: Path) -> None:
    """Validate that a workers or tasks file can be read.

    CSV files must have a header and at least one row; YAML files must
    parse and not be empty.

    Args:
        path: Path to a CSV or YAML input file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or unreadable
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to read YAML file: {e}")
        if data is None:
            raise ValueError(f"Input file is empty: {path}")
        return

    try:
        df = pd.read_csv(path)
    except pd.errors.EmptyDataError:
        raise ValueError(f"Input file is empty: {path}")
    except Exception as e:
        raise ValueError(f"Failed to read CSV file: {e}")

    if 'name' not in df.columns:
        raise ValueError(f"Input file must have a 'name' column: {path}")

    if df.shape[0] == 0:
        raise ValueError(f"Input file must contain at least 1 row: {path}")
