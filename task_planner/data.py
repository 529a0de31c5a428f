"""Input loading and bundled sample data for Task Planner."""

from pathlib import Path
from typing import Dict, List

import pandas as pd
import yaml

from .validators import YAML_SUFFIXES


DEPENDENCY_SEPARATOR = ';'

SAMPLE_WORKERS: List[dict] = [
    {'name': 'Alice', 'skill_level': 7, 'max_hours': 40, 'preferred_task_type': 'feature'},
    {'name': 'Bob', 'skill_level': 9, 'max_hours': 30, 'preferred_task_type': 'bug'},
    {'name': 'Charlie', 'skill_level': 5, 'max_hours': 35, 'preferred_task_type': 'refactor'},
]

SAMPLE_TASKS: List[dict] = [
    {'name': 'Feature A', 'difficulty': 7, 'hours_required': 15, 'task_type': 'feature',
     'priority': 4, 'dependencies': []},
    {'name': 'Bug Fix B', 'difficulty': 5, 'hours_required': 10, 'task_type': 'bug',
     'priority': 5, 'dependencies': []},
    {'name': 'Refactor C', 'difficulty': 9, 'hours_required': 25, 'task_type': 'refactor',
     'priority': 3, 'dependencies': ['Bug Fix B']},
    {'name': 'Optimization D', 'difficulty': 6, 'hours_required': 20, 'task_type': 'feature',
     'priority': 2, 'dependencies': []},
    {'name': 'Upgrade E', 'difficulty': 8, 'hours_required': 15, 'task_type': 'feature',
     'priority': 5, 'dependencies': ['Feature A']},
]


def sample_data() -> Dict[str, List[dict]]:
    """Return fresh copies of the sample workers and tasks."""
    return {
        'workers': [dict(worker) for worker in SAMPLE_WORKERS],
        'tasks': [dict(task, dependencies=list(task['dependencies'])) for task in SAMPLE_TASKS],
    }


def load_workers(path: Path) -> list:
    """Load worker records from a CSV or YAML file.

    Args:
        path: Path to the workers file

    Returns:
        List of worker dictionaries
    """
    if path.suffix.lower() in YAML_SUFFIXES:
        return _load_yaml_records(path, 'workers')

    return _load_csv_records(path)


def load_tasks(path: Path) -> list:
    """Load task records from a CSV or YAML file.

    In CSV files the ``dependencies`` column holds task names separated
    by ``;``. An empty cell means no dependencies.

    Args:
        path: Path to the tasks file

    Returns:
        List of task dictionaries
    """
    if path.suffix.lower() in YAML_SUFFIXES:
        return _load_yaml_records(path, 'tasks')

    records = _load_csv_records(path, text_columns=('name', 'task_type', 'dependencies'))
    for record in records:
        if 'dependencies' in record:
            record['dependencies'] = split_dependencies(record['dependencies'])
    return records


def split_dependencies(value) -> List[str]:
    """Split a ``;``-separated dependency cell into task names."""
    if value is None:
        return []
    return [name.strip() for name in str(value).split(DEPENDENCY_SEPARATOR) if name.strip()]


def _load_yaml_records(path: Path, key: str):
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    # Either a bare list or a document holding both collections
    if isinstance(data, dict):
        return data.get(key)
    return data


def _load_csv_records(path: Path, text_columns=('name',)) -> list:
    df = pd.read_csv(path, dtype={column: str for column in text_columns})

    # Empty cells become absent keys so optional fields fall back to defaults
    records = []
    for row in df.astype(object).to_dict(orient='records'):
        records.append({key: value for key, value in row.items() if not pd.isna(value)})
    return records
