"""Command line interface for Task Planner."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from task_planner.assigner import TaskAssigner
from task_planner.config import Config
from task_planner.data import load_tasks, load_workers, sample_data
from task_planner.validators import ValidationError, validate_input, validate_input_file


def load_config(config_file: Optional[Path]) -> Config:
  """Build a config, applying the given YAML file if any."""
  config = Config()
  if config_file is not None:
    try:
      config.load_from_file(config_file)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
      click.secho(f"Error: {e}", fg="red")
      sys.exit(1)
  return config

def load_inputs(workers_file: Path, tasks_file: Path) -> tuple[list, list]:
  """Read workers and tasks, exiting on unreadable files."""
  try:
    for path in (workers_file, tasks_file):
      validate_input_file(path)
    return load_workers(workers_file), load_tasks(tasks_file)
  except (FileNotFoundError, ValueError) as e:
    click.secho(f"Error: {e}", fg="red")
    sys.exit(1)

def echo_result(result: dict) -> None:
  click.echo(json.dumps(result, indent=2))

def echo_summary(assigner: TaskAssigner, result: dict, workers: list) -> None:
  summary = assigner.get_plan_summary(result, workers)
  click.secho(
    f"Assigned {summary['assigned_tasks']} of {summary['total_tasks']} tasks", fg="blue", err=True
  )
  for name, hours in summary['worker_hours'].items():
    click.secho(f"  {name}: {hours}h ({summary['utilization'][name]:.0%})", fg="blue", err=True)

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every placement decision")
def cli(verbose: bool):
  """Task Planner CLI for assigning tasks to workers."""
  logging.basicConfig(
    level=logging.DEBUG if verbose else logging.WARNING,
    format="%(levelname)s %(name)s: %(message)s",
  )

@cli.command()
@click.option("--workers", "workers_file", type=click.Path(path_type=Path), required=True,
              help="Workers CSV or YAML file")
@click.option("--tasks", "tasks_file", type=click.Path(path_type=Path), required=True,
              help="Tasks CSV or YAML file")
@click.option("--config", "config_file", type=click.Path(path_type=Path), help="YAML config file")
@click.option("--output", "output_file", type=click.Path(path_type=Path),
              help="Write the plan here instead of printing it")
@click.option("--format", "output_format", type=click.Choice(["json", "yaml", "csv"]),
              default="json", show_default=True, help="Output file format")
@click.option("--summary", is_flag=True, help="Print a plan summary")
def assign(workers_file: Path, tasks_file: Path, config_file: Optional[Path],
           output_file: Optional[Path], output_format: str, summary: bool):
  """Assign tasks to workers and print the plan."""
  config = load_config(config_file)
  workers, tasks = load_inputs(workers_file, tasks_file)

  assigner = TaskAssigner(config)
  result = assigner.assign(workers, tasks)
  if 'error' in result:
    click.secho(f"Error: {result['error']}", fg="red")
    sys.exit(1)

  if output_file is None:
    echo_result(result)
  else:
    if output_format == "csv":
      assigner.save_plan_csv(result, output_file)
    elif output_format == "yaml":
      assigner.save_plan_yaml(result, output_file)
    else:
      assigner.save_plan_json(result, output_file)
    click.secho(f"Saved plan to {output_file}", fg="green", err=True)

  if result['unassigned']:
    click.secho(f"Unassigned tasks: {result['unassigned']}", fg="yellow", err=True)
  if summary:
    echo_summary(assigner, result, workers)

@cli.command()
@click.option("--config", "config_file", type=click.Path(path_type=Path), help="YAML config file")
def sample(config_file: Optional[Path]):
  """Assign the bundled sample tasks and print the plan."""
  data = sample_data()
  result = TaskAssigner(load_config(config_file)).assign(data['workers'], data['tasks'])
  echo_result(result)

@cli.command()
@click.option("--workers", "workers_file", type=click.Path(path_type=Path), required=True,
              help="Workers CSV or YAML file")
@click.option("--tasks", "tasks_file", type=click.Path(path_type=Path), required=True,
              help="Tasks CSV or YAML file")
def validate(workers_file: Path, tasks_file: Path):
  """Validate workers and tasks without assigning."""
  workers, tasks = load_inputs(workers_file, tasks_file)
  try:
    validate_input(workers, tasks)
  except ValidationError as e:
    click.secho(f"❌ {e}", fg="red")
    sys.exit(1)

  click.secho(f"✅ {len(workers)} workers and {len(tasks)} tasks are valid!", fg="green")

if __name__ == "__main__":
  cli()
