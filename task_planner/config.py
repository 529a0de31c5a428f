"""Configuration management for Task Planner."""

from pathlib import Path

import yaml


DEPENDENCY_MODES = ("single_pass", "fixpoint")


class Config:
    """Configuration class for task assignment settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.any_task_type: str = "any"
        self.relax_task_type: bool = True
        self.dependency_mode: str = "single_pass"

    def load_from_file(self, config_path: Path) -> None:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML file is invalid
            ValueError: If the configuration structure is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a YAML dictionary")

        assignment_config = config_data.get('assignment', {})
        if not isinstance(assignment_config, dict):
            raise ValueError("assignment must be a dictionary")

        # Wildcard preference
        if 'any_task_type' in assignment_config:
            any_task_type = assignment_config['any_task_type']
            if not isinstance(any_task_type, str) or not any_task_type.strip():
                raise ValueError("assignment.any_task_type must be a non-empty string")
            self.any_task_type = any_task_type

        if 'relax_task_type' in assignment_config:
            relax = assignment_config['relax_task_type']
            if not isinstance(relax, bool):
                raise ValueError("assignment.relax_task_type must be true or false")
            self.relax_task_type = relax

        if 'dependency_mode' in assignment_config:
            mode = assignment_config['dependency_mode']
            if mode not in DEPENDENCY_MODES:
                raise ValueError(
                    f"assignment.dependency_mode must be one of {list(DEPENDENCY_MODES)}"
                )
            self.dependency_mode = mode

    def accepts_task_type(self, preferred_task_type, task_type) -> bool:
        """Check if a worker preference admits a task category.

        Args:
            preferred_task_type: The worker's preferred category (or wildcard)
            task_type: The task's category

        Returns:
            True if the preference matches exactly or is the wildcard
        """
        return preferred_task_type == task_type or preferred_task_type == self.any_task_type

    def to_dict(self) -> dict:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        return {
            'assignment': {
                'any_task_type': self.any_task_type,
                'relax_task_type': self.relax_task_type,
                'dependency_mode': self.dependency_mode,
            }
        }

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path where to save the configuration
        """
        config_dict = self.to_dict()

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=True)
