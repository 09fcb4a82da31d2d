"""Options Loader for loading run options from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from deity.options.base import Options
from deity.utils.range import Range

logger = logging.getLogger(__name__)


class OptionsLoader:
    """Loads options from YAML files.

    A file holds a single mapping; `iterations`, `letters` and `seed` are
    standard options and every other key becomes a custom option:

        iterations: 20
        letters: a-f
        collection: [4, 7, 10, 15]
    """

    def load_file(self, path: Path | str) -> Options:
        """Load options from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded Options instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Options file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        logger.debug(f"Loaded options from {path}")
        return self._parse_options(data)

    def load_from_string(self, content: str) -> Options:
        """Load options from a YAML string.

        Args:
            content: YAML content as string

        Returns:
            Loaded Options instance
        """
        data = yaml.safe_load(content)
        return self._parse_options(data)

    def _parse_options(self, data: Any) -> Options:
        """Parse options from the YAML structure."""
        if data is None:
            return Options()
        if not isinstance(data, dict):
            raise ValueError(f"Options must be a mapping, got {type(data).__name__}")

        return Options(**data)

    def save_file(self, options: Options, path: Path | str) -> None:
        """Save options to a YAML file.

        Args:
            options: The options to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._options_to_dict(options)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def _options_to_dict(self, options: Options) -> dict[str, Any]:
        """Convert Options to a dictionary for YAML serialization."""
        letters = options.letters
        data: dict[str, Any] = {
            "iterations": options.iterations,
            "letters": str(letters) if isinstance(letters, Range) else letters,
        }
        if options.seed is not None:
            data["seed"] = options.seed

        data.update(options.custom())
        return data


def load_options(path: Path | str) -> Options:
    """Convenience function to load options from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded Options instance
    """
    loader = OptionsLoader()
    return loader.load_file(path)
