"""Tests for the Options module."""

import tempfile
from pathlib import Path

import pytest

from deity.options.base import DEFAULT_ITERATIONS, Options
from deity.options.loader import OptionsLoader, load_options
from deity.utils.range import Range


class TestOptions:
    """Tests for the Options model."""

    def test_defaults(self):
        options = Options()

        assert options.iterations == DEFAULT_ITERATIONS
        assert isinstance(options.letters, Range)
        assert str(options.letters) == "A-Z"
        assert options.seed is None

    def test_letter_range_string(self):
        options = Options(letters="a-f")
        assert isinstance(options.letters, Range)
        assert options.letters.min == "a"

    def test_digit_range_string(self):
        options = Options(letters="0-9")
        assert isinstance(options.letters, Range)
        assert options.letters.type == "char"

    def test_letters_as_characters(self):
        options = Options(letters="ABC")
        assert options.letters == "ABC"

    def test_custom_options(self):
        options = Options(collection=[1, 2, 3])

        assert options.get("collection") == [1, 2, 3]
        assert options.collection == [1, 2, 3]
        assert options.get("missing", "default") == "default"
        assert options.custom() == {"collection": [1, 2, 3]}

    def test_get_standard_option(self):
        assert Options(iterations=5).get("iterations") == 5

    def test_iterations_must_be_positive(self):
        with pytest.raises(ValueError):
            Options(iterations=0)

    def test_coerce(self):
        options = Options(iterations=3)
        assert Options.coerce(options) is options
        assert Options.coerce(None).iterations == DEFAULT_ITERATIONS
        assert Options.coerce({"iterations": 7}).iterations == 7

    def test_with_registry(self):
        options = Options(collection=[1])
        registry = object()
        bound = options.with_registry(registry)

        assert bound.registry is registry
        assert options.registry is None
        assert bound.get("collection") == [1]


class TestOptionsLoader:
    """Tests for OptionsLoader."""

    def test_load_from_string(self):
        yaml_content = """
iterations: 20
letters: a-f
seed: 7
collection:
  - 4
  - 7
"""
        options = OptionsLoader().load_from_string(yaml_content)

        assert options.iterations == 20
        assert isinstance(options.letters, Range)
        assert options.seed == 7
        assert options.get("collection") == [4, 7]

    def test_load_empty(self):
        options = OptionsLoader().load_from_string("")
        assert options.iterations == DEFAULT_ITERATIONS

    def test_load_non_mapping(self):
        with pytest.raises(ValueError):
            OptionsLoader().load_from_string("- 1\n- 2\n")

    def test_save_and_load(self):
        options = Options(iterations=12, letters="x-z", collection={"a": 1})

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            OptionsLoader().save_file(options, path)
            loaded = load_options(path)

        assert loaded.iterations == 12
        assert str(loaded.letters) == "x-z"
        assert loaded.get("collection") == {"a": 1}

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_options("/nonexistent/options.yaml")
