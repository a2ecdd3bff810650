import json
import random
import string

import pytest

from json_pretty_compact import FormatterConfig, dumps

WIDTHS = [1, 10, 20, 40, 80, 120]


def random_value(rng, depth=0):
    """Generate a value tree with alphanumeric strings only."""
    choice = rng.random()
    if depth < 4 and choice < 0.25:
        return [random_value(rng, depth + 1) for _ in range(rng.randint(0, 5))]
    if depth < 4 and choice < 0.5:
        return {
            "".join(rng.choices(string.ascii_letters, k=rng.randint(1, 8))): (
                random_value(rng, depth + 1)
            )
            for _ in range(rng.randint(0, 5))
        }
    if choice < 0.6:
        return rng.choice([True, False, None])
    if choice < 0.8:
        return rng.randint(-1000, 100000)
    return "".join(rng.choices(string.ascii_letters + string.digits, k=rng.randint(0, 20)))


def sample_values():
    rng = random.Random(1234)
    values = [random_value(rng) for _ in range(50)]
    values += [
        {"a": 1, "b": 2},
        {"name": "Averylongvaluethatexceedswidth", "id": 1},
        [[[[1]]]],
        {"a": [], "b": {}, "c": [[], {}]},
        [{"x": [1, 2, {"y": [3, 4]}]}, "tail"],
    ]
    return values


def leading_spaces(line):
    return len(line) - len(line.lstrip(" "))


@pytest.mark.parametrize("max_width", WIDTHS)
def test_round_trip(max_width):
    config = FormatterConfig(max_width=max_width)
    for value in sample_values():
        assert json.loads(dumps(value, config)) == value


@pytest.mark.parametrize("max_width", WIDTHS)
def test_inline_composites_fit_and_are_closed(max_width):
    config = FormatterConfig(max_width=max_width)
    for value in sample_values():
        for line in dumps(value, config).split("\n"):
            if "[ " not in line and "{ " not in line:
                continue
            assert len(line.rstrip(",")) <= max_width
            assert line.count("[") == line.count("]")
            assert line.count("{") == line.count("}")


@pytest.mark.parametrize("max_width", WIDTHS)
def test_expanded_children_indented_one_level(max_width):
    config = FormatterConfig(max_width=max_width)
    for value in sample_values():
        lines = dumps(value, config).split("\n")
        for line, next_line in zip(lines, lines[1:]):
            if line.endswith(("[", "{")):
                assert leading_spaces(next_line) == leading_spaces(line) + 2


def test_deterministic():
    config = FormatterConfig(max_width=30)
    for value in sample_values():
        assert dumps(value, config) == dumps(value, config)


def test_wider_never_expands_more():
    for value in sample_values():
        narrow = dumps(value, FormatterConfig(max_width=20))
        wide = dumps(value, FormatterConfig(max_width=200))
        assert wide.count("\n") <= narrow.count("\n")
