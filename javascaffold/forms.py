"""Schema-driven form: turn the cached metadata into prompts and encode the answers."""
from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Protocol

import click

from javascaffold.errors import ValidationError
from javascaffold.schema import ParameterKind, ParameterOption, RemoteSchema

# Answered outside the walk: the project name is asked up front and the
# dependencies get their own multi-select.
DEFAULT_EXCLUDED = frozenset({"name", "dependencies"})


class Prompter(Protocol):
    """Asks the user for values. Returning None means the user declined."""

    def select(self, key: str, options: Sequence[ParameterOption], default: str) -> str | None: ...

    def text(self, key: str, default: str) -> str | None: ...

    def multi_select(self, key: str, options: Sequence[ParameterOption]) -> set[str] | None: ...


class ClickPrompter:
    """Terminal prompts built on click."""

    def select(self, key: str, options: Sequence[ParameterOption], default: str) -> str | None:
        for option in options:
            click.echo(f"  {option.id:<24} {option.label}")
        ids = [o.id for o in options]
        return click.prompt(
            key,
            type=click.Choice(ids),
            default=default if default in ids else None,
            show_choices=False,
        )

    def text(self, key: str, default: str) -> str | None:
        return click.prompt(key, default=default, show_default=bool(default))

    def multi_select(self, key: str, options: Sequence[ParameterOption]) -> set[str] | None:
        for option in options:
            click.echo(f"  {option.id:<32} {option.label}")
        raw = click.prompt(f"{key} (comma separated ids)", default="", show_default=False)
        return {part.strip() for part in raw.split(",") if part.strip()}


def walk_schema(
    schema: RemoteSchema,
    excluded: Collection[str],
    prompter: Prompter,
) -> list[tuple[str, str]]:
    """Prompt for every schema parameter not in ``excluded``, in schema order.

    Select and action answers must be one of the declared option ids; text
    answers are taken as typed, the empty string included.
    """
    answers: list[tuple[str, str]] = []
    for key in schema:
        if key in excluded:
            continue
        spec = schema[key]

        match spec.kind:
            case ParameterKind.SINGLE_SELECT | ParameterKind.ACTION:
                value = prompter.select(key, spec.options, spec.default)
                if value is None:
                    raise ValidationError(f"No value selected for '{key}'")
                if value not in spec.option_ids:
                    raise ValidationError(
                        f"'{value}' is not a valid choice for '{key}' "
                        f"(expected one of: {', '.join(spec.option_ids)})"
                    )
            case ParameterKind.TEXT:
                value = prompter.text(key, spec.default)
                if value is None:
                    value = spec.default
            case ParameterKind.HIERARCHICAL_MULTI_SELECT:
                continue

        answers.append((key, value))
    return answers


def flatten_dependencies(
    schema: RemoteSchema, key: str = "dependencies"
) -> dict[str, ParameterOption]:
    """Collect every grouped dependency into one flat mapping keyed by id."""
    if key not in schema:
        return {}
    flat: dict[str, ParameterOption] = {}
    for group in schema[key].groups:
        for option in group.options:
            label = f"{group.label}: {option.label}" if group.label else option.label
            flat[option.id] = ParameterOption(id=option.id, label=label)
    return flat


def choose_dependencies(schema: RemoteSchema, prompter: Prompter) -> set[str]:
    """Let the user pick any number of dependencies; unknown ids are rejected."""
    available = flatten_dependencies(schema)
    if not available:
        return set()

    chosen = prompter.multi_select("dependencies", list(available.values()))
    if chosen is None:
        return set()

    unknown = sorted(chosen - available.keys())
    if unknown:
        raise ValidationError(f"Unknown dependencies: {', '.join(unknown)}")
    return chosen
