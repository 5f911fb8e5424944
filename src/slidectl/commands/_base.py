"""Click base classes with an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints worked invocations and
exits.  Examples are dedented so they can be written as indented
triple-quoted strings next to the command.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` option when ``examples`` is given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class SlideCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=...``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class SlideGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=...``; subcommands default to SlideCommand."""

    command_class = SlideCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
