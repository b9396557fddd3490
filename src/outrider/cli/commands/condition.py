from __future__ import annotations

from typing import NoReturn

import click

from outrider.cli.console import console
from outrider.cli.context import CLIContext, ExitCode
from outrider.cli.output import (
    OutputFormat,
    condition_tree,
    format_json,
    print_error,
)
from outrider.conditions import (
    ConditionError,
    ConditionNode,
    break_long_expression,
    build_event_aware_command_condition,
    parse_condition,
    strip_expression_wrapper,
)
from outrider.config import ExpressionFormatConfig
from outrider.logging import get_logger, log_context

logger = get_logger(__name__)


def _format_config(ctx: click.Context) -> ExpressionFormatConfig:
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    return cli_ctx.config.expressions


def _break(expression: str, settings: ExpressionFormatConfig) -> list[str]:
    return break_long_expression(
        expression,
        max_line_length=settings.max_line_length,
        break_threshold=settings.break_threshold,
        paren_break_threshold=settings.paren_break_threshold,
    )


def _emit(node: ConditionNode, fmt: str, settings: ExpressionFormatConfig) -> None:
    rendered = node.render()
    lines = _break(rendered, settings)
    if fmt == OutputFormat.JSON.value:
        click.echo(format_json({"condition": rendered, "lines": lines}))
    else:
        click.echo("\n".join(lines))


def _fail(error: ConditionError) -> NoReturn:
    logger.debug("condition_command_failed", error=type(error).__name__)
    print_error(error)
    raise SystemExit(ExitCode.FAILURE)


_format_option = click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)


@click.group()
def condition() -> None:
    """Parse, synthesize, and format workflow conditions."""
    pass


@condition.command("parse")
@click.argument("expression")
@click.option("--tree", "show_tree", is_flag=True, help="Show the parsed structure.")
@_format_option
@click.pass_context
def condition_parse(
    ctx: click.Context, expression: str, show_tree: bool, fmt: str
) -> None:
    """Parse a condition and print it re-rendered.

    A surrounding ${{ }} wrapper is removed first.

    Examples:
        outrider condition parse "a || b && c"
        outrider condition parse '${{ !cancelled() && x }}' --tree
    """
    with log_context(command="condition parse", expression=expression):
        try:
            node = parse_condition(strip_expression_wrapper(expression))
        except ConditionError as e:
            _fail(e)

        if show_tree:
            console.print(condition_tree(node))
            return
        _emit(node, fmt, _format_config(ctx))


@condition.command("command")
@click.argument("names", nargs=-1, required=True)
@click.option(
    "-e",
    "--event",
    "events",
    multiple=True,
    help="Comment event the command is active on (repeatable; default: all).",
)
@click.option(
    "--other-events",
    is_flag=True,
    default=False,
    help="The workflow has other triggers that must always run.",
)
@_format_option
@click.pass_context
def condition_command(
    ctx: click.Context,
    names: tuple[str, ...],
    events: tuple[str, ...],
    other_events: bool,
    fmt: str,
) -> None:
    """Build the condition for a command trigger.

    Examples:
        outrider condition command bot --event issues
        outrider condition command deploy ship --other-events
    """
    command_names = [name.removeprefix("/") for name in names]
    with log_context(command="condition command", commands=command_names):
        try:
            node = build_event_aware_command_condition(
                command_names, list(events) or None, other_events
            )
        except ConditionError as e:
            _fail(e)

        logger.debug("command_condition_built", events=list(events))
        _emit(node, fmt, _format_config(ctx))


@condition.command("format")
@click.argument("expression")
@click.pass_context
def condition_format(ctx: click.Context, expression: str) -> None:
    """Break a long condition into lines without changing it.

    Examples:
        outrider condition format "$(cat condition.txt)"
    """
    with log_context(command="condition format"):
        for line in _break(strip_expression_wrapper(expression), _format_config(ctx)):
            click.echo(line)
