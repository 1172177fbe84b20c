import sys

import click

from base_classes import UIAbort, UIError
from config_manager import ConfigManager
from ui import ChoiceOpts, Table, TextOpts, build_ui
from utils.logging_utils import LoggingHandler


@click.group()
@click.option('-c', '--conf', default=None, help='Path to a custom configuration file')
@click.option('--non-interactive/--interactive', 'non_interactive', default=None,
              help='Answer prompts from their defaults instead of asking (default: [UI].non_interactive)')
@click.pass_context
def cli(ctx, conf, non_interactive):
    """
    Console prompts and output for shell scripts
    """
    ctx.ensure_object(dict)

    try:
        config_manager = ConfigManager(conf)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))

    overrides = {}
    if non_interactive is not None:
        overrides['non_interactive'] = non_interactive
    config = config_manager.create_session_config(overrides)

    logger = LoggingHandler(config, mirror=sys.stderr)
    logger.settings({'non_interactive': config.get_option('UI', 'non_interactive', fallback=False),
                     'conf': conf})

    ctx.obj['CONFIG'] = config
    ctx.obj['LOGGER'] = logger
    ctx.obj['UI'] = build_ui(config, logger)


@cli.command()
@click.argument('label')
@click.option('-d', '--default', default='', help='Value used when nothing is entered')
@click.pass_context
def text(ctx, label, default):
    """
    Ask for a line of text and print it
    """
    ui = ctx.obj['UI']
    try:
        value = ui.ask_for_text(TextOpts(label=label, default=default))
    except UIError as e:
        raise click.ClickException(str(e))
    ui.print_linef('%s', value)
    ui.flush()


@cli.command()
@click.argument('label')
@click.argument('choices', nargs=-1, required=True)
@click.option('-d', '--default', type=int, default=0, help='Index of the preselected choice')
@click.pass_context
def choice(ctx, label, choices, default):
    """
    Ask to pick one of CHOICES and print the chosen index
    """
    ui = ctx.obj['UI']
    try:
        index = ui.ask_for_choice(ChoiceOpts(label=label, default=default, choices=list(choices)))
    except UIError as e:
        raise click.ClickException(str(e))
    ui.print_linef('%d', index)
    ui.flush()


@cli.command()
@click.argument('label')
@click.pass_context
def password(ctx, label):
    """
    Ask for a secret without echoing it, then print it to stdout

    The secret is written in clear text so scripts can capture it, e.g.
    token=$(console-ui password Token). Do not run it where stdout is shown or logged.
    """
    ui = ctx.obj['UI']
    try:
        secret = ui.ask_for_password(label)
    except (UIError, UIAbort) as e:
        raise click.ClickException(str(e))
    ui.print_linef('%s', secret)
    ui.flush()


@cli.command()
@click.pass_context
def confirm(ctx):
    """
    Ask to continue; exit non-zero unless confirmed
    """
    ui = ctx.obj['UI']
    try:
        ui.ask_for_confirmation()
    except UIError as e:
        raise click.ClickException(str(e))
    ui.flush()


@cli.command()
@click.option('-t', '--title', default=None, help='Table title')
@click.option('-h', '--header', 'headers', multiple=True, help='Column header (repeatable)')
@click.option('-r', '--row', 'rows', multiple=True, help='Comma-separated row cells (repeatable)')
@click.pass_context
def table(ctx, title, headers, rows):
    """
    Print a table built from --header and --row values
    """
    ui = ctx.obj['UI']
    t = Table(title=title, headers=list(headers))
    for row in rows:
        t.add_row(*[cell.strip() for cell in row.split(',')])
    ui.print_table(t)
    ui.flush()


if __name__ == '__main__':
    cli()
