"""
CLI utilities for command line reconstruction.
"""

from pathlib import Path

import click

PROGRAM_NAME = "model_convert_codegen"


def _format_value(param: click.Parameter, value) -> str:
    # Paths are shown by file name only so the header does not depend on the checkout location
    if isinstance(param.type, click.Path):
        return Path(str(value)).name
    return str(value)


def reconstruct_command_line(click_command: click.Command | None = None) -> str:
    """
    Reconstruct the command line of the current Click invocation.

    Args:
        click_command: Click command object for introspection, the command
            of the current context when None

    Returns:
        Reconstructed command line string, the bare program name outside of a CLI run
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return PROGRAM_NAME

    click_command = click_command or ctx.command
    cli_args = ctx.params

    arguments = []
    options = []
    for param in click_command.params:
        if param.name not in cli_args:
            continue

        value = cli_args[param.name]
        if value is None or value is False or value == ():
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(param, value))

        elif isinstance(param, click.Option):
            # Defaults and logging flags are left out
            if value == param.default or param.name == "verbose":
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, _format_value(param, value)])

    return " ".join([PROGRAM_NAME, *arguments, *options])
