from pathlib import Path
from typing import Optional

import typer

from gostub.cli.factories import make_runner
from gostub.common import bus, needle
from gostub.config import load_config_from_path
from gostub.needle import L
from gostub.spec import GostubError, RenderFailureError


def generate_command(
    receiver: str = typer.Argument(..., help=needle.get(L.cli.argument.receiver.help)),
    interface: str = typer.Argument(
        ..., help=needle.get(L.cli.argument.interface.help)
    ),
    output: Optional[str] = typer.Argument(
        None, help=needle.get(L.cli.argument.output.help)
    ),
    package: Optional[str] = typer.Option(
        None, "--package", "-p", help=needle.get(L.cli.option.package.help)
    ),
):
    try:
        config = load_config_from_path(Path.cwd())
        runner = make_runner(config)
        result = runner.run(receiver, interface, output=output, package=package)
    except RenderFailureError as e:
        bus.error(e.pointer, **e.params)
        bus.error(L.generate.render.buffer, source=e.source)
        raise typer.Exit(code=1)
    except GostubError as e:
        bus.error(e.pointer, **e.params)
        raise typer.Exit(code=1)

    if result.output_path is None:
        typer.echo(result.source, nl=False)
