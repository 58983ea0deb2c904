import logging

import typer

from gostub.common import bus, needle
from gostub.needle import L
from .rendering import CliRenderer

from .commands.generate import generate_command

app = typer.Typer(
    name="gostub",
    help=needle.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root for output: it picks the renderer.
    bus.set_renderer(CliRenderer(verbose=verbose))
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


app.command(name="generate", help=needle.get(L.cli.command.generate.help))(
    generate_command
)


if __name__ == "__main__":
    app()
