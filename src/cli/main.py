import logging

import typer
from typer_di import TyperDI

from cli.commands import reconcile, request, update
from cli.version import version_callback


logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# botocore é muito verboso em DEBUG
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)


app = TyperDI(help="Translate CloudFormation StackSet models into API requests and reconcile their tags.")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log de debug do stax no stderr.",
    ),
) -> None:
    if verbose:
        logging.getLogger("core").setLevel(logging.DEBUG)


app.command()(reconcile)
app.command()(request)
app.command()(update)


if __name__ == "__main__":
    app()
