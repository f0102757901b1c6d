import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import typer_di
import yaml

from core.engine.request_engine import OPERATIONS, render_requests

from ..params import output_params

from ._inputs import load_model_or_fail, load_vars
from .console import BOLD, CYAN, GREY, RESET, RULE


def request(
    operation: str = typer.Argument(
        ...,
        help=f"Operação do CloudFormation ({', '.join(sorted(OPERATIONS))}).",
    ),
    model: Path = typer.Option(
        ...,
        "--model",
        "-m",
        help="Path to the StackSet resource model (YAML/JSON).",
    ),
    vars_json: Optional[str] = typer.Option(
        None,
        "--vars",
        help="Inline JSON with values for {{ placeholders }} in the model.",
    ),
    next_token: Optional[str] = typer.Option(None, "--next-token", help="Pagination token for list operations."),
    operation_id: Optional[str] = typer.Option(None, "--operation-id", help="Stack set operation id."),
    account: Optional[str] = typer.Option(None, "--account", help="Stack instance account (describe-stack-instance)."),
    stack_region: Optional[str] = typer.Option(
        None,
        "--stack-region",
        help="Stack instance region (describe-stack-instance).",
    ),
    request_token: Optional[str] = typer.Option(
        None,
        "--request-token",
        help="ClientRequestToken for create-stack-set.",
    ),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Monta os requests de uma operação de StackSet a partir do resource model,
    sem chamar a AWS. O resultado é o kwargs do boto3 para a operação.

    Ex:
    stax request create-stack-set --model stackset.yaml
    stax request list-stack-instances --model stackset.yaml --next-token abc
    """
    resource_model = load_model_or_fail(model, load_vars(vars_json))

    try:
        requests = render_requests(
            operation,
            resource_model,
            next_token=next_token,
            operation_id=operation_id,
            account=account,
            stack_region=stack_region,
            request_token=request_token,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    if output == "json":
        typer.echo(json.dumps(requests, indent=2, ensure_ascii=False))
    elif output == "yaml":
        typer.echo(yaml.dump(requests, allow_unicode=True, sort_keys=False))
    else:
        _print_requests(operation, requests)


def _print_requests(operation: str, requests: List[Dict[str, Any]]) -> None:
    print()
    print(RULE)
    print(f"{CYAN}{BOLD}OPERATION:{RESET} {operation}")
    print(RULE)

    if not requests:
        print(GREY + "  (no requests: StackInstancesGroup vazio)" + RESET)

    for i, req in enumerate(requests, start=1):
        print(f"{CYAN}{BOLD}Request {i}/{len(requests)}:{RESET}")
        for line in yaml.dump(req, allow_unicode=True, sort_keys=False).splitlines():
            print(f"  {line}")
        print()

    print(RULE)
    print()
