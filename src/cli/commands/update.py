import json
from pathlib import Path
from typing import Optional

import typer
import typer_di
import yaml

from core.engine.identity_engine import requires_aws_identity
from core.engine.stackset_engine import update_stack_set
from core.models import ResourceModelError, UpdateRunResult

from ..params import output_params

from ._inputs import load_model_or_fail, load_vars
from .console import BLUE, BOLD, CYAN, GREEN, GREY, MAGENTA, RED, RESET, RULE, YELLOW


@requires_aws_identity
def update(
    model: Path = typer.Option(
        ...,
        "--model",
        "-m",
        help="Path to the StackSet resource model (YAML/JSON).",
    ),
    previous_model: Optional[Path] = typer.Option(
        None,
        "--previous-model",
        help="Resource model of the last successful apply (source of the previous template tags).",
    ),
    vars_json: Optional[str] = typer.Option(
        None,
        "--vars",
        help="Inline JSON with values for {{ placeholders }} in the models.",
    ),
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        help="AWS profile name (from ~/.aws/config).",
    ),
    region: Optional[str] = typer.Option(
        None,
        "--region",
        help="AWS region, e.g. sa-east-1.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Read the stack set and print the update request without submitting it.",
    ),
    show_identity: bool = typer.Option(
        False,
        "--show-identity",
        help="Mostra a identidade AWS atual antes de executar.",
    ),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Atualiza um StackSet a partir do resource model.

    Lê as tags ativas no StackSet, preserva as tags out-of-band e aplica as
    tags do template (o template ganha quando declara a mesma key).
    """
    ctx = load_vars(vars_json)
    resource_model = load_model_or_fail(model, ctx)
    previous_tags = load_model_or_fail(previous_model, ctx).tags if previous_model else None

    try:
        result = update_stack_set(
            resource_model,
            previous_tags,
            profile=profile,
            region=region,
            dry_run=dry_run,
        )
    except ResourceModelError as e:
        raise typer.BadParameter(str(e)) from e

    if output == "json":
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif output == "yaml":
        typer.echo(yaml.dump(result.to_dict(), allow_unicode=True, sort_keys=False))
    else:
        _print_update(result)


def _print_update(result: UpdateRunResult) -> None:
    """
    Mostra um diff entre:
    - active: tags hoje no StackSet
    - template: tags declaradas pelo resource model
    - final: tags enviadas no UpdateStackSet
    """
    active = result.active_tags
    template = result.template_tags
    final = result.tags_to_set

    all_keys = list(active) + list(template) + list(final)
    max_key_len = max((len(key) for key in all_keys), default=0)

    added_keys = set(final) - set(active)
    removed_keys = set(active) - set(final)
    out_of_band_keys = set(final) - set(template)
    changed_keys = {k for k in set(final) & set(active) if final[k] != active[k]}

    print()
    print(RULE)
    print(f"{CYAN}{BOLD}STACK SET:{RESET} {result.stack_set_id}")
    mode_label = "DRY RUN — no update submitted" if result.dry_run else f"UPDATE — operation {result.operation_id}"
    print(f"{YELLOW}{BOLD}MODE:     {mode_label}{RESET}")
    print(RULE)
    print()

    print(f"{CYAN}{BOLD}Active Tags (currently on stack set):{RESET}")
    if active:
        for key, value in sorted(active.items(), key=lambda item: item[0].lower()):
            print(f"  {key:<{max_key_len}} = {value}")
    else:
        print(GREY + "  (none)" + RESET)
    print()

    print(f"{CYAN}{BOLD}Tags To Set:{RESET}")
    if final or removed_keys:
        for key, value in sorted(final.items(), key=lambda item: item[0].lower()):
            if key in added_keys:
                status = f"{GREEN}[+]{RESET}"
            elif key in out_of_band_keys:
                status = f"{BLUE}[•]{RESET}"
            elif key in changed_keys:
                status = f"{MAGENTA}[!]{RESET}"
            else:
                status = f"{GREEN}[=]{RESET}"
            print(f"  {status} {key:<{max_key_len}} = {value}")
        for key in sorted(removed_keys, key=str.lower):
            print(f"  {RED}[-]{RESET} {key:<{max_key_len}} = {active[key]}")
    else:
        print(GREY + "  (no tags)" + RESET)

    print()
    print(GREY + "Legend:" + RESET)
    print(f"  {GREEN}[+]{RESET} added by the template")
    print(f"  {GREEN}[=]{RESET} unchanged")
    print(f"  {MAGENTA}[!]{RESET} value changed by the template")
    print(f"  {BLUE}[•]{RESET} out-of-band tag, preserved as-is")
    print(f"  {RED}[-]{RESET} removed from the template")
    print(RULE)
    print()
