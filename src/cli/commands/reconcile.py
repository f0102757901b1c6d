import json
from pathlib import Path
from typing import Dict, Optional

import typer
import typer_di
import yaml

from core.model_loader import load_tags
from core.models import ResourceModelError, TagSet
from core.reconcile import reconcile_tags

from ..params import output_params

from .console import BLUE, BOLD, CYAN, GREEN, GREY, MAGENTA, RED, RESET, RULE


def _load_tags_or_fail(path: Optional[Path]) -> TagSet:
    if path is None:
        return TagSet()
    try:
        return load_tags(path)
    except ResourceModelError as e:
        raise typer.BadParameter(str(e)) from e


def reconcile(
    active: Path = typer.Option(
        ...,
        "--active",
        help="Tags currently on the stack set (YAML/JSON: mapping or Key/Value list).",
    ),
    new: Path = typer.Option(
        ...,
        "--new",
        help="Tags the template declares now.",
    ),
    previous: Optional[Path] = typer.Option(
        None,
        "--previous",
        help="Tags the template declared on the last apply. Omitido == nenhuma.",
    ),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Calcula as tags de um update de StackSet, sem chamar a AWS.

    Tags out-of-band (no recurso, mas fora do último template) são preservadas,
    a não ser que o template novo declare a mesma key.
    """
    active_tags = _load_tags_or_fail(active)
    previous_tags = _load_tags_or_fail(previous)
    new_tags = _load_tags_or_fail(new)

    final = reconcile_tags(active_tags, previous_tags, new_tags)

    if output == "json":
        typer.echo(json.dumps(final.to_dict(), indent=2, ensure_ascii=False))
        return
    elif output == "yaml":
        typer.echo(yaml.dump(final.to_dict(), allow_unicode=True))
        return

    _print_reconcile(active_tags.to_dict(), previous_tags.to_dict(), new_tags.to_dict(), final.to_dict())


def _print_reconcile(
    active: Dict[str, str],
    previous: Dict[str, str],
    template: Dict[str, str],
    final: Dict[str, str],
) -> None:
    """
    Mostra o resultado com a origem de cada tag:
    [=] declarada pelo template
    [!] declarada pelo template, sobrescrevendo um valor out-of-band
    [•] out-of-band, preservada
    [-] ativa hoje e removida pelo template
    """
    all_keys = set(active) | set(template) | set(final)
    max_key_len = max((len(k) for k in all_keys), default=0)

    removed = {k: v for k, v in active.items() if k not in final}

    print()
    print(RULE)
    print(f"{CYAN}{BOLD}Reconciled Tags:{RESET}")
    print(RULE)

    if not final and not removed:
        print(GREY + "  (no tags)" + RESET)

    for key, value in sorted(final.items(), key=lambda item: item[0].lower()):
        if key not in template:
            status = f"{BLUE}[•]{RESET}"
        elif key in active and active[key] != value and previous.get(key) != active[key]:
            status = f"{MAGENTA}[!]{RESET}"
        else:
            status = f"{GREEN}[=]{RESET}"
        print(f"  {status} {key:<{max_key_len}} = {value}")

    for key, value in sorted(removed.items(), key=lambda item: item[0].lower()):
        print(f"  {RED}[-]{RESET} {key:<{max_key_len}} = {value}")

    print()
    print(GREY + "Legend:" + RESET)
    print(f"  {GREEN}[=]{RESET} declared by the template")
    print(f"  {MAGENTA}[!]{RESET} declared by the template, overrides an out-of-band value")
    print(f"  {BLUE}[•]{RESET} out-of-band tag, preserved as-is")
    print(f"  {RED}[-]{RESET} removed (was declared by the previous template)")
    print(RULE)
    print()
