import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..models import AwsIdentity, AwsIdentityError


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])

# ANSI colors
RESET = "\033[0m"
BOLD = "\033[1m"
CYAN = "\033[36m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
GREY = "\033[90m"
RULE = GREY + "─────────────────────────────────────────────" + RESET


def get_current_aws_identity(
    profile: Optional[str] = None,
    region: Optional[str] = None,
) -> AwsIdentity:
    """
    Descobre a identidade AWS atual usando STS (Security Token Service),
    respeitando profile/region passados explicitamente (se houver).
    """
    session = boto3.session.Session(
        profile_name=profile,
        region_name=region,
    )
    sts = session.client("sts")

    try:
        resp = sts.get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        raise AwsIdentityError(f"Não foi possível obter a identidade AWS atual: {e}") from e

    logger.debug("Resolved AWS identity %s", resp["Arn"])

    return AwsIdentity(
        account=resp["Account"],
        arn=resp["Arn"],
        user_id=resp["UserId"],
        region=session.region_name,
        profile=session.profile_name,
    )


def requires_aws_identity(func: T) -> T:
    """
    Garante que existe uma identidade AWS válida antes de rodar o comando.
    Sem identidade o comando é abortado (exit 1) antes de qualquer chamada.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        # Typer injeta as opções como kwargs com o MESMO nome dos parâmetros
        profile = kwargs.get("profile")
        region = kwargs.get("region")
        show_identity = kwargs.get("show_identity")

        try:
            identity = get_current_aws_identity(profile=profile, region=region)
        except AwsIdentityError as exc:
            _print_identity_error(str(exc))
            sys.exit(1)

        if show_identity:
            _print_identity(identity)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _print_identity_error(error: str) -> None:
    print(file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"{RED}{BOLD}FAILED TO RESOLVE AWS IDENTITY{RESET}", file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"  {error}", file=sys.stderr)
    print(file=sys.stderr)
    print(f"{YELLOW}Verifique se:{RESET}", file=sys.stderr)
    print("  - O AWS_PROFILE está configurado corretamente", file=sys.stderr)
    print("  - O login SSO está ativo (ex.: `aws sso login`)", file=sys.stderr)
    print("  - A role tem permissão para `sts:GetCallerIdentity`", file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"{RED}{BOLD}ABORTING — nenhuma ação será executada.{RESET}", file=sys.stderr)
    print(file=sys.stderr)


def _print_identity(identity: AwsIdentity) -> None:
    print(file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"{CYAN}{BOLD}STAX — AWS Identity Context{RESET}", file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"{CYAN}{BOLD}ACCOUNT:{RESET} {identity.account}", file=sys.stderr)
    print(f"{CYAN}{BOLD}ARN:    {RESET} {identity.arn}", file=sys.stderr)
    print(f"{CYAN}{BOLD}PROFILE:{RESET} {identity.profile_label}", file=sys.stderr)
    print(f"{CYAN}{BOLD}REGION: {RESET} {identity.region_label}", file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"{GREEN}{BOLD}Identity OK — proceeding with command execution.{RESET}", file=sys.stderr)
    print(file=sys.stderr)
