import dataclasses
import logging
from typing import Any, Optional

from boto3.session import Session

from ..models import ResourceModel, ResourceModelError, TagSet, UpdateRunResult
from ..translator.request_translator import describe_stack_set_request, update_stack_set_request


logger = logging.getLogger(__name__)


def get_active_tags(client: Any, stack_set_id: str, call_as: Optional[str] = None) -> TagSet:
    """
    Lê as tags que estão hoje no StackSet via DescribeStackSet.
    Inclui as tags colocadas por fora do template (console, outras ferramentas).
    """
    resp = client.describe_stack_set(**describe_stack_set_request(stack_set_id, call_as))
    return TagSet.from_aws(resp.get("StackSet", {}).get("Tags"))


def update_stack_set(
    model: ResourceModel,
    previous_tags: Any = None,
    *,
    profile: str | None = None,
    region: str | None = None,
    dry_run: bool = False,
) -> UpdateRunResult:
    """
    Fluxo de update do StackSet:
    1) lê as tags ativas no StackSet
    2) reconcilia com as tags do template anterior e do atual
    3) monta o UpdateStackSet e envia (a não ser em dry-run)

    previous_tags é o que o template declarou no último apply; None == nenhum
    (todas as tags ativas viram out-of-band e são preservadas).
    """
    stack_set_id = model.identifier
    if not stack_set_id:
        raise ResourceModelError("Resource model sem StackSetId/StackSetName; não dá para fazer update.")

    if model.stack_set_id != stack_set_id:
        model = dataclasses.replace(model, stack_set_id=stack_set_id)

    session = Session(profile_name=profile, region_name=region)
    client = session.client("cloudformation")

    active = get_active_tags(client, stack_set_id, model.call_as)
    previous = TagSet.from_any(previous_tags)

    request = update_stack_set_request(model, previous, model.tags, active)
    tags_to_set = TagSet.from_aws(request["Tags"])

    logger.info(
        "Update of stack set %s: %d active tags, %d final tags (dry_run=%s)",
        stack_set_id,
        len(active),
        len(tags_to_set),
        dry_run,
    )

    operation_id: Optional[str] = None
    if not dry_run:
        resp = client.update_stack_set(**request)
        operation_id = resp.get("OperationId")
        logger.info("UpdateStackSet submitted for %s, operation %s", stack_set_id, operation_id)

    return UpdateRunResult(
        stack_set_id=stack_set_id,
        active_tags=active.to_dict(),
        previous_tags=previous.to_dict(),
        template_tags=model.tags.to_dict(),
        tags_to_set=tags_to_set.to_dict(),
        request=request,
        dry_run=dry_run,
        operation_id=operation_id,
    )
