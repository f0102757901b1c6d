import logging
from typing import Dict, Set

from .models import Tag, TagSet


logger = logging.getLogger(__name__)


def reconcile_tags(active: TagSet, previous_template: TagSet, new_template: TagSet) -> TagSet:
    """
    Calcula as tags a enviar num update de StackSet.

    - active: tags hoje no recurso (inclui as colocadas por fora do template)
    - previous_template: tags que o template declarou no último apply
    - new_template: tags que o template declara agora

    O template é dono das keys que declara; tags out-of-band (que estão no
    recurso mas não vieram do último apply) sobrevivem, a não ser que o
    template agora declare a mesma key. Tag que estava no template anterior e
    saiu do novo é removida.
    """
    previous: Set[Tag] = previous_template.as_set()
    out_of_band = {t for t in active.as_set() if t not in previous}

    # uma tag por key; percorre em ordem (key, value) e a última vence
    out_of_band_by_key: Dict[str, Tag] = {}
    for tag in sorted(out_of_band, key=lambda t: (t.key, t.value)):
        out_of_band_by_key[tag.key] = tag

    template_keys = new_template.keys()
    tags_to_set: Set[Tag] = new_template.as_set()
    for key, tag in out_of_band_by_key.items():
        if key not in template_keys:
            tags_to_set.add(tag)

    logger.debug(
        "Reconciled tags: %d active, %d out-of-band, %d from template, %d final",
        len(active),
        len(out_of_band_by_key),
        len(new_template),
        len(tags_to_set),
    )

    return TagSet(sorted(tags_to_set, key=lambda t: (t.key, t.value)))
