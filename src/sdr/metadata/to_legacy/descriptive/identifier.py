from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import WriterContext, sub

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue


def write_identifier(
    context: WriterContext, parent: _Element, node: DescriptiveValue
) -> None:
    sub(
        parent,
        "identifier",
        node.value,
        type=(
            context.vocabularies.mods_identifier_type(node.type) if node.type else None
        ),
        displayLabel=node.display_label,
        invalid="yes" if node.status == "invalid" else None,
    )
