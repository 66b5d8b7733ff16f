"""
Auto-seed / "Reset Layers".

For each room block (top-level child with children) under the selected
container, the image placeholder layers are renamed in reading order and
reset to the placeholder fill:

  - Owners Suite:  Owners_1, Owners_2, Owners_Bath_1, Owners_Bath_2, Owners_WIC_1
  - Default:       <Token>_1, <Token>_2, ...
"""

import logging
from dataclasses import dataclass, field
from typing import List

from config import PLACEHOLDER_COLOR
from services.scene_graph import NodeKind, SceneNode, SolidPaint, is_image_layer
from services.title_deriver import derive_room_token, is_owners_suite_title

logger = logging.getLogger(__name__)

OWNERS_SUITE_PATTERN = (
    "Owners_1",
    "Owners_2",
    "Owners_Bath_1",
    "Owners_Bath_2",
    "Owners_WIC_1",
)

PLACEHOLDER_FILL = SolidPaint(color=PLACEHOLDER_COLOR)


@dataclass
class AutoSeedResult:
    renamed_layers: int = 0
    processed_blocks: int = 0
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "renamedLayers": self.renamed_layers,
            "processedBlocks": self.processed_blocks,
            "issues": list(self.issues),
        }


def owners_suite_layer_name(position: int) -> str:
    """Layer name for the 0-based *position* inside an Owners Suite block."""
    if position < len(OWNERS_SUITE_PATTERN):
        return OWNERS_SUITE_PATTERN[position]
    return f"Owners_{position + 1}"


def sort_reading_order(nodes: List[SceneNode]) -> List[SceneNode]:
    """Top-to-bottom, then left-to-right."""
    return sorted(nodes, key=lambda node: (node.y, node.x))


def _reset_placeholder(node: SceneNode, name: str) -> None:
    node.rename(name)
    node.set_fills([PLACEHOLDER_FILL])


def auto_seed_room_names(container: SceneNode) -> AutoSeedResult:
    result = AutoSeedResult()

    blocks = [node for node in container.children or () if node.supports_children]
    if not blocks:
        result.issues.append(
            "No room blocks found. Expected child groups/frames under the selected node."
        )
        return result

    for block in blocks:
        title_node = block.find_one(lambda node: node.kind == NodeKind.TEXT)
        if title_node is None:
            result.issues.append(f'Block "{block.name}": no text node found for room title.')
            continue

        title = (title_node.characters or "").strip()
        if not title:
            result.issues.append(f'Block "{block.name}": title text is empty.')
            continue

        image_nodes = block.find_all(is_image_layer)
        if not image_nodes:
            result.issues.append(f'Block "{block.name}": no image layers found to rename.')
            continue

        image_nodes = sort_reading_order(image_nodes)

        if is_owners_suite_title(title):
            for position, node in enumerate(image_nodes):
                _reset_placeholder(node, owners_suite_layer_name(position))
                result.renamed_layers += 1
            result.processed_blocks += 1
            logger.info(f'Block "{block.name}": seeded {len(image_nodes)} Owners Suite layers')
            continue

        token = derive_room_token(title)
        if not token:
            result.issues.append(
                f'Block "{block.name}": could not derive room token from "{title}".'
            )
            continue

        for index, node in enumerate(image_nodes, start=1):
            _reset_placeholder(node, f"{token}_{index}")
            result.renamed_layers += 1
        result.processed_blocks += 1
        logger.info(f'Block "{block.name}": seeded {len(image_nodes)} layers as {token}_N')

    return result
