"""
Uploaded image batch -> placeholder layers.

Each file is resolved to its target layer name, the layer is looked up
under the selected container and its fills are replaced with the image.
Every per-file problem becomes a diagnostic; the batch always completes.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from services.filename_resolver import parse_filename_to_target_layer
from services.room_keywords import names_match, strip_extension
from services.scene_graph import (
    ImagePaint,
    SceneHost,
    SceneNode,
    SelectionError,
    find_layer_by_name,
    get_selected_container,
)

logger = logging.getLogger(__name__)

NO_IMAGES_MESSAGE = "No images received from the UI."


@dataclass
class UploaderImage:
    name: str
    data: bytes


@dataclass
class UploadResult:
    total_images: int = 0
    updated_count: int = 0
    not_found_layers: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "updatedCount": self.updated_count,
            "totalImages": self.total_images,
            "notFoundLayers": list(self.not_found_layers),
        }


def _apply_image(host: SceneHost, container: SceneNode, image: UploaderImage,
                 result: UploadResult) -> None:
    name = image.name

    target_layer_name = parse_filename_to_target_layer(name)
    if not target_layer_name:
        result.not_found_layers.append(
            f"{name} → No room keyword found (expected something like Kitchen, Owners, "
            f"Bed2, Bath3, Game, CoveredPatio, Patio, etc.)."
        )
        return

    matching_node = find_layer_by_name(container, target_layer_name)
    if matching_node is None:
        result.not_found_layers.append(
            f'{name} → Could not find layer "{target_layer_name}" in the selected frame.'
        )
        return

    if not matching_node.supports_fills:
        result.not_found_layers.append(
            f'{name} → Layer "{matching_node.name}" cannot accept image fills.'
        )
        return

    if matching_node.locked:
        result.not_found_layers.append(f'{name} → Layer "{matching_node.name}" is locked.')
        return

    try:
        image_hash = host.create_image(image.data)
        matching_node.set_fills([ImagePaint(image_hash=image_hash, scale_mode="FILL")])

        # Layer takes the full filename (no extension)
        new_name = strip_extension(name)
        matching_node.rename(new_name)

        # Parent group/frame follows if it still carries the canonical target name
        parent = matching_node.parent
        if parent is not None and names_match(parent.name, target_layer_name):
            parent.rename(new_name)

        result.updated_count += 1
    except Exception as e:
        logger.warning(f"Failed to apply {name} to {matching_node.name}: {e}")
        result.not_found_layers.append(
            f'{name} → Failed to apply image to "{matching_node.name}". Error: {e}'
        )


def apply_uploaded_images(host: SceneHost, images: Sequence[UploaderImage]) -> UploadResult:
    result = UploadResult(total_images=len(images))

    if not images:
        result.not_found_layers.append(NO_IMAGES_MESSAGE)
        return result

    try:
        container = get_selected_container(host.selection)
    except SelectionError as e:
        result.not_found_layers.append(str(e))
        return result

    for image in images:
        _apply_image(host, container, image, result)

    return result
