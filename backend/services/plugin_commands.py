"""
Plugin command handlers.

Each inbound plugin message is handled to completion against a scene host
and answered with exactly one completion message. Handlers never raise;
every problem ends up in the message's diagnostic list.
"""

import logging
from typing import Sequence

from services.auto_seed import AutoSeedResult, auto_seed_room_names
from services.image_upload import UploaderImage, apply_uploaded_images
from services.scene_graph import SceneHost, SelectionError, get_selected_container

logger = logging.getLogger(__name__)

UPLOAD_IMAGES = "upload-images"
UPLOAD_COMPLETE = "upload-complete"
AUTO_SEED_ROOM_NAMES = "auto-seed-room-names"
AUTO_SEED_COMPLETE = "auto-seed-complete"


def handle_upload_images(host: SceneHost, images: Sequence[UploaderImage]) -> dict:
    result = apply_uploaded_images(host, images)
    logger.info(
        f"Upload: {result.updated_count}/{result.total_images} images applied, "
        f"{len(result.not_found_layers)} issues"
    )
    return {
        "type": UPLOAD_COMPLETE,
        **result.to_dict(),
        "edits": [edit.to_dict() for edit in host.edits],
    }


def handle_auto_seed(host: SceneHost) -> dict:
    try:
        container = get_selected_container(host.selection)
    except SelectionError as e:
        result = AutoSeedResult(issues=[str(e)])
    else:
        result = auto_seed_room_names(container)

    logger.info(
        f"Auto-seed: {result.renamed_layers} layers in {result.processed_blocks} blocks, "
        f"{len(result.issues)} issues"
    )
    return {
        "type": AUTO_SEED_COMPLETE,
        **result.to_dict(),
        "edits": [edit.to_dict() for edit in host.edits],
    }
