"""
Plugin command routes.

The plugin UI sends its current selection snapshot with every command and
replays the returned edits on the live document. Commands are available as
REST endpoints and over a WebSocket that mirrors the plugin's message
protocol (``{"type": "upload-images", ...}`` -> ``{"type": "upload-complete", ...}``).
"""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from schemas import (
    AutoSeedCompleteResponse,
    AutoSeedRequest,
    DeriveTokensRequest,
    DeriveTokensResponse,
    DerivedToken,
    ErrorMessage,
    ResolvedFilename,
    ResolveFilenamesRequest,
    ResolveFilenamesResponse,
    UploadCompleteResponse,
    UploadImagesRequest,
)
from services.filename_resolver import parse_filename_to_target_layer
from services.image_upload import UploaderImage
from services.plugin_commands import (
    AUTO_SEED_ROOM_NAMES,
    UPLOAD_IMAGES,
    handle_auto_seed,
    handle_upload_images,
)
from services.scene_graph import SnapshotHost
from services.title_deriver import derive_room_token, is_owners_suite_title

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plugin", tags=["plugin"])


def _host_for(req) -> SnapshotHost:
    return SnapshotHost.from_dicts([node.model_dump() for node in req.selection])


def _run_upload(req: UploadImagesRequest) -> dict:
    images = [UploaderImage(name=image.name, data=image.data) for image in req.images]
    return handle_upload_images(_host_for(req), images)


def _run_auto_seed(req: AutoSeedRequest) -> dict:
    return handle_auto_seed(_host_for(req))


# message type -> (request schema, runner)
COMMANDS = {
    UPLOAD_IMAGES: (UploadImagesRequest, _run_upload),
    AUTO_SEED_ROOM_NAMES: (AutoSeedRequest, _run_auto_seed),
}


def dispatch_message(message: dict) -> dict:
    """Validate one plugin message and run its command."""
    msg_type = message.get("type")
    if msg_type not in COMMANDS:
        return ErrorMessage(message=f"Unknown message type: {msg_type!r}").model_dump()

    schema, runner = COMMANDS[msg_type]
    try:
        req = schema.model_validate(message)
    except ValidationError as e:
        return ErrorMessage(message=f"Invalid {msg_type} payload: {e}").model_dump()
    return runner(req)


# ---------- REST Endpoints ----------

@router.post("/upload-images", response_model=UploadCompleteResponse)
async def upload_images(req: UploadImagesRequest):
    """Apply an uploaded image batch to the placeholder layers of the selection."""
    return _run_upload(req)


@router.post("/auto-seed-room-names", response_model=AutoSeedCompleteResponse)
async def auto_seed_room_names(req: AutoSeedRequest):
    """Rename every room block's image layers to canonical placeholder names."""
    return _run_auto_seed(req)


@router.post("/resolve-filenames", response_model=ResolveFilenamesResponse)
async def resolve_filenames(req: ResolveFilenamesRequest):
    """Preview which layer each filename would fill."""
    return ResolveFilenamesResponse(targets=[
        ResolvedFilename(filename=name, target=parse_filename_to_target_layer(name))
        for name in req.filenames
    ])


@router.post("/derive-tokens", response_model=DeriveTokensResponse)
async def derive_tokens(req: DeriveTokensRequest):
    """Preview the layer token each room title would produce."""
    return DeriveTokensResponse(tokens=[
        DerivedToken(
            title=title,
            token=derive_room_token(title),
            ownersSuite=is_owners_suite_title(title),
        )
        for title in req.titles
    ])


# ---------- WebSocket ----------

@router.websocket("/ws")
async def plugin_websocket(websocket: WebSocket):
    """One JSON message in, one completion (or error) message out."""
    await websocket.accept()

    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000))

            data = frame.get("text")
            if data is None:
                await websocket.send_text(
                    ErrorMessage(
                        message="Binary frames are not supported; send JSON text"
                    ).model_dump_json()
                )
                continue

            try:
                message = json.loads(data)
            except json.JSONDecodeError as e:
                await websocket.send_text(
                    ErrorMessage(message=f"Malformed JSON: {e}").model_dump_json()
                )
                continue

            if not isinstance(message, dict):
                await websocket.send_text(
                    ErrorMessage(message="Message must be a JSON object").model_dump_json()
                )
                continue

            reply = dispatch_message(message)
            await websocket.send_text(json.dumps(reply))

    except WebSocketDisconnect:
        logger.debug("Plugin WebSocket disconnected")
