"""Pydantic schemas for plugin request/response validation."""

import base64
import binascii
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ---------- Scene snapshot ----------
class SceneNodeIn(BaseModel):
    """One node of the selection snapshot sent by the plugin."""
    id: str
    name: str = ""
    type: str = Field("OTHER", description="Node type, e.g. FRAME, TEXT, RECTANGLE")
    x: float = 0.0
    y: float = 0.0
    locked: bool = False
    characters: Optional[str] = None
    hasFills: Optional[bool] = None
    children: Optional[List["SceneNodeIn"]] = Field(
        None, description="null when the node cannot hold children"
    )


SceneNodeIn.model_rebuild()


class SceneEditOut(BaseModel):
    nodeId: str
    property: Literal["name", "fills"]
    value: Any


# ---------- Upload ----------
class UploaderImageIn(BaseModel):
    name: str
    data: bytes = Field(..., description="Base64 string or list of byte values")

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, value):
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        try:
            if isinstance(value, list):
                return bytes(value)
            if isinstance(value, dict):
                # JSON.stringify(Uint8Array) -> {"0": 137, "1": 80, ...}
                return bytes(value[k] for k in sorted(value, key=int))
        except (TypeError, ValueError) as e:
            raise ValueError(f"data must hold byte values 0-255: {e}")
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise ValueError(f"data is not valid base64: {e}")
        raise ValueError("data must be a base64 string or a list of byte values")


class UploadImagesRequest(BaseModel):
    type: Literal["upload-images"] = "upload-images"
    images: List[UploaderImageIn] = []
    selection: List[SceneNodeIn] = []


class UploadCompleteResponse(BaseModel):
    type: Literal["upload-complete"] = "upload-complete"
    updatedCount: int
    totalImages: int
    notFoundLayers: List[str] = []
    edits: List[SceneEditOut] = []


# ---------- Auto-seed ----------
class AutoSeedRequest(BaseModel):
    type: Literal["auto-seed-room-names"] = "auto-seed-room-names"
    selection: List[SceneNodeIn] = []


class AutoSeedCompleteResponse(BaseModel):
    type: Literal["auto-seed-complete"] = "auto-seed-complete"
    renamedLayers: int
    processedBlocks: int
    issues: List[str] = []
    edits: List[SceneEditOut] = []


# ---------- Previews ----------
class ResolveFilenamesRequest(BaseModel):
    filenames: List[str]


class ResolvedFilename(BaseModel):
    filename: str
    target: Optional[str] = None


class ResolveFilenamesResponse(BaseModel):
    targets: List[ResolvedFilename] = []


class DeriveTokensRequest(BaseModel):
    titles: List[str]


class DerivedToken(BaseModel):
    title: str
    token: Optional[str] = None
    ownersSuite: bool = False


class DeriveTokensResponse(BaseModel):
    tokens: List[DerivedToken] = []


class ErrorMessage(BaseModel):
    type: Literal["error"] = "error"
    message: str
