"""
Scene graph capabilities consumed by the naming engine.

The design tool owns the live document; this module models the small part
of it the engine needs:

  - node kinds (tagged variants instead of probing for attributes)
  - descendant queries (find first / find all, depth-first pre-order)
  - mutations (rename, replace fills)
  - image resources (bytes -> opaque image hash)

``SnapshotHost`` implements these over the JSON snapshot the plugin posts
with every command. Mutations are recorded as ``SceneEdit`` entries that the
plugin replays on the live document.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Tuple, Union

from config import MAX_IMAGE_BYTES
from services.room_keywords import normalize_token

logger = logging.getLogger(__name__)


class SelectionError(Exception):
    """The current selection is not exactly one container node."""


class ImageResourceError(Exception):
    """The host could not turn raw bytes into an image resource."""


class NodeKind(str, Enum):
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    SECTION = "SECTION"
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    POLYGON = "POLYGON"
    STAR = "STAR"
    VECTOR = "VECTOR"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    LINE = "LINE"
    SLICE = "SLICE"
    OTHER = "OTHER"

    @classmethod
    def coerce(cls, value: Union[str, "NodeKind", None]) -> "NodeKind":
        if isinstance(value, NodeKind):
            return value
        try:
            return cls(str(value or "").upper())
        except ValueError:
            return cls.OTHER


# Shape kinds that can act as image placeholders
IMAGE_LAYER_KINDS = frozenset({
    NodeKind.RECTANGLE,
    NodeKind.ELLIPSE,
    NodeKind.POLYGON,
    NodeKind.STAR,
    NodeKind.VECTOR,
    NodeKind.BOOLEAN_OPERATION,
    NodeKind.LINE,
})

# Kinds that never carry a fill list
FILL_LESS_KINDS = frozenset({NodeKind.GROUP, NodeKind.SLICE})


# ---------- Paints ----------

@dataclass(frozen=True)
class SolidPaint:
    color: Tuple[float, float, float]

    def to_dict(self) -> dict:
        r, g, b = self.color
        return {"type": "SOLID", "color": {"r": r, "g": g, "b": b}}


@dataclass(frozen=True)
class ImagePaint:
    image_hash: str
    scale_mode: str = "FILL"

    def to_dict(self) -> dict:
        return {"type": "IMAGE", "imageHash": self.image_hash, "scaleMode": self.scale_mode}


Paint = Union[SolidPaint, ImagePaint]


@dataclass
class SceneEdit:
    """One mutation applied to a node, in application order."""

    node_id: str
    property: str
    value: Any

    def to_dict(self) -> dict:
        value = self.value
        if self.property == "fills":
            value = [paint.to_dict() for paint in value]
        return {"nodeId": self.node_id, "property": self.property, "value": value}


# ---------- Nodes ----------

@dataclass
class SceneNode:
    """A node of the host's scene graph."""

    id: str
    name: str
    kind: NodeKind
    x: float = 0.0
    y: float = 0.0
    locked: bool = False
    characters: Optional[str] = None
    has_fills: bool = True
    fills: List[Paint] = field(default_factory=list)
    children: Optional[List["SceneNode"]] = None
    parent: Optional["SceneNode"] = field(default=None, repr=False, compare=False)
    edit_log: Optional[List[SceneEdit]] = field(default=None, repr=False, compare=False)

    @property
    def supports_children(self) -> bool:
        return self.children is not None

    @property
    def supports_fills(self) -> bool:
        return self.has_fills

    def iter_descendants(self) -> Iterator["SceneNode"]:
        """Depth-first pre-order over descendants (self excluded)."""
        for child in self.children or ():
            yield child
            yield from child.iter_descendants()

    def find_one(self, predicate: Callable[["SceneNode"], bool]) -> Optional["SceneNode"]:
        return next((node for node in self.iter_descendants() if predicate(node)), None)

    def find_all(self, predicate: Callable[["SceneNode"], bool]) -> List["SceneNode"]:
        return [node for node in self.iter_descendants() if predicate(node)]

    def rename(self, name: str) -> None:
        self.name = name
        self._record("name", name)

    def set_fills(self, paints: List[Paint]) -> None:
        if not self.has_fills:
            raise ValueError(f'Node "{self.name}" does not support fills')
        self.fills = list(paints)
        self._record("fills", list(paints))

    def _record(self, prop: str, value: Any) -> None:
        if self.edit_log is not None:
            self.edit_log.append(SceneEdit(node_id=self.id, property=prop, value=value))


def is_image_layer(node: SceneNode) -> bool:
    return node.supports_fills and node.kind in IMAGE_LAYER_KINDS


def find_layer_by_name(container: SceneNode, target_name: str) -> Optional[SceneNode]:
    """First fillable descendant whose normalized name equals the target's."""
    target_norm = normalize_token(target_name)
    return container.find_one(
        lambda node: node.supports_fills and normalize_token(node.name) == target_norm
    )


def get_selected_container(selection: List[SceneNode]) -> SceneNode:
    """Return the single selected node that can hold children."""
    if len(selection) == 0:
        raise SelectionError(
            "No frame selected. Please select a single frame (or group/component) "
            "containing your room layout and try again."
        )

    if len(selection) > 1:
        raise SelectionError(
            "Multiple nodes selected. Please select a single frame (or group/component) "
            "containing your room layout and try again."
        )

    node = selection[0]
    if node.supports_children:
        return node

    raise SelectionError(
        "Selected node cannot contain layers. Please select a frame, group, component, "
        "or instance that contains the image layers."
    )


# ---------- Host ----------

class SceneHost(Protocol):
    """What a command needs from the design tool."""

    selection: List[SceneNode]
    edits: List[SceneEdit]

    def create_image(self, data: bytes) -> str:
        ...


def build_scene_node(
    payload: Dict[str, Any],
    edit_log: Optional[List[SceneEdit]] = None,
    parent: Optional[SceneNode] = None,
) -> SceneNode:
    """Build a node (and its subtree) from a snapshot dictionary."""
    kind = NodeKind.coerce(payload.get("type"))
    has_fills = payload.get("hasFills")
    if has_fills is None:
        has_fills = kind not in FILL_LESS_KINDS

    node = SceneNode(
        id=str(payload["id"]),
        name=payload.get("name") or "",
        kind=kind,
        x=float(payload.get("x") or 0.0),
        y=float(payload.get("y") or 0.0),
        locked=bool(payload.get("locked", False)),
        characters=payload.get("characters"),
        has_fills=bool(has_fills),
        parent=parent,
        edit_log=edit_log,
    )

    raw_children = payload.get("children")
    if raw_children is not None:
        node.children = [build_scene_node(child, edit_log, node) for child in raw_children]
    return node


class SnapshotHost:
    """In-memory host built from the selection snapshot sent by the plugin."""

    def __init__(self, selection: List[SceneNode], edits: List[SceneEdit],
                 max_image_bytes: int = MAX_IMAGE_BYTES):
        self.selection = selection
        self.edits = edits
        self.max_image_bytes = max_image_bytes

    @classmethod
    def from_dicts(cls, selection: List[Dict[str, Any]], **kwargs) -> "SnapshotHost":
        edits: List[SceneEdit] = []
        nodes = [build_scene_node(item, edits) for item in selection]
        return cls(nodes, edits, **kwargs)

    def create_image(self, data: bytes) -> str:
        """Return the image hash for *data* (SHA-1 of the bytes)."""
        if not data:
            raise ImageResourceError("Image data is empty")
        if len(data) > self.max_image_bytes:
            raise ImageResourceError(
                f"Image is {len(data)} bytes; the limit is {self.max_image_bytes} bytes"
            )
        image_hash = hashlib.sha1(data).hexdigest()
        logger.debug(f"Created image {image_hash} ({len(data)} bytes)")
        return image_hash
