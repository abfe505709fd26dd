"""
Tree Builder — liste plate de blocs → forêt ordonnée.

Chaque nœud porte ses enfants sous forme d'union taguée :
  OwnedChildren       → enfants déclarés dans la liste de la page
  TranscludedChildren → enfants empruntés à une smart section (voir smart_sections)

Garanties :
- chaque bloc d'entrée apparaît exactement une fois dans la forêt
- bloc orphelin (parent absent) → promu racine, jamais perdu
- cycle de parenté → cassé en promouvant le bloc où il est détecté
- tri stable par `order` à chaque niveau (égalités : ordre d'entrée)
- les blocs d'entrée ne sont jamais modifiés
"""
import logging
from enum import Enum
from typing import Annotated, Dict, Iterable, Iterator, List, Literal, Optional, Set, Union

from pydantic import BaseModel, Field

from .schemas import Block
from ..blocks.registry import can_have_children, get_block_definition, is_child_allowed

log = logging.getLogger(__name__)


# ── Nœuds ───────────────────────────────────────────────────────────────────

class ChildrenState(str, Enum):
    PENDING   = "pending"     # blocs de la section pas encore chargés
    EMPTY     = "empty"       # chargés, aucun bloc racine
    POPULATED = "populated"
    CYCLE     = "cycle"       # la section se référence elle-même, erreur signalée


class OwnedChildren(BaseModel):
    kind: Literal["owned"] = "owned"
    nodes: List["BlockNode"] = Field(default_factory=list)


class TranscludedChildren(BaseModel):
    kind: Literal["transcluded"] = "transcluded"
    section_id: Optional[str] = None
    state: ChildrenState = ChildrenState.PENDING
    nodes: List["BlockNode"] = Field(default_factory=list)
    error: Optional[str] = None


BlockChildren = Annotated[Union[OwnedChildren, TranscludedChildren], Field(discriminator="kind")]


class BlockNode(BaseModel):
    block: Block
    children: BlockChildren = Field(default_factory=OwnedChildren)

    @property
    def id(self) -> str:
        return self.block.id

    @property
    def child_nodes(self) -> List["BlockNode"]:
        return self.children.nodes


OwnedChildren.model_rebuild()
TranscludedChildren.model_rebuild()
BlockNode.model_rebuild()


# ── Construction ────────────────────────────────────────────────────────────

def _cycle_breakers(index: Dict[str, Block]) -> Set[str]:
    """Ids à promouvoir racine pour casser chaque cycle de parenté."""
    promoted: Set[str] = set()
    settled: Set[str] = set()  # chaînes déjà remontées jusqu'à une racine ou un bloc promu
    for block_id in index:
        seen: Set[str] = set()
        current: Optional[str] = block_id
        while current is not None and current in index and current not in settled:
            if current in seen:
                promoted.add(current)
                break
            seen.add(current)
            current = index[current].parent_block_id
        settled.update(seen)
    return promoted


def build_tree(blocks: Iterable[Block]) -> List[BlockNode]:
    """Construit la forêt (racines ordonnées, enfants triés récursivement)."""
    blocks = list(blocks)
    nodes: Dict[str, BlockNode] = {}
    for b in blocks:
        if b.id in nodes:
            log.warning("Bloc dupliqué ignoré : %s", b.id)
            continue
        nodes[b.id] = BlockNode(block=b)

    index = {bid: node.block for bid, node in nodes.items()}
    breakers = _cycle_breakers(index)
    for bid in breakers:
        log.warning("Cycle de parenté détecté, bloc %s promu racine", bid)

    roots: List[BlockNode] = []
    for bid, node in nodes.items():
        parent_id = node.block.parent_block_id
        if parent_id is None or bid in breakers:
            roots.append(node)
        elif parent_id not in nodes:
            log.warning("Bloc orphelin %s (parent %s absent), promu racine", bid, parent_id)
            roots.append(node)
        else:
            nodes[parent_id].children.nodes.append(node)

    _sort_level(roots)
    return roots


def _sort_level(level: List[BlockNode]) -> None:
    stack = [level]
    while stack:
        current = stack.pop()
        current.sort(key=lambda n: n.block.order)
        stack.extend(node.children.nodes for node in current)


def _walk(forest: Iterable[BlockNode]) -> Iterator[BlockNode]:
    """Pré-ordre sur pile explicite (profondeur non bornée)."""
    stack = [iter(forest)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        yield node
        stack.append(iter(node.children.nodes))


def flatten_tree(forest: Iterable[BlockNode]) -> List[Block]:
    """Parcours pré-ordre (parent avant enfants)."""
    return [node.block for node in _walk(forest)]


def find_node(forest: Iterable[BlockNode], block_id: str) -> Optional[BlockNode]:
    return next((node for node in _walk(forest) if node.id == block_id), None)


# ── Invariants ──────────────────────────────────────────────────────────────

class TreeIssue(BaseModel):
    code: Literal[
        "orphan", "cycle", "parent_cannot_have_children", "child_not_allowed",
        "instance_with_children", "duplicate_order", "unknown_type",
    ]
    block_id: str
    message: str


def collect_issues(blocks: Iterable[Block]) -> List[TreeIssue]:
    """Rapport des invariants violés (aucune exception levée)."""
    blocks = list(blocks)
    index = {b.id: b for b in blocks}
    issues: List[TreeIssue] = []

    for bid in sorted(_cycle_breakers(index)):
        issues.append(TreeIssue(code="cycle", block_id=bid, message=f"Block {bid} is its own ancestor"))

    seen_orders: Dict[tuple, str] = {}
    for b in blocks:
        if get_block_definition(b.type) is None:
            issues.append(TreeIssue(code="unknown_type", block_id=b.id, message=f"Unknown block type {b.type!r}"))

        key = (b.parent_block_id, b.order)
        if key in seen_orders:
            issues.append(TreeIssue(
                code="duplicate_order", block_id=b.id,
                message=f"Order {b.order} already used by {seen_orders[key]} under the same parent",
            ))
        else:
            seen_orders[key] = b.id

        if b.parent_block_id is None:
            continue
        parent = index.get(b.parent_block_id)
        if parent is None:
            issues.append(TreeIssue(code="orphan", block_id=b.id, message=f"Parent {b.parent_block_id} not found"))
        elif parent.smart_section_instance_id:
            issues.append(TreeIssue(
                code="instance_with_children", block_id=b.id,
                message=f"Parent {parent.id} is a smart section instance and cannot own children",
            ))
        elif not can_have_children(parent.type):
            issues.append(TreeIssue(
                code="parent_cannot_have_children", block_id=b.id,
                message=f"{parent.type} cannot have children",
            ))
        elif not is_child_allowed(b.type, parent.type):
            issues.append(TreeIssue(
                code="child_not_allowed", block_id=b.id,
                message=f"{b.type} is not allowed inside {parent.type}",
            ))
    return issues
