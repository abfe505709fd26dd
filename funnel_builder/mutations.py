"""
Mutations — opérations d'édition sur la liste plate des blocs d'une page
(ou d'une smart section).

Fonctions pures : la liste reçue n'est jamais modifiée, chaque opération
renvoie une nouvelle liste. Une édition invalide lève une MutationError :
c'est ici (et non au rendu) que les invariants de l'arbre sont imposés.
"""
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from .blocks.registry import can_have_children, get_block_definition, is_child_allowed
from .core.errors import (
    BlockCycleError,
    BlockNotFoundError,
    InvalidParentError,
    MutationError,
    NestedSmartSectionError,
)
from .core.schemas import Block, BlockEvent, Breakpoint, DeviceType, SmartSection, SmartSectionInstance

log = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_id() -> str:
    return str(uuid.uuid4())


# ── Helpers ─────────────────────────────────────────────────────────────────

def _get(blocks: Sequence[Block], block_id: str) -> Block:
    for b in blocks:
        if b.id == block_id:
            return b
    raise BlockNotFoundError(block_id)


def _replace(blocks: Sequence[Block], updated: Block) -> List[Block]:
    return [updated if b.id == updated.id else b for b in blocks]


def descendant_ids(blocks: Sequence[Block], block_id: str) -> Set[str]:
    """Ids de tous les descendants (hors bloc lui-même)."""
    children: Dict[Optional[str], List[str]] = {}
    for b in blocks:
        children.setdefault(b.parent_block_id, []).append(b.id)

    out: Set[str] = set()
    stack = list(children.get(block_id, []))
    while stack:
        current = stack.pop()
        if current in out:
            continue
        out.add(current)
        stack.extend(children.get(current, []))
    return out


def next_order(blocks: Sequence[Block], parent_block_id: Optional[str]) -> int:
    """Ordre suivant le plus grand frère (0 pour un parent vide)."""
    orders = [b.order for b in blocks if b.parent_block_id == parent_block_id]
    return max(orders) + 1 if orders else 0


def _check_parent(blocks: Sequence[Block], parent_block_id: Optional[str], child_type: str) -> None:
    if parent_block_id is None:
        return
    parent = _get(blocks, parent_block_id)
    if parent.smart_section_instance_id:
        raise InvalidParentError(f"Block {parent.id} is a smart section instance and cannot own children")
    if not can_have_children(parent.type):
        raise InvalidParentError(f"{parent.type} cannot have children")
    if not is_child_allowed(child_type, parent.type):
        raise InvalidParentError(f"{child_type} is not allowed inside {parent.type}")


# ── Création / mise à jour ──────────────────────────────────────────────────

def create_block(
    blocks: Sequence[Block],
    block_type: str,
    parent_block_id: Optional[str] = None,
    props: Optional[Dict[str, Any]] = None,
    styles: Optional[Dict[str, Any]] = None,
    order: Optional[int] = None,
    block_id: Optional[str] = None,
) -> Tuple[List[Block], Block]:
    """
    Ajoute un bloc. Props et styles par défaut du registry, surchargés par
    ceux fournis ; sans `order`, le bloc est placé après le dernier frère.
    """
    definition = get_block_definition(block_type)
    if definition is None:
        raise MutationError(f"Unknown block type: {block_type!r}")
    _check_parent(blocks, parent_block_id, definition.type)

    block = Block(
        id=block_id or new_id(),
        type=definition.type,
        parent_block_id=parent_block_id,
        order=next_order(blocks, parent_block_id) if order is None else order,
        props={**definition.default_props(), **(props or {})},
        styles={**definition.default_styles, **(styles or {})},
    )
    if any(b.id == block.id for b in blocks):
        raise MutationError(f"Block id already used: {block.id!r}")

    log.debug("Bloc créé : %s (%s) sous %s", block.id, block.type, parent_block_id)
    return [*blocks, block], block


def update_block(
    blocks: Sequence[Block],
    block_id: str,
    props: Optional[Dict[str, Any]] = None,
    styles: Optional[Dict[str, Any]] = None,
    visible: Optional[bool] = None,
    locked: Optional[bool] = None,
    tracking_event: Optional[BlockEvent] = None,
) -> Tuple[List[Block], Block]:
    """Remplace les champs fournis ; les autres restent inchangés."""
    block = _get(blocks, block_id)
    changes: Dict[str, Any] = {}
    if props is not None:
        changes["props"] = dict(props)
    if styles is not None:
        changes["styles"] = dict(styles)
    if visible is not None:
        changes["visible"] = visible
    if locked is not None:
        changes["locked"] = locked
    if tracking_event is not None:
        changes["tracking_event"] = tracking_event

    updated = block.model_copy(update=changes, deep=True)
    return _replace(blocks, updated), updated


# ── Déplacement / suppression ───────────────────────────────────────────────

def move_block(
    blocks: Sequence[Block],
    block_id: str,
    new_parent_block_id: Optional[str],
    new_order: int,
) -> Tuple[List[Block], Block]:
    """Change de parent et/ou de position. Refuse tout déplacement créant un cycle."""
    block = _get(blocks, block_id)
    if new_parent_block_id is not None:
        if new_parent_block_id == block_id or new_parent_block_id in descendant_ids(blocks, block_id):
            raise BlockCycleError(f"Cannot move {block_id} inside itself or one of its descendants")
    _check_parent(blocks, new_parent_block_id, block.type)

    moved = block.model_copy(update={"parent_block_id": new_parent_block_id, "order": new_order})
    return _replace(blocks, moved), moved


def delete_block(blocks: Sequence[Block], block_id: str) -> Tuple[List[Block], List[str]]:
    """Supprime le bloc et tous ses descendants ; renvoie aussi les ids retirés."""
    _get(blocks, block_id)
    removed = {block_id} | descendant_ids(blocks, block_id)
    log.debug("Suppression de %d bloc(s) à partir de %s", len(removed), block_id)
    return [b for b in blocks if b.id not in removed], [b.id for b in blocks if b.id in removed]


# ── Duplication ─────────────────────────────────────────────────────────────

def _copy_block(block: Block, new_block_id: str, parent_block_id: Optional[str], order: int) -> Block:
    return block.model_copy(
        update={
            "id": new_block_id,
            "parent_block_id": parent_block_id,
            "order": order,
            "locked": False,
            "breakpoints": [
                bp.model_copy(update={"block_id": new_block_id}, deep=True) for bp in block.breakpoints
            ],
        },
        deep=True,
    )


def duplicate_block(
    blocks: Sequence[Block],
    block_id: str,
    id_factory: IdFactory = new_id,
) -> Tuple[List[Block], Block]:
    """
    Copie profonde d'un bloc et de son sous-arbre (nouveaux ids, breakpoints copiés,
    copies déverrouillées). La copie racine est placée juste après l'original
    (order + 1), les descendants gardent leur ordre relatif.
    """
    original = _get(blocks, block_id)

    children: Dict[Optional[str], List[Block]] = {}
    for b in blocks:
        children.setdefault(b.parent_block_id, []).append(b)

    copies: List[Block] = []

    def _walk(block: Block, parent_block_id: Optional[str], order: int, seen: Set[str]) -> Block:
        copy = _copy_block(block, id_factory(), parent_block_id, order)
        copies.append(copy)
        for child in children.get(block.id, []):
            if child.id in seen:
                continue
            _walk(child, copy.id, child.order, seen | {child.id})
        return copy

    root = _walk(original, original.parent_block_id, original.order + 1, {original.id})
    log.debug("Bloc %s dupliqué → %s (%d bloc(s))", block_id, root.id, len(copies))
    return [*blocks, *copies], root


# ── Breakpoints ─────────────────────────────────────────────────────────────

def upsert_breakpoint(
    blocks: Sequence[Block],
    block_id: str,
    device: DeviceType | str,
    styles: Dict[str, Any],
) -> Tuple[List[Block], Block]:
    """
    Fusionne `styles` dans l'override du device (une valeur None retire la clé).
    DESKTOP n'a pas de breakpoint : l'édition porte directement sur Block.styles.
    """
    device = DeviceType(device)
    block  = _get(blocks, block_id)

    def _merge(current: Dict[str, Any]) -> Dict[str, Any]:
        merged = {**current, **styles}
        return {k: v for k, v in merged.items() if v is not None}

    if device == DeviceType.DESKTOP:
        updated = block.model_copy(update={"styles": _merge(block.styles)}, deep=True)
        return _replace(blocks, updated), updated

    existing = block.breakpoint_for(device)
    if existing is None:
        breakpoints = [*block.breakpoints, Breakpoint(block_id=block.id, device=device, styles=_merge({}))]
    else:
        breakpoints = [
            bp.model_copy(update={"styles": _merge(bp.styles)}) if bp.device == device else bp
            for bp in block.breakpoints
        ]
    updated = block.model_copy(update={"breakpoints": breakpoints}, deep=True)
    return _replace(blocks, updated), updated


# ── Smart sections ──────────────────────────────────────────────────────────

def insert_smart_section_instance(
    blocks: Sequence[Block],
    section: SmartSection,
    parent_block_id: Optional[str] = None,
    order: Optional[int] = None,
    owner_section_id: Optional[str] = None,
    id_factory: IdFactory = new_id,
) -> Tuple[List[Block], Block, SmartSectionInstance]:
    """
    Place une instance de `section` : un CONTAINER porteur de
    `smart_section_instance_id`, sans enfants propres.

    `owner_section_id` : renseigné quand la liste éditée est elle-même celle
    d'une smart section ; l'imbrication de sections y est refusée.
    """
    if owner_section_id is not None:
        raise NestedSmartSectionError(
            f"Cannot insert smart section {section.id} inside smart section {owner_section_id}"
        )
    _check_parent(blocks, parent_block_id, "CONTAINER")

    instance = SmartSectionInstance(id=id_factory(), section_id=section.id)
    container = Block(
        id=id_factory(),
        type="CONTAINER",
        parent_block_id=parent_block_id,
        order=next_order(blocks, parent_block_id) if order is None else order,
        props={"smartSectionRef": True, "sectionName": section.name},
        styles={"width": "100%"},
        smart_section_instance_id=instance.id,
    )
    log.info("Instance %s de la section %s insérée (bloc %s)", instance.id, section.id, container.id)
    return [*blocks, container], container, instance
