"""
Router FastAPI — endpoints funnel_builder.

POST /funnel-builder/render            → PublishedPageData → HTMLResponse (document complet)
POST /funnel-builder/render/blocks     → blocs + smart sections → HTMLResponse (fragment)
POST /funnel-builder/validate          → blocs → {"valid": bool, "issues": [...]}
POST /funnel-builder/tree              → blocs → forêt JSON
GET  /funnel-builder/catalog           → types de blocs + JSON schemas des props
POST /funnel-builder/blocks/create     → liste + nouveau bloc
POST /funnel-builder/blocks/move       → liste + bloc déplacé
POST /funnel-builder/blocks/delete     → liste + ids supprimés
POST /funnel-builder/blocks/duplicate  → liste + copie racine
POST /funnel-builder/blocks/update     → liste + bloc modifié
POST /funnel-builder/blocks/breakpoint → liste + bloc mis à jour
POST /funnel-builder/smart-sections/insert-instance → liste + conteneur + instance
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse

from . import config, mutations
from .blocks import BLOCK_REGISTRY, get_all_categories
from .core.errors import BlockNotFoundError, MutationError
from .core.schemas import (
    Block, BlockEvent, DeviceType, FunnelModel, PublishedPageData, SmartSection, SmartSectionInstance,
)
from .core.smart_sections import SmartSectionContext, resolve_forest
from .core.tree import build_tree, collect_issues
from .renderer import render_blocks, render_published_page

router = APIRouter(prefix="/funnel-builder", tags=["funnel_builder"])


class BlocksPayload(FunnelModel):
    blocks: List[Block]
    smart_sections: Optional[List[SmartSection]] = None
    smart_section_instances: List[SmartSectionInstance] = []

    def context(self) -> SmartSectionContext:
        return SmartSectionContext.from_sections(self.smart_sections, self.smart_section_instances)


class CreateBlockRequest(FunnelModel):
    blocks: List[Block] = []
    type: str
    parent_block_id: Optional[str] = None
    props: Optional[Dict[str, Any]] = None
    styles: Optional[Dict[str, Any]] = None
    order: Optional[int] = None


class MoveBlockRequest(FunnelModel):
    blocks: List[Block]
    block_id: str
    new_parent_block_id: Optional[str] = None
    new_order: int


class BlockRefRequest(FunnelModel):
    blocks: List[Block]
    block_id: str


class UpdateBlockRequest(FunnelModel):
    blocks: List[Block]
    block_id: str
    props: Optional[Dict[str, Any]] = None
    styles: Optional[Dict[str, Any]] = None
    visible: Optional[bool] = None
    locked: Optional[bool] = None
    tracking_event: Optional[BlockEvent] = None


class BreakpointRequest(FunnelModel):
    blocks: List[Block]
    block_id: str
    device: DeviceType
    styles: Dict[str, Any]


class InsertInstanceRequest(FunnelModel):
    blocks: List[Block] = []
    section: SmartSection
    parent_block_id: Optional[str] = None
    order: Optional[int] = None
    owner_section_id: Optional[str] = None  # liste éditée = celle d'une smart section


def _dump(blocks: List[Block]) -> List[dict]:
    return [b.model_dump(by_alias=True) for b in blocks]


def _mutation_error(e: MutationError) -> HTTPException:
    if isinstance(e, BlockNotFoundError):
        return HTTPException(404, str(e))
    return HTTPException(422, str(e))


# ── Rendu ───────────────────────────────────────────────────────────────────

@router.post("/render", response_class=HTMLResponse, summary="Rend une page publiée complète")
def render(data: PublishedPageData, device: DeviceType = Query(config.DEFAULT_DEVICE)) -> HTMLResponse:
    return HTMLResponse(content=render_published_page(data, device))


@router.post("/render/blocks", response_class=HTMLResponse, summary="Rend une liste de blocs (fragment)")
def render_fragment(payload: BlocksPayload, device: DeviceType = Query(config.DEFAULT_DEVICE)) -> HTMLResponse:
    return HTMLResponse(content=render_blocks(payload.blocks, device, payload.context()))


# ── Arbre ───────────────────────────────────────────────────────────────────

@router.post("/validate", summary="Vérifie les invariants de l'arbre sans le rendre")
def validate(payload: BlocksPayload) -> dict:
    issues = collect_issues(payload.blocks)
    return {"valid": not issues, "issues": [i.model_dump() for i in issues]}


@router.post("/tree", summary="Construit la forêt résolue (smart sections incluses)")
def tree(payload: BlocksPayload) -> dict:
    forest = resolve_forest(build_tree(payload.blocks), payload.context())
    return {"roots": [node.model_dump(by_alias=True) for node in forest]}


@router.get("/catalog", summary="Liste les types de blocs et leurs schemas de props")
def catalog() -> dict:
    """Catalogue groupé par catégorie, dans l'ordre de la palette de l'éditeur."""
    categories = []
    for category in get_all_categories():
        blocks = [
            {
                "type":              d.type,
                "label":             d.label,
                "can_have_children": d.can_have_children,
                "allowed_children":  d.allowed_children,
                "default_props":     d.default_props(),
                "default_styles":    d.default_styles,
                "schema":            d.props_model.model_json_schema(by_alias=True),
            }
            for d in BLOCK_REGISTRY.values() if d.category == category
        ]
        categories.append({"category": category, "blocks": blocks})
    return {"categories": categories}


# ── Mutations ───────────────────────────────────────────────────────────────

@router.post("/blocks/create", summary="Ajoute un bloc")
def create_block(req: CreateBlockRequest) -> dict:
    try:
        blocks, block = mutations.create_block(
            req.blocks, req.type, req.parent_block_id, req.props, req.styles, req.order,
        )
    except MutationError as e:
        raise _mutation_error(e)
    return {"blocks": _dump(blocks), "block": block.model_dump(by_alias=True)}


@router.post("/blocks/move", summary="Déplace un bloc (parent et/ou position)")
def move_block(req: MoveBlockRequest) -> dict:
    try:
        blocks, block = mutations.move_block(req.blocks, req.block_id, req.new_parent_block_id, req.new_order)
    except MutationError as e:
        raise _mutation_error(e)
    return {"blocks": _dump(blocks), "block": block.model_dump(by_alias=True)}


@router.post("/blocks/delete", summary="Supprime un bloc et ses descendants")
def delete_block(req: BlockRefRequest) -> dict:
    try:
        blocks, removed = mutations.delete_block(req.blocks, req.block_id)
    except MutationError as e:
        raise _mutation_error(e)
    return {"blocks": _dump(blocks), "removed": removed}


@router.post("/blocks/duplicate", summary="Duplique un bloc et son sous-arbre")
def duplicate_block(req: BlockRefRequest) -> dict:
    try:
        blocks, block = mutations.duplicate_block(req.blocks, req.block_id)
    except MutationError as e:
        raise _mutation_error(e)
    return {"blocks": _dump(blocks), "block": block.model_dump(by_alias=True)}


@router.post("/blocks/update", summary="Modifie props, styles, visibilité ou tracking d'un bloc")
def update_block(req: UpdateBlockRequest) -> dict:
    try:
        blocks, block = mutations.update_block(
            req.blocks, req.block_id, req.props, req.styles, req.visible, req.locked, req.tracking_event,
        )
    except MutationError as e:
        raise _mutation_error(e)
    return {"blocks": _dump(blocks), "block": block.model_dump(by_alias=True)}


@router.post("/blocks/breakpoint", summary="Override de styles pour un device")
def upsert_breakpoint(req: BreakpointRequest) -> dict:
    try:
        blocks, block = mutations.upsert_breakpoint(req.blocks, req.block_id, req.device, req.styles)
    except MutationError as e:
        raise _mutation_error(e)
    return {"blocks": _dump(blocks), "block": block.model_dump(by_alias=True)}


# ── Smart sections ──────────────────────────────────────────────────────────

@router.post("/smart-sections/insert-instance", summary="Place une instance de smart section")
def insert_smart_section_instance(req: InsertInstanceRequest) -> dict:
    try:
        blocks, container, instance = mutations.insert_smart_section_instance(
            req.blocks, req.section, req.parent_block_id, req.order, req.owner_section_id,
        )
    except MutationError as e:
        raise _mutation_error(e)
    return {
        "blocks":   _dump(blocks),
        "block":    container.model_dump(by_alias=True),
        "instance": instance.model_dump(by_alias=True),
    }
