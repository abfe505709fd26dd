"""
Smart Section Resolver — transclusion des sections partagées.

Un bloc dont `smart_section_instance_id` est renseigné ne possède pas ses
enfants : ce sont les blocs racine de la section référencée, eux-mêmes résolus
dans la liste plate de la section (et non celle de la page).

États distincts renvoyés à l'appelant :
  PENDING   → blocs de la section pas encore chargés (≠ vide)
  EMPTY     → section chargée sans bloc racine
  POPULATED → enfants disponibles
  CYCLE     → la section s'inclut elle-même ; la récursion est interrompue
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from .errors import SmartSectionCycleError
from .schemas import Block, SmartSection, SmartSectionInstance
from .tree import BlockNode, ChildrenState, OwnedChildren, TranscludedChildren, build_tree

log = logging.getLogger(__name__)


class SmartSectionContext(BaseModel):
    """Données de transclusion disponibles au moment de la résolution."""
    instances: Dict[str, str] = Field(default_factory=dict, description="instance id → section id")
    sections: Dict[str, List[Block]] = Field(default_factory=dict, description="section id → blocs chargés")

    @classmethod
    def from_sections(
        cls,
        sections: Optional[Iterable[SmartSection]],
        instances: Iterable[SmartSectionInstance] = (),
    ) -> "SmartSectionContext":
        return cls(
            instances={i.id: i.section_id for i in instances},
            sections={s.id: list(s.blocks) for s in (sections or [])},
        )

    def section_for(self, instance_id: str) -> Optional[str]:
        return self.instances.get(instance_id)

    def blocks_for(self, section_id: str) -> Optional[List[Block]]:
        """None = pas encore chargée."""
        return self.sections.get(section_id)


class ResolvedChildren(BaseModel):
    state: ChildrenState
    blocks: List[Block] = Field(default_factory=list)
    section_id: Optional[str] = None
    # Liste plate à utiliser pour résoudre les descendants de ces enfants
    scope: List[Block] = Field(default_factory=list)
    error: Optional[str] = None


def _sorted(blocks: Iterable[Block]) -> List[Block]:
    return sorted(blocks, key=lambda b: b.order)


def resolve_children(
    block: Block,
    page_blocks: Sequence[Block],
    context: Optional[SmartSectionContext] = None,
) -> ResolvedChildren:
    """Enfants directs d'un bloc : possédés (liste de la page) ou transclus."""
    if not block.smart_section_instance_id:
        children = _sorted(b for b in page_blocks if b.parent_block_id == block.id)
        return ResolvedChildren(
            state=ChildrenState.POPULATED if children else ChildrenState.EMPTY,
            blocks=children,
            scope=list(page_blocks),
        )

    context = context or SmartSectionContext()
    section_id = context.section_for(block.smart_section_instance_id)
    section_blocks = context.blocks_for(section_id) if section_id else None
    if section_blocks is None:
        return ResolvedChildren(state=ChildrenState.PENDING, section_id=section_id)

    roots = _sorted(b for b in section_blocks if b.parent_block_id is None)
    return ResolvedChildren(
        state=ChildrenState.POPULATED if roots else ChildrenState.EMPTY,
        blocks=roots,
        section_id=section_id,
        scope=list(section_blocks),
    )


def resolve_forest(
    forest: Sequence[BlockNode],
    context: Optional[SmartSectionContext] = None,
    root_section_id: Optional[str] = None,
) -> List[BlockNode]:
    """
    Nouvelle forêt où chaque instance porte ses enfants transclus.

    `root_section_id` : section en cours d'édition (une instance d'elle-même
    y est alors détectée comme cycle dès le premier niveau).
    """
    context = context or SmartSectionContext()
    path: Tuple[str, ...] = (root_section_id,) if root_section_id else ()
    return _resolve_level(forest, context, path)


def _resolve_level(forest: Sequence[BlockNode], context: SmartSectionContext, path: Tuple[str, ...]) -> List[BlockNode]:
    out: List[BlockNode] = []
    stack = [(forest, out)]
    while stack:
        level, target = stack.pop()
        for node in level:
            if node.block.smart_section_instance_id:
                if node.children.nodes:
                    log.warning("Instance %s déclare des enfants propres, ignorés", node.id)
                target.append(BlockNode(block=node.block, children=_transclude(node.block, context, path)))
                continue
            copy = BlockNode(block=node.block, children=OwnedChildren())
            target.append(copy)
            stack.append((node.children.nodes, copy.children.nodes))
    return out


def _transclude(block: Block, context: SmartSectionContext, path: Tuple[str, ...]) -> TranscludedChildren:
    section_id = context.section_for(block.smart_section_instance_id)
    if section_id is None:
        log.info("Instance %s : section inconnue, pending", block.smart_section_instance_id)
        return TranscludedChildren(state=ChildrenState.PENDING)

    if section_id in path:
        err = SmartSectionCycleError([*path, section_id])
        log.warning("%s (bloc %s)", err, block.id)
        return TranscludedChildren(section_id=section_id, state=ChildrenState.CYCLE, error=str(err))

    section_blocks = context.blocks_for(section_id)
    if section_blocks is None:
        return TranscludedChildren(section_id=section_id, state=ChildrenState.PENDING)

    nodes = _resolve_level(build_tree(section_blocks), context, (*path, section_id))
    return TranscludedChildren(
        section_id=section_id,
        state=ChildrenState.POPULATED if nodes else ChildrenState.EMPTY,
        nodes=nodes,
    )
