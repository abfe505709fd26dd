"""
Block Registry — configuration centrale des types de blocs.

Définit pour chaque type :
- props / styles par défaut
- capacité à recevoir des enfants (+ liste restrictive éventuelle)
- le schéma de props validé au moment du rendu

Un type inconnu n'est jamais une erreur : pas d'enfants autorisés, props brutes.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .base import BlockDefinition, BlockProps, Category
from . import components, conversion, embeds, forms, layout, media, typography

log = logging.getLogger(__name__)

BLOCK_REGISTRY: Dict[str, BlockDefinition] = {
    d.type: d
    for module in (layout, typography, media, forms, components, embeds, conversion)
    for d in module.DEFINITIONS
}

_CATEGORIES: List[str] = ["Layouts", "Typography", "Media", "Forms", "Components", "Embeds", "Conversion"]


def _type_key(block_type: Any) -> str:
    return getattr(block_type, "value", block_type)


def get_block_definition(block_type: Any) -> Optional[BlockDefinition]:
    return BLOCK_REGISTRY.get(_type_key(block_type))


def get_blocks_by_category(category: Category) -> List[BlockDefinition]:
    return [d for d in BLOCK_REGISTRY.values() if d.category == category]


def get_all_categories() -> List[str]:
    return list(_CATEGORIES)


def can_have_children(block_type: Any) -> bool:
    definition = get_block_definition(block_type)
    return definition.can_have_children if definition else False


def is_child_allowed(child_type: Any, parent_type: Any) -> bool:
    """Le type enfant peut-il être imbriqué directement dans le type parent ?"""
    parent = get_block_definition(parent_type)
    if parent is None or not parent.can_have_children:
        return False
    if parent.allowed_children:
        return _type_key(child_type) in parent.allowed_children
    return True


def parse_props(block_type: Any, raw: Optional[Mapping[str, Any]]) -> BlockProps:
    """
    Valide + complète les props d'un bloc avec le schéma de son type.

    Les valeurs invalides sont écartées (la valeur par défaut du type s'applique)
    plutôt que de faire échouer le rendu de la page.
    """
    definition = get_block_definition(block_type)
    model = definition.props_model if definition else BlockProps
    data = {k: v for k, v in (raw or {}).items() if v is not None}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        bad = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        # loc peut être l'alias camelCase ou le nom Python selon l'entrée
        for name, field in model.model_fields.items():
            if name in bad or field.alias in bad:
                bad.update({name, field.alias})
        log.warning("Props invalides pour %s (%s), valeurs par défaut appliquées",
                    _type_key(block_type), sorted(k for k in bad if k))
        return model.model_validate({k: v for k, v in data.items() if k not in bad})
