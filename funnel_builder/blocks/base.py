"""
Base des blocs : schéma de props + définition de registry.
"""
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Category = Literal["Layouts", "Typography", "Media", "Forms", "Components", "Embeds", "Conversion"]


class BlockProps(BaseModel):
    """Props d'un bloc. Clés camelCase côté JSON, clés inconnues conservées."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow", coerce_numbers_to_str=True,
    )


class BlockDefinition(BaseModel):
    """Entrée du registry : capacités + valeurs par défaut d'un type de bloc."""
    type: str
    category: Category
    label: str
    props_model: Type[BlockProps] = BlockProps
    default_styles: Dict[str, Any] = Field(default_factory=dict)
    can_have_children: bool = False
    allowed_children: Optional[List[str]] = None

    def default_props(self) -> Dict[str, Any]:
        """Props par défaut sérialisées (camelCase, comme stockées)."""
        return self.props_model().model_dump(by_alias=True, exclude_none=True)
