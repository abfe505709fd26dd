"""
Exceptions du funnel builder.

Le cœur de transformation (arbre, styles, smart sections, rendu) ne lève jamais
pour une anomalie de données : il dégrade localement et journalise.
Ces exceptions servent à la frontière de mutation (édition), où une opération
invalide doit être refusée avant d'être persistée.
"""


class FunnelBuilderError(Exception):
    """Erreur de base du funnel builder."""


class MutationError(FunnelBuilderError):
    """Opération d'édition refusée."""


class BlockNotFoundError(MutationError):
    def __init__(self, block_id: str):
        super().__init__(f"Block not found: {block_id!r}")
        self.block_id = block_id


class InvalidParentError(MutationError):
    """Le parent n'accepte pas ce type d'enfant (ou n'accepte aucun enfant)."""


class BlockCycleError(MutationError):
    """Le déplacement rendrait le bloc son propre ancêtre."""


class NestedSmartSectionError(MutationError):
    """Instance de smart section insérée dans l'édition d'une smart section."""


class SmartSectionCycleError(FunnelBuilderError):
    """Une smart section se référence elle-même (directement ou transitivement)."""

    def __init__(self, path: list):
        self.path = list(path)
        super().__init__("Smart section cycle: " + " -> ".join(self.path))
