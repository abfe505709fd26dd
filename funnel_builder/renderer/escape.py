"""Échappement HTML (texte et attributs)."""
import html
from typing import Any


def escape_html(value: Any) -> str:
    """& < > " ' → entités. None → chaîne vide. Fonction totale sur str."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)
