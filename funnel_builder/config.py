"""
Configuration — variables d'environnement (valeurs par défaut sûres).
"""
import os

LOG_LEVEL        = os.getenv("FUNNEL_LOG_LEVEL", "INFO")
DEFAULT_DEVICE   = os.getenv("FUNNEL_DEFAULT_DEVICE", "DESKTOP")
DEFAULT_LANG     = os.getenv("FUNNEL_DEFAULT_LANG", "en")

# Largeur max (px) considérée comme mobile par le script du sticky bar
MOBILE_MAX_WIDTH = int(os.getenv("FUNNEL_MOBILE_MAX_WIDTH", "768"))

# Ajoute un console.log dans window.trackFunnelEvent
TRACKING_DEBUG   = os.getenv("FUNNEL_TRACKING_DEBUG", "0") in ("1", "true", "yes")
