"""
mandihub.api

API package for the MandiHub catalog service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request binding + backend selection + delegation to services.
