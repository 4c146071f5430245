"""
mandihub.services

Service-layer package.

Responsibilities:
- Backend-neutral request handling for categories, products and sellers.
- Keep denormalized category copies and reverse references consistent.
- Populate both stores with fixture data.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services never touch HTTP types; routers translate their errors via `mandihub.errors`.
