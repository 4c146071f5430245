"""
mandihub.api.routers

Router modules: health checks plus one router per catalog resource.
"""

# Package marker.
