"""Application composition root.

Example:
    from checkvault.app import create_view
    from checkvault.core.config import Config

    view = create_view(Config.from_env())
"""

from .factory import create_view

__all__ = ["create_view"]
