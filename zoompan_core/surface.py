"""
Surface Module
Host-side targets that receive transform descriptors
"""

from typing import Dict, Protocol


class Surface(Protocol):
    """Anything that can take a transform descriptor and an origin."""

    def set_transform(self, transform: str, transform_origin: str) -> None:
        ...


class StyleSurface:
    """
    In-process surface that keeps its transform in a style dict.

    The dict uses the style property names a browser element would
    (`transform`, `transform-origin`), so hosts can forward it as-is.
    """

    def __init__(self, name: str = "surface"):
        self.name = name
        self.style: Dict[str, str] = {}
        self.update_count = 0

    @property
    def transform(self) -> str:
        return self.style.get('transform', '')

    @property
    def transform_origin(self) -> str:
        return self.style.get('transform-origin', '')

    def set_transform(self, transform: str, transform_origin: str) -> None:
        self.style['transform-origin'] = transform_origin
        self.style['transform'] = transform
        self.update_count += 1

    def __repr__(self):
        return (f"StyleSurface(name='{self.name}', "
                f"transform='{self.transform}', "
                f"origin='{self.transform_origin}')")
