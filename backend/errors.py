""" Errors raised while validating and packing texture maps. """

from typing import Optional, Sequence, Tuple


class PBRConstructorError(Exception):
    pass


class SizeMismatch(PBRConstructorError):
# Present input textures don't share one resolution.

    def __init__(self, sizes: Sequence[Tuple[int, int]]) -> None:
        self.sizes: Tuple[Tuple[int, int], ...] = tuple(sizes)
        listed = ", ".join(f"{width}x{height}" for width, height in self.sizes)
        super().__init__(f"Textures need to be of same resolution (found {listed}).")


class NoReferenceDimension(PBRConstructorError):
# None of the textures in the sizing set is present, so the output size is unknown.

    def __init__(self) -> None:
        super().__init__("No texture in the sizing set provides a resolution.")


class MissingRequiredInput(PBRConstructorError):

    def __init__(self, role: str, texture_set_name: Optional[str] = None) -> None:
        self.role: str = role
        self.texture_set_name: Optional[str] = texture_set_name
        where = f" for '{texture_set_name}'" if texture_set_name else ""
        super().__init__(f"Textures required: {role}{where}")
