""" Input/output backend: the file source of role textures and the sinks for packed maps and material descriptions. """
# Keeps the construct_material pipeline free of file handling, so the same pipeline can be driven from the CLI or a host application.

import json
import os
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from backend.image_lib import (ImageObject, image_from_texture, open_image, save_image as save_image_file, texture_from_image)
from backend.texture_classes import MaterialDescription, Texture

from settings import ALLOWED_FILE_TYPES, ALPHA_FILE_TYPES, FILE_TYPE
from utils import close_image_files, log


@dataclass
class PBRContext:
    export_extension: str = "" # Validated file extension set in config, without the dot.
    opened_images: List[ImageObject] = field(default_factory=list) # Images opened for the current texture set; closed after each set.




#                                     === PBR Constructor core interface ===


def context_validate_export_extension(context: Optional[PBRContext] = None, file_type: Optional[str] = None) -> str:
# Validates the packed map extension set in config and stores it in the context, without the dot.
# The packed map keeps smoothness in alpha, so only file types with an alpha channel are accepted.

    requested_file_type: str = FILE_TYPE if file_type is None else file_type
    typed_extension: str = (requested_file_type or "").strip().lower().lstrip(".")
    file_extension: str = "jpeg" if typed_extension == "jpg" else typed_extension

    if not file_extension or file_extension not in ALLOWED_FILE_TYPES:
        sorted_allowed_file_types = ", ".join(sorted(ALLOWED_FILE_TYPES))
        log(f"Aborted: Invalid FILE_TYPE '{requested_file_type}'. Supported: {sorted_allowed_file_types}", "error")
        raise SystemExit(1)

    if file_extension not in ALPHA_FILE_TYPES:
        log(f"Aborted: Smoothness is packed into the Alpha channel, but selected file type '{file_extension}' does not support alpha. Change FILE_TYPE to 'png' or 'tga' and retry.", "error")
        raise SystemExit(1)

    if context is not None:
        context.export_extension = file_extension
    return file_extension


def list_initial_files(input_folder: str) -> List[str]:
# Lists candidate texture files directly inside input_folder, sorted by name.

    if not input_folder:
        return []

    root_directory = os.path.abspath(input_folder)
    source_file_types = tuple(f".{file_type}" for file_type in ALLOWED_FILE_TYPES)

    absolute_paths: List[str] = []
    for filename in sorted(os.listdir(root_directory)):
        if filename.lower().endswith(source_file_types):
            absolute_path = os.path.join(root_directory, filename)
            if os.path.isfile(absolute_path):
                absolute_paths.append(absolute_path)

    return absolute_paths


def load_texture(path: str, context: Optional[PBRContext] = None) -> Texture:
# Opens an image file and converts it to a normalized texture.
# With a context, the file handle stays registered until release_images; otherwise it is closed right away.

    image = open_image(path)
    if context is not None:
        context.opened_images.append(image)
        return texture_from_image(image)
    try:
        return texture_from_image(image)
    finally:
        close_image_files([image])


def load_textures(texture_paths: Dict[str, Optional[str]], context: Optional[PBRContext] = None) -> Dict[str, Optional[Texture]]:
# Loads every role that has a path; roles without one map to None.
    return {role: (load_texture(path, context) if path else None) for role, path in texture_paths.items()}


def release_images(context: PBRContext) -> None:
    close_image_files(context.opened_images)
    context.opened_images = []


def resolve_texture_output_path(output_path: str, context: Optional[PBRContext] = None) -> Tuple[str, str]:
# Returns the output path and the file type it is written as.
# A path without an extension gets the context's export extension; an extension without alpha support is rejected.

    default_extension: str = (context.export_extension if context and context.export_extension else "png")
    root, path_extension = os.path.splitext(output_path)
    file_extension: str = path_extension.lstrip(".").lower()

    if not file_extension:
        return f"{root}.{default_extension}", default_extension
    if file_extension not in ALPHA_FILE_TYPES:
        raise ValueError(f"Cannot save the packed map as '.{file_extension}': smoothness is packed into the Alpha channel. Use .png or .tga ({output_path})")
    return output_path, file_extension


def save_texture(texture: Texture, output_path: str, context: Optional[PBRContext] = None) -> str:
# Encodes the texture to 8bit RGBA and writes it. Returns the absolute output path.

    output_path, file_extension = resolve_texture_output_path(output_path, context)
    output_directory: str = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_directory, exist_ok=True)

    image = image_from_texture(texture)
    try:
        save_image_file(image, output_path, file_extension)
    finally:
        close_image_files([image])
    return os.path.abspath(output_path).replace("\\", "/")


def save_material(material: MaterialDescription, output_path: str) -> str:
# Writes the material description as JSON. Returns the absolute output path.

    output_directory: str = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_directory, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(material.to_dict(), f, indent=4)
    return os.path.abspath(output_path).replace("\\", "/")
