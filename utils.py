""" Texture utilities: logging, filename parsing and small helpers shared by the pipeline. """

import os
import re
from typing import Iterable, List, Optional, Set, Tuple

from settings import SIZE_SUFFIXES, TEXTURE_CONFIG

from backend.image_lib import close_image


LOG_TYPES: list[str] = ["info", "warn", "error", "skip", "complete"]

def log(message: str, message_kind: LOG_TYPES = "info") -> None:
# Maps different log types.

    if message == "":
        print("")
        return

    if message_kind not in LOG_TYPES:
        message_kind = "info"

    if message_kind == "info":
        print(f"   {message}")
    elif message_kind == "warn":
        print(f"⚠️ {message}")
    elif message_kind == "error":
        print(f"⛔ {message}")
    elif message_kind == "skip":
        print(f"❌ {message}")
    elif message_kind == "complete":
        print(f"✅ {message}")

    # Print styles:
    # info: 3 whitespaces + message
    # warn: ⚠️ + message
    # error: ⛔ + message
    # skip: ❌ + message
    # complete: ✅ + message


def close_image_files(images: Iterable[Optional[object]]) -> None:
# Safely closes all opened images even if there is an error during image processing.

    processed_ids: Set[int] = set()
    for image in images:
        if image is None:
            continue
        image_id = id(image)
        if image_id in processed_ids:
            continue
        processed_ids.add(image_id)
        try:
            close_image(image) # Function from image_lib
        except (OSError, ValueError):
            pass


def detect_size_suffix(name: str) -> str:
# Detects size suffixes present in the map name, e.g., "2K"

    normalized_size_suffixes: List[str] = sorted([size_suffix.lower() for size_suffix in SIZE_SUFFIXES if size_suffix], key=len, reverse=True)
    # Normalizes tokens to lowercase and sorts by reverse length to avoid shorter tokens matching before longer ones.
    if not normalized_size_suffixes:
        return ""
    pattern = r"(?:[\._\-])(" + "|".join(map(re.escape, normalized_size_suffixes)) + r")$"
    matched_suffix: Optional[re.Match[str]] = re.search(pattern, name.lower())
    if matched_suffix:
        return matched_suffix.group(1)
    alt_pattern: str = r"(?:[\._\-])(" + "|".join(map(re.escape, normalized_size_suffixes)) + r")(?:-[a-z0-9]+)?(?=[\._\-][a-z0-9]+$)"
    # Size placed before the last token, e.g., "Rock_2K_AO".
    alt_match: Optional[re.Match[str]] = re.search(alt_pattern, name.lower())
    return alt_match.group(1) if alt_match else ""


def match_suffixes(name_lower: str, type_suffix: str, size_suffix: str) -> Optional[str]:
# Takes into account different naming conventions, returns the regex pattern that matches one.
# Type...size, size...type, ...type

    separator: str = r"[\_\-\.]"
    middle_text: str = rf"(?:{separator}[A-Za-z0-9]+)?"

    if size_suffix:
        pattern1: str = rf"{separator}{re.escape(type_suffix)}{middle_text}{separator}{re.escape(size_suffix)}$"  # type ... [middle_text] ... size
        pattern2: str = rf"{separator}{re.escape(size_suffix)}{middle_text}{separator}{re.escape(type_suffix)}$"  # size ... [middle_text] ... type
        if re.search(pattern1, name_lower):
            return pattern1
        if re.search(pattern2, name_lower):
            return pattern2

    only_type_suffix: str = rf"{separator}{re.escape(type_suffix)}$"
    if re.search(only_type_suffix, name_lower):
        return only_type_suffix
    return None


def extract_role_from_filename(filename: str) -> Optional[Tuple[str, str]]:
# Splits a texture filename into its case-sensitive texture set name and role, e.g., "Rock_AO_2K.png" > ("Rock", "occlusion").
# Returns None if no role suffix matches.

    stem: str = os.path.splitext(os.path.basename(filename))[0]
    name_lower: str = stem.lower()
    size_suffix: str = detect_size_suffix(stem)

    role_suffixes: List[Tuple[str, str]] = sorted(
        ((type_suffix.lower(), role) for role, role_config in TEXTURE_CONFIG.items() for type_suffix in role_config["suffixes"]),
        key=lambda suffix_and_role: len(suffix_and_role[0]),
        reverse=True,
    )
    # Longer suffixes first, so "roughness" wins over "r".

    for type_suffix, role in role_suffixes:
        pattern: Optional[str] = match_suffixes(name_lower, type_suffix, size_suffix)
        if not pattern:
            continue
        matched = re.search(pattern, name_lower)
        texture_set_name: str = stem[:matched.start()]
        if texture_set_name:
            return texture_set_name, role
    return None


def resolution_to_text(size: Tuple[int, int]) -> str:
    width, height = size
    return f"{width}x{height}"


def validate_safe_name(raw_name: Optional[str], setting_name: str) -> None:
# Validates that a name used to build output filenames doesn't include unsupported characters.

    name: str = (raw_name or "")
    if name.strip() == "":
        return

    if any(invalid_character in name for invalid_character in '\\/:*?"<>|'):
        log(f"Aborted: invalid {setting_name} '{raw_name}'. It cannot contain \\ / : * ? \" < > |", "error")
        raise SystemExit(1)
