"""Path utilities for cross-platform Unreal asset path handling."""

ASSET_EXTENSION = ".uasset"


def to_game_path_sep(path: str) -> str:
    """Normalize path separators to forward slashes for Unreal game paths.

    Unreal game paths always use forward slashes (e.g. /Game/UI/Widget), but
    references copied from Windows tooling sometimes carry backslashes.
    """
    return path.replace("\\", "/")


def strip_object_name(reference: str) -> str:
    """Reduce an object path to its package path.

    ``/Game/UI/W_Menu.W_Menu`` -> ``/Game/UI/W_Menu``. References that already
    end in ``.uasset`` or have no object suffix are returned unchanged.
    """
    head, sep, last = reference.rpartition("/")
    if not sep or last.endswith(ASSET_EXTENSION) or "." not in last:
        return reference
    return f"{head}/{last.split('.', 1)[0]}"


def normalize_reference(reference: str) -> str:
    """Normalize an import reference to a package path ending in ``.uasset``."""
    reference = strip_object_name(to_game_path_sep(reference.strip()))
    if not reference:
        return ""
    if not reference.endswith(ASSET_EXTENSION):
        reference += ASSET_EXTENSION
    return reference


def split_reference(reference: str) -> list[str]:
    """Split a normalized reference into segments; segment 0 is the namespace.

    Empty segments (doubled or trailing slashes) are dropped.
    """
    return [segment for segment in reference.lstrip("/").split("/") if segment]
