"""Unreal Engine directory detection from a .uproject file.

Handles both version-string and GUID EngineAssociation values, with registry
lookups on Windows.
"""

import json
import logging
import platform
from pathlib import Path

logger = logging.getLogger("unreal-deptree")


def detect_engine_dir(uproject_path: str | Path) -> str:
    """Detect the ``Engine`` directory used by a project.

    Reads EngineAssociation from the project file. GUID associations (source
    builds registered with the launcher) are looked up in the registry on
    Windows; version strings are looked up in the registry and then in the
    standard install locations for the platform.

    Args:
        uproject_path: Path to the .uproject file.

    Returns:
        Path to the engine's ``Engine`` directory, or "" if not found.
    """
    uproject_path = Path(uproject_path)

    try:
        with open(uproject_path, "r") as f:
            proj = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read %s: %s", uproject_path, e)
        return ""

    engine_assoc = proj.get("EngineAssociation", "") if isinstance(proj, dict) else ""
    if not engine_assoc:
        return ""

    system = platform.system()
    is_guid = _looks_like_guid(engine_assoc)

    if system == "Windows":
        root = (
            _registry_engine_root_for_guid(engine_assoc)
            if is_guid
            else _registry_engine_root_for_version(engine_assoc)
        )
        if root:
            engine_dir = Path(root) / "Engine"
            if engine_dir.is_dir():
                return str(engine_dir)

    for candidate in _candidate_engine_roots(engine_assoc, system, is_guid):
        engine_dir = candidate / "Engine"
        if engine_dir.is_dir():
            return str(engine_dir)

    logger.debug("No engine found for EngineAssociation=%s", engine_assoc)
    return ""


def _looks_like_guid(value: str) -> bool:
    """Check if a string looks like a GUID (e.g., {XXXXXXXX-XXXX-...})."""
    stripped = value.strip("{}")
    parts = stripped.split("-")
    if len(parts) != 5:
        return False
    try:
        int(stripped.replace("-", ""), 16)
        return True
    except ValueError:
        return False


def _candidate_engine_roots(engine_assoc: str, system: str, is_guid: bool) -> list[Path]:
    """Standard engine install roots for a version association.

    GUIDs don't map onto install folder names, so they only resolve through
    the registry.
    """
    if is_guid:
        return []

    folder = f"UE_{engine_assoc}"

    if system == "Windows":
        return [
            Path(rf"{drive}:\Program Files\Epic Games\{folder}") for drive in "CDE"
        ] + [
            Path(rf"C:\UnrealEngine\{folder}"),
            Path(rf"D:\UnrealDev\{folder}"),
        ]

    home = Path.home()
    if system == "Darwin":
        return [
            Path("/Users/Shared/Epic Games") / folder,
            home / "UnrealEngine" / folder,
        ]

    return [
        home / "UnrealEngine" / folder,
        home / "dev" / "UnrealEngine" / folder,
        Path("/opt/unreal-engine") / folder,
        Path("/opt/UnrealEngine") / folder,
    ]


def _registry_engine_root_for_guid(guid: str) -> str | None:
    """Source builds register under
    HKCU\\Software\\Epic Games\\Unreal Engine\\Builds\\{GUID} = <engine_root>
    """
    return _read_registry_value(
        "HKEY_CURRENT_USER", r"Software\Epic Games\Unreal Engine\Builds", guid
    )


def _registry_engine_root_for_version(version: str) -> str | None:
    """Launcher installs register under
    HKLM\\SOFTWARE\\EpicGames\\Unreal Engine\\{version}\\InstalledDirectory
    """
    return _read_registry_value(
        "HKEY_LOCAL_MACHINE",
        rf"SOFTWARE\EpicGames\Unreal Engine\{version}",
        "InstalledDirectory",
    )


def _read_registry_value(hive: str, key_path: str, value_name: str) -> str | None:
    try:
        import winreg
    except ImportError:
        return None

    try:
        key = winreg.OpenKey(getattr(winreg, hive), key_path)
    except OSError:
        return None

    try:
        value, _ = winreg.QueryValueEx(key, value_name)
        return value or None
    except OSError:
        return None
    finally:
        winreg.CloseKey(key)
