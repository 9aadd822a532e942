"""package.json adjustments after a template is downloaded."""
import json
from pathlib import Path


def rename_package(directory: Path, name: str) -> bool:
    """Set the ``name`` field of directory/package.json.

    Only a package.json that already declares a name is touched.

    Returns:
        True if the file was rewritten

    Raises:
        ValueError: If package.json is not a JSON object
    """
    path = Path(directory) / "package.json"
    if not path.exists():
        return False

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    if not data.get("name"):
        return False

    data["name"] = name
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return True
