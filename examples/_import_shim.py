# Shared import shim: put "from _import_shim import ensure_repo_import" at top of examples
import sys
from pathlib import Path


def ensure_repo_import():
    python_dir = Path(__file__).resolve().parents[1] / "python"
    # Prefer the in-repo gltfview over an installed copy
    if python_dir.exists() and str(python_dir) not in sys.path:
        sys.path.insert(0, str(python_dir))
