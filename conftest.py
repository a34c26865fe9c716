# Ensure the project root (for 'tests') and src/ (for 'pollirc') are on sys.path
# when running pytest from a checkout that was not installed.
import sys
from pathlib import Path

ROOT = Path(__file__).parent.resolve()
for path in (ROOT / "src", ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
