"""Test configuration — ensure strength_analytics is importable without installing."""
import sys
from pathlib import Path

# Add project root to path so `from strength_analytics.xxx import` works
sys.path.insert(0, str(Path(__file__).parent.parent))
