"""Pytest configuration making the ``src.typedarray`` import path available."""
import os
import sys

ROOT = os.path.dirname(__file__)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
