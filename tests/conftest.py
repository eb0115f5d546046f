"""pytest configuration: makes signal_fusion, execution and run_meta_signal importable from the repo root."""

import sys
import os

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
