#!/usr/bin/env python3
# /ggedit/main.py
"""
ggedit source-tree launcher
===========================

Runs the editor straight from a checkout: puts `src/` on the import path and
hands over to `ggedit.app.start`. Installed copies use the `ggedit` console
script instead.
"""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from ggedit.app import start  # noqa: E402

if __name__ == "__main__":
    start()
