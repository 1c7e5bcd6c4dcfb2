"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It keeps the diagram dimensions, colours and fonts in one
   place instead of scattering magic numbers through the layout code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (sample data files) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_DATA_PATH (str): Absolute path to the bundled example dataset.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/sankeyplot/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_DATA_PATH: str = os.path.join(ASSETS_PATH, "budget.txt")

# --- WINDOW ---
# The reference viewport: at this size the diagram is drawn at scale 1.0
BASE_WIDTH: float = 700.0
BASE_HEIGHT: float = 600.0

# --- LAYOUT (diagram units) ---
MAX_NODE_HEIGHT: float = 50.0

SOURCE_X: float = 100.0
SOURCE_Y: float = 100.0
SOURCE_WIDTH: float = 50.0

TARGET_X: float = 500.0
TARGET_WIDTH: float = 30.0
ROW_SPACING: float = 20.0
NODE_GAP: float = 20.0

LABEL_OFFSET: float = 10.0
TITLE_OFFSET: float = 30.0
DIAGRAM_MARGIN: float = 20.0

# --- COLOURS ---
SOURCE_COLOR: str = "#90EE90"  # light green
TARGET_COLOR: str = "#87CEFA"  # light sky blue
RIBBON_COLOR: str = "#ADD8E6"  # light blue
TEXT_COLOR: str = "#000000"

# --- FONTS ---
FONT_FAMILY: str = "Arial"
LABEL_FONT_SIZE: float = 12.0
TITLE_FONT_SIZE: float = 20.0

if not os.path.exists(ASSETS_PATH):
    print(f"WARNING: Assets path not found at {ASSETS_PATH}")
