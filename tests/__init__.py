"""
Test suite for mdreport.

This module contains all unit and integration tests for the mdreport package.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
