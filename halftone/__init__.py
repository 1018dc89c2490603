"""
Halftone - batch conversion of photographs to print-ready halftones.
"""

__version__ = "0.1.0"
