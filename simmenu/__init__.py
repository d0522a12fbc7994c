"""
SimMenu - Simulator Device Menu
"""
__version__ = "1.0.0"
