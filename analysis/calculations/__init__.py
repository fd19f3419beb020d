"""
Pure statistical helpers used by the analysis engines.
"""
