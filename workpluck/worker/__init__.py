"""
Worker module.
Contains the reference polling worker and its topic handlers.
"""
