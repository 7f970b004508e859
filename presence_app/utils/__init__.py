"""
Utility functions module.

Duration formatting shared by the display collaborators.
"""
