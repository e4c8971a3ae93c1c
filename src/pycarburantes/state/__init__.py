"""State layer.

Holds the loaded station snapshot and the filter engine that derives the
filtered results and facet catalogs from it.
"""
