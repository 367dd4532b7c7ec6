"""
Input boundary: JSON catalog and profile loading.

Modules
-------
loader : parse_catalog() + load_catalog() + load_profile().
"""
