"""
Core utilities: packet framing and the default context registry.
"""
