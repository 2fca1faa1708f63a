"""mailquota: filesystem-derived mail quota reporting (dirsize backend)."""

__version__ = "0.1.0"
