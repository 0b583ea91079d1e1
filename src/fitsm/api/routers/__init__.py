"""API routers package: one module per resource, each delegating to ``fitsm.ops``."""
