"""erp-gateway: proxy/fallback gateway for the ERP dashboard backend."""

__version__ = "0.1.0"

__all__ = ["__version__"]
