from hostname_viewer.app import create_app

__all__ = ["create_app"]
