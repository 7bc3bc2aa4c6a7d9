from .curl import CurlCommand, Fetch

__all__ = ["CurlCommand", "Fetch"]
