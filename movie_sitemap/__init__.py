"""Movie API client and sitemap.xml generator."""

__version__ = "1.0.0"
