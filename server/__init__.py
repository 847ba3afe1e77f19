"""
FastAPI backend server for md2marp.

Provides REST API endpoints for:
- Markdown text and file conversion
- Theme listing
"""

__version__ = "0.1.0"
