"""
Product Copy API package.

Provides:
- FastAPI endpoint that turns product info + a markdown template into marketing copy
- OpenAI Responses API client with a temperature-less fallback call
- Local CLI runner for generating copy from files
"""

__version__ = "0.1.0"
