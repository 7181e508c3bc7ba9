"""
API route modules.

Import all route modules here for easy access.
"""

from deal_monitor.api.routes import keywords, posts, subreddits

__all__ = ["keywords", "subreddits", "posts"]
