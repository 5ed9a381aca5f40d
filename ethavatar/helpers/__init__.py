# ethavatar/helpers/__init__.py
"""
EthAvatar Helpers

    FileHelper: to_file() / from_file()
    UrlHelper:  to_url() / from_url()
"""

from .file import FileHelper
from .url import UrlHelper

__all__ = ["FileHelper", "UrlHelper"]
