"""taskdeck Remote -- 远程只读 REST 资源访问

公开接口导出。
"""

from .client import PlaceholderClient, page_params
from .models import Album, Comment, Company, Photo, Post, User

__all__ = [
    "PlaceholderClient",
    "page_params",
    "Post",
    "User",
    "Company",
    "Album",
    "Photo",
    "Comment",
]
