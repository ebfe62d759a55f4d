"""taskdeck -- 客户端数据同步核心

持久化任务列表 + 远程只读 REST 资源的分页/搜索浏览。
"""

__version__ = "0.1.0"
