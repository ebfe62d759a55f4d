"""taskdeck 异常体系

存储介质故障与远程获取故障两条分支。
校验类问题（空文本、未知 id）不抛异常，由调用方静默忽略。
"""


class TaskdeckError(Exception):
    """taskdeck 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述（面向用户可读）
            recoverable: 是否可通过重试恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class StorageUnavailableError(TaskdeckError):
    """本地存储介质不可用（配额耗尽、沙箱环境、文件损坏等）

    KeyedStore 捕获此异常后降级为内存状态，不向调用方传播。
    """

    def __init__(self, key: str, original_error: Exception) -> None:
        super().__init__(
            f"存储介质不可用: key={key} -- {original_error}",
            recoverable=True,
        )
        self.key = key
        self.original_error = original_error


class FetchError(TaskdeckError):
    """远程获取失败（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message, recoverable=True)
        self.url = url


class HttpStatusError(FetchError):
    """远程返回非 2xx 状态码

    消息中包含状态码，供 Error 状态直接展示。
    """

    def __init__(self, status_code: int, url: str = "") -> None:
        super().__init__(f"HTTP error! status: {status_code}", url=url)
        self.status_code = status_code


class MalformedResponseError(FetchError):
    """响应体无法解析为 JSON，或结构与预期模型不符"""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Malformed response from {url}: {reason}", url=url)
        self.reason = reason
