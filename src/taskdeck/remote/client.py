"""PlaceholderClient -- 远程只读 REST 资源封装

通过 httpx.AsyncClient 发起 GET，约定：
- 非 2xx 状态 -> HttpStatusError（消息包含状态码）
- 响应体不是 JSON 或结构不符 -> MalformedResponseError
- 连接失败、超时 -> FetchError
所有异常记录日志后抛出，由 AsyncResource 收敛为 ERROR 状态。
"""

import time
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import DEFAULT_API_BASE_URL
from ..exceptions import FetchError, HttpStatusError, MalformedResponseError
from .models import Album, Comment, Photo, Post, User

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def page_params(page: int, limit: int) -> dict[str, int]:
    """页码 -> offset/limit 查询参数（页码从 1 开始）"""
    page = max(page, 1)
    return {"_start": (page - 1) * limit, "_limit": limit}


class PlaceholderClient:
    """远程资源客户端

    可传入自有 httpx.AsyncClient（测试时配合 MockTransport），
    否则内部创建并在 aclose() 时关闭。
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout_s: float = 10,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout_s,
            headers={"Content-Type": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "PlaceholderClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ---- 资源端点 ----

    async def get_posts(self, page: int = 1, limit: int = 10) -> list[Post]:
        """分页获取帖子"""
        return await self._get_list("/posts", Post, params=page_params(page, limit))

    async def get_all_posts(self) -> list[Post]:
        """获取全部帖子（用于搜索）"""
        return await self._get_list("/posts", Post)

    async def get_post(self, post_id: int) -> Post:
        return await self._get_one(f"/posts/{post_id}", Post)

    async def get_users(self) -> list[User]:
        return await self._get_list("/users", User)

    async def get_user(self, user_id: int) -> User:
        return await self._get_one(f"/users/{user_id}", User)

    async def get_albums(self) -> list[Album]:
        return await self._get_list("/albums", Album)

    async def get_photos(self, page: int = 1, limit: int = 20) -> list[Photo]:
        """分页获取图片"""
        return await self._get_list("/photos", Photo, params=page_params(page, limit))

    async def get_comments(self, post_id: int) -> list[Comment]:
        return await self._get_list(f"/posts/{post_id}/comments", Comment)

    # ---- 内部 ----

    async def _get_list(
        self,
        path: str,
        model: type[ModelT],
        params: dict[str, Any] | None = None,
    ) -> list[ModelT]:
        url, payload = await self._get_json(path, params)
        return self._validate(url, TypeAdapter(list[model]), payload)

    async def _get_one(self, path: str, model: type[ModelT]) -> ModelT:
        url, payload = await self._get_json(path)
        return self._validate(url, TypeAdapter(model), payload)

    @staticmethod
    def _validate(url: str, adapter: TypeAdapter, payload: Any) -> Any:
        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            log.error("remote_schema_mismatch", url=url, error_count=e.error_count())
            raise MalformedResponseError(url, f"{e.error_count()} validation error(s)") from e

    async def _get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> tuple[str, Any]:
        url = f"{self._base_url}{path}"
        start_time = time.monotonic()

        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as e:
            log.error(
                "remote_fetch_failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise FetchError(f"Network error: {str(e) or type(e).__name__}", url=url) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)

        if not response.is_success:
            log.warning(
                "remote_http_error",
                url=url,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            raise HttpStatusError(response.status_code, url=url)

        try:
            payload = response.json()
        except ValueError as e:
            log.error("remote_malformed_body", url=url, error=str(e))
            raise MalformedResponseError(url, "body is not valid JSON") from e

        log.debug(
            "remote_fetch_completed",
            url=url,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return url, payload
