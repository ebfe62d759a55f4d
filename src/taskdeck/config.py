"""配置模块 -- 从环境变量加载

包含数据目录、SQLite 路径、远程 API 地址、分页大小、搜索防抖时长等可配置项。
无效数值不阻塞启动，记录 warning 后回退默认值。
"""

import os
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

# 任务集合在 KeyedStore 中的逻辑 key
TASKS_STORAGE_KEY: str = "tasks"

DEFAULT_API_BASE_URL: str = "https://jsonplaceholder.typicode.com"


def _get_base_dir() -> Path:
    """获取数据基础目录"""
    return Path(os.environ.get("TASKDECK_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKDECK_DB_PATH",
        str(_get_base_dir() / "taskdeck.db"),
    )


class AppConfig(BaseModel):
    """运行时配置

    环境变量:
        TASKDECK_DB_PATH: SQLite 文件路径（默认 <TASKDECK_DATA_DIR>/taskdeck.db）
        TASKDECK_API_BASE_URL: 远程 REST 资源地址
        TASKDECK_HTTP_TIMEOUT_S: HTTP 超时（秒，默认 10）
        TASKDECK_PAGE_SIZE: 每页条数（默认 10）
        TASKDECK_SEARCH_DEBOUNCE_MS: 搜索防抖（毫秒，默认 300）
    """

    db_path: str = Field(default_factory=get_db_path, description="SQLite 数据库路径")
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="远程 REST 资源基础 URL",
    )
    http_timeout_s: float = Field(default=10, ge=1, description="HTTP 请求超时（秒）")
    page_size: int = Field(default=10, ge=1, description="分页大小")
    search_debounce_ms: int = Field(default=300, ge=0, description="搜索防抖时长（毫秒）")

    @property
    def search_debounce_s(self) -> float:
        return self.search_debounce_ms / 1000


# 数值型环境变量 -> (字段名, 类型, 最小值)
_NUMERIC_ENV_VARS: dict[str, tuple[str, type, float]] = {
    "TASKDECK_HTTP_TIMEOUT_S": ("http_timeout_s", float, 1),
    "TASKDECK_PAGE_SIZE": ("page_size", int, 1),
    "TASKDECK_SEARCH_DEBOUNCE_MS": ("search_debounce_ms", int, 0),
}


def load_config() -> AppConfig:
    """从环境变量加载运行时配置

    Returns:
        AppConfig 实例
    """
    kwargs: dict = {"db_path": get_db_path()}

    if val := os.environ.get("TASKDECK_API_BASE_URL"):
        kwargs["api_base_url"] = val.rstrip("/")

    for env_var, (field_name, cast, minimum) in _NUMERIC_ENV_VARS.items():
        val = os.environ.get(env_var)
        if not val:
            continue
        try:
            parsed = cast(val)
        except ValueError:
            parsed = None
        default = AppConfig.model_fields[field_name].default
        if parsed is None or parsed < minimum:
            log.warning(
                "invalid_numeric_config",
                env_var=env_var,
                value=val,
                fallback=default,
            )
            # 使用默认值，不阻塞启动
            continue
        kwargs[field_name] = parsed

    return AppConfig(**kwargs)
