"""CLI 入口模块 -- python -m taskdeck <command>

支持的命令：
  tasks list [all|active|completed]   列出任务
  tasks add <text>                    新增任务
  tasks toggle <id>                   切换完成状态
  tasks edit <id> <text>              修改任务文本
  tasks rm <id>                       删除任务
  tasks clear [--completed]           清空全部 / 已完成任务
  tasks stats                         任务统计
  posts [page] [query]                浏览远程帖子（分页 + 搜索）
"""

import asyncio
import sys

from .config import AppConfig, load_config
from .logging_config import setup_logging

USAGE = """用法: python -m taskdeck <command>
命令:
  tasks list [all|active|completed]
  tasks add <text>
  tasks toggle <id>
  tasks edit <id> <text>
  tasks rm <id>
  tasks clear [--completed]
  tasks stats
  posts [page] [query]"""


def main(argv: list[str] | None = None) -> None:
    """CLI 主入口"""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE)
        sys.exit(1)

    setup_logging()
    config = load_config()
    command, rest = args[0], args[1:]

    if command == "tasks":
        code = asyncio.run(run_tasks_command(config, rest))
    elif command == "posts":
        code = asyncio.run(run_posts_command(config, rest))
    else:
        print(f"未知命令: {command}")
        print(USAGE)
        code = 1
    if code:
        sys.exit(code)


def _format_task(task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] {task.id}  {task.text}  ({task.created_at:%Y-%m-%d})"


async def run_tasks_command(config: AppConfig, args: list[str]) -> int:
    """执行 tasks 子命令"""
    from .core.repository import TaskRepository
    from .core.store import create_keyed_store

    if not args:
        print(USAGE)
        return 1

    store = await create_keyed_store(config.db_path)
    try:
        repo = await TaskRepository.open(store)
        action, params = args[0], args[1:]

        if action == "list":
            task_filter = params[0] if params else "all"
            tasks = repo.filtered_tasks(task_filter)
            if not tasks:
                print("暂无任务")
            for task in tasks:
                print(_format_task(task))
        elif action == "add" and params:
            task = await repo.add_task(" ".join(params))
            if task is None:
                print("任务文本为空，已忽略")
                return 1
            print(_format_task(task))
        elif action == "toggle" and len(params) == 1:
            await repo.toggle_task(params[0])
        elif action == "edit" and len(params) >= 2:
            await repo.update_task(params[0], " ".join(params[1:]))
        elif action == "rm" and len(params) == 1:
            await repo.delete_task(params[0])
        elif action == "clear":
            if "--completed" in params:
                await repo.clear_completed_tasks()
            else:
                await repo.clear_all_tasks()
        elif action == "stats":
            stats = repo.stats()
            print(
                f"总计 {stats.total}  进行中 {stats.active}  "
                f"已完成 {stats.completed}  完成率 {stats.completion_rate}%"
            )
        else:
            print(USAGE)
            return 1
        return 0
    finally:
        await store.medium.close()


async def run_posts_command(config: AppConfig, args: list[str]) -> int:
    """执行 posts 子命令：取一页帖子，再经防抖搜索过滤"""
    from .remote.client import PlaceholderClient
    from .sync.paging import PagedResource
    from .sync.search import SearchIndex

    page = 1
    if args and args[0].isdigit():
        page = int(args[0])
        args = args[1:]
        if page < 1:
            print(f"页码必须 >= 1: {page}")
            print(USAGE)
            return 1
    query = " ".join(args)

    async with PlaceholderClient(
        base_url=config.api_base_url,
        timeout_s=config.http_timeout_s,
    ) as client:
        async with PagedResource(client.get_posts, page_size=config.page_size) as paged:
            await paged.go_to_page(page)
            if paged.error:
                print(f"获取失败: {paged.error}")
                return 1

            committed: asyncio.Future[str] = asyncio.get_running_loop().create_future()
            search = SearchIndex(
                paged.accumulated,
                debounce_s=config.search_debounce_s,
                on_commit=lambda q: committed.done() or committed.set_result(q),
            )
            try:
                if query:
                    search.set_query(query)
                    await committed
                results = search.results
            finally:
                search.dispose()

    print(f"第 {page} 页，共 {len(results)} 条")
    for post in results:
        print(f"#{post.id}  {post.title}")
    return 0


if __name__ == "__main__":
    main()
