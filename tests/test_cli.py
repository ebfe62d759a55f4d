"""CLI 端到端测试 -- tasks 子命令读写同一个 SQLite 文件"""

import re

import pytest
from taskdeck.__main__ import main


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TASKDECK_DB_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("TASKDECK_LOG_LEVEL", "ERROR")


def _run(capsys, *args: str) -> str:
    main(list(args))
    return capsys.readouterr().out


def _ids(output: str) -> list[str]:
    return re.findall(r"\] (\w{26}) ", output)


class TestTasksCommand:
    def test_add_list_toggle_stats(self, capsys):
        _run(capsys, "tasks", "add", "买", "牛奶")
        _run(capsys, "tasks", "add", "写代码")

        listing = _run(capsys, "tasks", "list")
        assert "买 牛奶" in listing
        assert "写代码" in listing
        first_id = _ids(listing)[0]

        _run(capsys, "tasks", "toggle", first_id)
        assert "买 牛奶" in _run(capsys, "tasks", "list", "completed")
        assert "买 牛奶" not in _run(capsys, "tasks", "list", "active")

        stats = _run(capsys, "tasks", "stats")
        assert "总计 2" in stats
        assert "完成率 50%" in stats

    def test_edit_and_remove(self, capsys):
        task_id = _ids(_run(capsys, "tasks", "add", "draft"))[0]
        _run(capsys, "tasks", "edit", task_id, "final", "text")
        assert "final text" in _run(capsys, "tasks", "list")

        _run(capsys, "tasks", "rm", task_id)
        assert "暂无任务" in _run(capsys, "tasks", "list")

    def test_clear_completed(self, capsys):
        done_id = _ids(_run(capsys, "tasks", "add", "done"))[0]
        _run(capsys, "tasks", "add", "todo")
        _run(capsys, "tasks", "toggle", done_id)

        _run(capsys, "tasks", "clear", "--completed")
        listing = _run(capsys, "tasks", "list")
        assert "todo" in listing
        assert "done" not in listing

    def test_blank_add_exits_nonzero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["tasks", "add", "   "])
        assert exc_info.value.code == 1

    def test_unknown_command(self, capsys):
        with pytest.raises(SystemExit):
            main(["bogus"])
        assert "未知命令" in capsys.readouterr().out


class TestPostsCommand:
    def test_page_zero_is_rejected_before_any_request(self, capsys, monkeypatch):
        # 指向不可达地址：若发出请求会得到 "获取失败" 而非用法提示
        monkeypatch.setenv("TASKDECK_API_BASE_URL", "http://127.0.0.1:9")
        with pytest.raises(SystemExit) as exc_info:
            main(["posts", "0"])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "页码必须 >= 1" in out
        assert "获取失败" not in out
