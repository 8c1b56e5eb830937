import asyncio
import threading

from core import DataError
from core.desktop.devtools.interface.tui_events import DataFailed, TaskDeleted
from core.desktop.devtools.interface.tui_runner import InlineRunner, ThreadedRunner


def test_inline_runner_posts_result():
    posted = []
    InlineRunner().submit("delete_task", lambda: TaskDeleted(3), posted.append)
    assert posted == [TaskDeleted(3)]


def test_inline_runner_skips_none_results():
    posted = []
    InlineRunner().submit("save_last_project", lambda: None, posted.append)
    assert posted == []


def test_inline_runner_converts_data_error():
    posted = []

    def work():
        raise DataError("list_tasks_filtered", "database is locked")

    InlineRunner().submit("list_tasks", work, posted.append)
    assert posted == [DataFailed("list_tasks", "database is locked")]


def test_threaded_runner_posts_on_loop_thread():
    async def scenario():
        runner = ThreadedRunner()
        loop_thread = threading.get_ident()
        seen = []
        done = asyncio.Event()
        work_threads = []

        def work():
            work_threads.append(threading.get_ident())
            return TaskDeleted(1)

        def fail():
            raise DataError("delete_task", "gone")

        def post(event):
            seen.append((event, threading.get_ident()))
            if len(seen) == 2:
                done.set()

        runner.submit("delete_task", work, post)
        runner.submit("delete_task", fail, post)
        await asyncio.wait_for(done.wait(), timeout=5)
        runner.shutdown()
        return loop_thread, work_threads, seen

    loop_thread, work_threads, seen = asyncio.run(scenario())
    assert work_threads and work_threads[0] != loop_thread
    assert [event for event, _ in seen] == [TaskDeleted(1), DataFailed("delete_task", "gone")]
    assert all(thread == loop_thread for _, thread in seen)
