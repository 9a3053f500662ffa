"""
Tests for the progress channel.
"""

import queue
import threading
from concurrent.futures import ThreadPoolExecutor

from pdfsearch.search.progress import ProgressChannel


class TestProgressChannel:
    """Tests for ProgressChannel class."""

    def test_publish_counts_up(self):
        channel = ProgressChannel(total=2)

        first = channel.publish("/a.pdf")
        second = channel.publish("/b.pdf")

        assert (first.current, first.total, first.current_file) == (1, 2, "/a.pdf")
        assert second.current == 2
        assert channel.current == 2

    def test_callback_receives_events(self):
        channel = ProgressChannel(total=1)
        received = []
        channel.subscribe(received.append)

        channel.publish("/a.pdf")

        assert [e.current_file for e in received] == ["/a.pdf"]

    def test_concurrent_publish_is_gapless_and_ordered(self):
        """Test that subscribers see 1..N exactly once, in order."""
        total = 200
        channel = ProgressChannel(total=total)
        seen = []
        channel.subscribe(lambda event: seen.append(event.current))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: channel.publish(f"/doc{i}.pdf"), range(total)))

        assert seen == list(range(1, total + 1))

    def test_failing_callback_is_ignored(self):
        channel = ProgressChannel(total=2)
        received = []

        def broken(event):
            raise RuntimeError("display closed")

        channel.subscribe(broken)
        channel.subscribe(received.append)

        channel.publish("/a.pdf")
        channel.publish("/b.pdf")

        assert [e.current for e in received] == [1, 2]

    def test_queue_subscriber(self):
        channel = ProgressChannel(total=2)
        events = channel.subscribe_queue()

        channel.publish("/a.pdf")
        channel.publish("/b.pdf")

        assert events.get_nowait().current == 1
        assert events.get_nowait().current == 2

    def test_full_queue_drops_events(self):
        channel = ProgressChannel(total=3)
        events = channel.subscribe_queue(maxsize=1)

        for name in ("a", "b", "c"):
            channel.publish(f"/{name}.pdf")

        assert events.get_nowait().current == 1
        assert events.empty()

    def test_callback_can_read_current(self):
        """Test that a callback reading the counter does not block publish."""
        channel = ProgressChannel(total=2)
        seen = []
        channel.subscribe(lambda event: seen.append(channel.current))

        publisher = threading.Thread(
            target=lambda: [channel.publish(f"/{name}.pdf") for name in ("a", "b")],
            daemon=True
        )
        publisher.start()
        publisher.join(timeout=5)

        assert not publisher.is_alive()
        assert seen == [1, 2]

    def test_callback_can_subscribe(self):
        channel = ProgressChannel(total=2)
        late = []
        channel.subscribe(lambda event: channel.subscribe(late.append) if event.current == 1 else None)

        channel.publish("/a.pdf")
        channel.publish("/b.pdf")

        assert [e.current for e in late] == [2]

    def test_unsubscribe(self):
        channel = ProgressChannel(total=2)
        received = []
        events = channel.subscribe_queue()
        channel.subscribe(received.append)

        channel.publish("/a.pdf")
        channel.unsubscribe(received.append)
        channel.unsubscribe(events)
        channel.publish("/b.pdf")

        assert [e.current for e in received] == [1]
        assert events.qsize() == 1

    def test_unsubscribe_unknown_is_ignored(self):
        channel = ProgressChannel()

        channel.unsubscribe(print)

        assert channel.publish("/a.pdf").current == 1

    def test_queue_consumed_from_another_thread(self):
        channel = ProgressChannel(total=3)
        events = channel.subscribe_queue()
        received = []

        def consume():
            for _ in range(3):
                received.append(events.get(timeout=5).current)

        consumer = threading.Thread(target=consume)
        consumer.start()
        for name in ("a", "b", "c"):
            channel.publish(f"/{name}.pdf")
        consumer.join(timeout=5)

        assert received == [1, 2, 3]

    def test_reset(self):
        channel = ProgressChannel(total=1)
        channel.publish("/a.pdf")

        channel.reset(5)

        assert channel.current == 0
        assert channel.publish("/b.pdf").total == 5

    def test_queue_type(self):
        assert isinstance(ProgressChannel().subscribe_queue(), queue.Queue)
