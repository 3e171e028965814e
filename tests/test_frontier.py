from site_mirror.crawler.frontier import Frontier
from site_mirror.crawler.models import FrontierEntry


def test_empty_frontier_pops_none():
    frontier = Frontier()
    assert frontier.is_empty()
    assert not frontier
    assert frontier.pop() is None


def test_push_all_pops_last_element_first():
    frontier = Frontier()
    frontier.push_all(["u1", "u2", "u3"])
    assert frontier.pop().url == "u3"
    assert [frontier.pop().url, frontier.pop().url] == ["u2", "u1"]
    assert frontier.is_empty()


def test_push_interleaves_as_stack():
    frontier = Frontier()
    frontier.push("home")
    frontier.push_all(["a", "b"], depth=1)
    frontier.push("c", depth=2)
    assert frontier.pop() == FrontierEntry("c", 2)
    assert frontier.pop() == FrontierEntry("b", 1)
    assert len(frontier) == 2


def test_no_deduplication_at_insertion():
    frontier = Frontier()
    count = frontier.push_all(["a", "a", "a"])
    assert count == 3
    assert len(frontier) == 3


def test_push_all_accepts_generator():
    frontier = Frontier()
    frontier.push_all(u for u in ("x", "y"))
    assert frontier.pop().url == "y"
