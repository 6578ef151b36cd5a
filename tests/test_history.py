from proxy_browser import Bookmarks, History, bookmark_label


def make_history(*urls):
    h = History()
    for url in urls:
        h.visit(url)
    return h


def test_empty_history():
    h = History()
    assert h.cursor == -1
    assert h.entries == []
    assert h.current() is None
    assert h.back() is None
    assert h.forward() is None


def test_visit_moves_cursor_to_tail():
    h = make_history("A", "B", "C")
    assert h.entries == ["A", "B", "C"]
    assert h.cursor == 2
    assert h.current() == "C"


def test_back_and_forward_replay():
    h = make_history("A", "B", "C")
    assert h.back() == "B"
    assert h.back() == "A"
    assert h.back() is None
    assert h.cursor == 0
    assert h.forward() == "B"
    assert h.forward() == "C"
    assert h.forward() is None
    assert h.cursor == 2
    assert h.entries == ["A", "B", "C"]


def test_visit_from_middle_truncates_forward_entries():
    h = make_history("A", "B", "C")
    h.back()
    h.visit("D")
    assert h.entries == ["A", "B", "D"]
    assert h.cursor == 2
    assert not h.can_go_forward()


def test_can_go_flags():
    h = make_history("A")
    assert not h.can_go_back()
    assert not h.can_go_forward()
    h.visit("B")
    assert h.can_go_back()
    h.back()
    assert h.can_go_forward()


def test_bookmarks_are_unique_and_ordered():
    b = Bookmarks()
    assert b.add("https://b.test/")
    assert b.add("https://a.test/x")
    assert not b.add("https://b.test/")
    assert not b.add("")
    assert list(b) == ["https://b.test/", "https://a.test/x"]
    assert "https://a.test/x" in b
    assert len(b) == 2


def test_bookmark_labels_use_hostname():
    b = Bookmarks()
    b.add("https://news.example.com:8080/path?q=1")
    assert b.labels() == ["news.example.com"]
    assert bookmark_label("http") == "http"
