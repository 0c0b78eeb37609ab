from bencast.cursor import Cursor


def test_peek_and_advance():
    cur = Cursor(b"ab")
    assert cur.peek() == ord("a")
    cur.advance()
    assert cur.peek() == ord("b")
    cur.advance()
    assert cur.peek() is None
    assert cur.exhausted


def test_advance_saturates_at_end():
    cur = Cursor(b"x")
    for _ in range(5):
        cur.advance()
    assert cur.pos == 1
    assert cur.remaining == 0
    assert cur.peek() is None


def test_empty_buffer():
    cur = Cursor(b"")
    assert cur.peek() is None
    assert cur.exhausted


def test_take_moves_past_chunk():
    data = b"spam:eggs"
    cur = Cursor(data)
    assert cur.take(4) == b"spam"
    assert cur.pos == 4
    assert cur.data is data
