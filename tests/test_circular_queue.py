import pytest

from gost.circular_queue import FAST_GROW_THRESHOLD, CircularUnboundedQueue


def test_without_growing():
    queue = CircularUnboundedQueue(10)
    queue.reset()

    queue.push(1)
    assert len(queue) == 1
    assert queue.cap() == 10
    assert queue.peek() == 1
    assert queue.pop() == 1
    assert len(queue) == 0
    assert queue.cap() == 10

    for i in range(8):
        queue.push(i)
    assert len(queue) == 8
    assert queue.cap() == 10

    for i in range(5):
        assert queue.pop() == i
    assert len(queue) == 3
    assert queue.cap() == 10

    for i in range(6):
        queue.push(i)
    assert len(queue) == 9
    assert queue.cap() == 10


def test_with_growing():
    queue = CircularUnboundedQueue(10)
    for i in range(11):
        queue.push(i)
    assert len(queue) == 11
    assert queue.cap() == 20

    queue.reset()
    assert len(queue) == 0
    assert queue.cap() == 10

    for i in range(8):
        queue.push(i)
        queue.pop()
    for i in range(11):
        queue.push(i)
    assert len(queue) == 11
    assert queue.cap() == 20
    assert [queue.pop() for _ in range(11)] == list(range(11))

    queue = CircularUnboundedQueue(FAST_GROW_THRESHOLD)
    for i in range(FAST_GROW_THRESHOLD + 1):
        queue.push(i)
    assert len(queue) == FAST_GROW_THRESHOLD + 1
    assert queue.cap() == FAST_GROW_THRESHOLD + FAST_GROW_THRESHOLD // 4

    queue.reset()
    assert len(queue) == 0
    assert queue.cap() == FAST_GROW_THRESHOLD


def test_with_quota():
    queue = CircularUnboundedQueue(10, 9)
    assert len(queue) == 0
    assert queue.cap() == 9

    queue = CircularUnboundedQueue(10, 15)
    for i in range(10):
        assert queue.push(i) is True
    assert len(queue) == 10
    assert queue.cap() == 10

    for i in range(10):
        assert queue.pop() == i

    for i in range(15):
        assert queue.push(i) is True
    assert len(queue) == 15
    assert queue.cap() == 15


def test_push_fails_when_quota_reached():
    queue = CircularUnboundedQueue(2, 2)
    assert queue.push("a") is True
    assert queue.push("b") is True
    assert queue.push("c") is False
    assert [queue.pop(), queue.pop()] == ["a", "b"]


def test_zero_capacity_grows():
    queue = CircularUnboundedQueue(0)
    assert queue.cap() == 0
    assert queue.push("x") is True
    assert queue.cap() == 2
    assert queue.initial_cap() == 0
    assert queue.pop() == "x"


def test_pop_and_peek_empty_raise():
    queue = CircularUnboundedQueue(3)
    with pytest.raises(IndexError):
        queue.pop()
    with pytest.raises(IndexError):
        queue.peek()


@pytest.mark.parametrize("capacity, quota", [(-1, 0), (1, -1)])
def test_invalid_arguments(capacity, quota):
    with pytest.raises(ValueError):
        CircularUnboundedQueue(capacity, quota)