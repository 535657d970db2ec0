import numpy as np
import pytest

from maze_solver.training.replay import ReplayBuffer, Transition, stack_batch


def make_transition(i: int) -> Transition:
    s = np.full(8, i, dtype=np.float32)
    return Transition(s=s, a=i % 4, r=float(i), s2=s + 1, done=False)


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ReplayBuffer(0)


def test_fifo_eviction():
    buf = ReplayBuffer(1000)
    transitions = [make_transition(i) for i in range(1001)]
    for t in transitions:
        buf.push(t)

    assert len(buf) == 1000
    assert buf[0] is transitions[1]
    assert buf[-1] is transitions[1000]


def test_size_never_exceeds_capacity():
    buf = ReplayBuffer(5)
    for i in range(20):
        buf.push(make_transition(i))
        assert len(buf) <= 5
    assert [t.r for t in buf] == [15.0, 16.0, 17.0, 18.0, 19.0]


def test_sample_refuses_when_short():
    buf = ReplayBuffer(100)
    for i in range(15):
        buf.push(make_transition(i))
    assert not buf.can_sample(16)
    assert buf.sample(16) is None

    buf.push(make_transition(15))
    assert buf.can_sample(16)
    assert len(buf.sample(16)) == 16


def test_sample_draws_distinct_entries():
    buf = ReplayBuffer(100)
    for i in range(40):
        buf.push(make_transition(i))

    for _ in range(20):
        batch = buf.sample(16)
        assert len({id(t) for t in batch}) == 16


def test_sample_of_full_size_returns_everything():
    buf = ReplayBuffer(100)
    for i in range(16):
        buf.push(make_transition(i))
    rewards = sorted(t.r for t in buf.sample(16))
    assert rewards == [float(i) for i in range(16)]


def test_clear():
    buf = ReplayBuffer(10)
    buf.push(make_transition(0))
    buf.clear()
    assert len(buf) == 0


def test_stack_batch_shapes():
    batch = [make_transition(i) for i in range(4)]
    s, a, r, s2, done = stack_batch(batch)
    assert s.shape == (4, 8) and s2.shape == (4, 8)
    assert s.dtype == np.float32
    assert a.dtype == np.int64
    np.testing.assert_array_equal(a, [0, 1, 2, 3])
    np.testing.assert_array_equal(done, [0.0, 0.0, 0.0, 0.0])
