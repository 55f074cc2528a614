import errno
import io

import pytest

from jhsiao.resumable import sources
from jhsiao.resumable.sockfile import Sockfile

def test_queue_order():
    q = sources.SourceQueue()
    assert q.peek() is None
    assert not q.ended
    a, b = io.BytesIO(b'a'), io.BytesIO(b'b')
    q.append(a)
    q.append(b)
    assert q.peek() is a
    q.drop()
    assert q.peek() is b
    q.drop()
    assert q.peek() is None

def test_soft_end():
    a = io.BytesIO(b'a')
    q = sources.SourceQueue([a])
    q.append_end()
    assert q.peek() is a
    assert not q.ended
    q.drop()
    assert q.peek() is sources.END
    assert q.ended

def test_hard_end():
    a = io.BytesIO(b'a')
    q = sources.SourceQueue([a])
    q.prepend_end()
    assert q.peek() is sources.END
    q.append(io.BytesIO(b'b'))
    assert q.peek() is sources.END
    assert q.ended
    q.drop()
    assert q.peek() is a

def test_as_source():
    src = sources.as_source(b'hello')
    assert src.read() == b'hello'
    src = sources.as_source(bytearray(b'hi'))
    assert src.read() == b'hi'
    f = io.BytesIO(b'file')
    assert sources.as_source(f) is f
    with pytest.raises(TypeError):
        sources.as_source('text')
    with pytest.raises(TypeError):
        sources.as_source(42)

def test_as_source_socket():
    import socket
    a, b = socket.socketpair()
    try:
        src = sources.as_source(a)
        assert isinstance(src, Sockfile)
        b.sendall(b'xyz')
        buf = bytearray(8)
        assert src.readinto(buf) == 3
        assert buf[:3] == b'xyz'
        assert src.tell() == 3
    finally:
        a.close()
        b.close()

def test_read_adapter():
    class ReadOnly(object):
        def __init__(self, data):
            self.data = data
        def read(self, amt):
            ret, self.data = self.data[:amt], self.data[amt:]
            return ret

    src = sources.as_source(ReadOnly(b'abcdef'))
    assert isinstance(src, sources.ReadAdapter)
    buf = bytearray(4)
    assert src.readinto(buf) == 4
    assert buf == b'abcd'
    assert src.readinto(buf) == 2
    assert buf[:2] == b'ef'
    assert src.readinto(buf) == 0

def test_tryread():
    class Flaky(object):
        def __init__(self):
            self.calls = []
        def readinto(self, buf):
            self.calls.append(1)
            if len(self.calls) == 1:
                raise InterruptedError(errno.EINTR, 'interrupted')
            if len(self.calls) == 2:
                raise BlockingIOError(errno.EAGAIN, 'again')
            buf[:1] = b'x'
            return 1

    src = Flaky()
    buf = bytearray(1)
    assert sources.tryread(src, buf) is None
    assert len(src.calls) == 2
    assert sources.tryread(src, buf) == 1
    assert buf == b'x'

    class Broken(object):
        def readinto(self, buf):
            raise OSError(errno.EIO, 'io error')
    with pytest.raises(OSError):
        sources.tryread(Broken(), buf)
