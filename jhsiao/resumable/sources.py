"""Queue of byte sources.

A source is anything with `readinto(buf)` following the io convention:
positive int for bytes read, 0 when exhausted, None when it would
block.  The queue may also hold END, a marker meaning no more sources
will follow.  Where END is inserted decides when it is seen:

    append_end(): soft close.  Sources already queued are read first.
    prepend_end(): hard close.  Seen immediately and never removed.

Nothing here blocks or knows about threads.
"""
__all__ = [
    'END',
    'WOULDBLOCK',
    'SourceQueue',
    'ReadAdapter',
    'as_source',
    'tryread',
]
import collections
import errno
import io
import platform
import socket

EINTR = getattr(errno, 'EINTR', 4)
EAGAIN = getattr(errno, 'EAGAIN', 11)
EWOULDBLOCK = getattr(
    errno,
    'EWOULDBLOCK',
    10035 if platform.system() == 'Windows' else 11)

WOULDBLOCK = set([EAGAIN, EWOULDBLOCK])

class _End(object):
    def __repr__(self):
        return 'END'

END = _End()

class SourceQueue(object):
    """FIFO of sources and END markers."""
    def __init__(self, sources=()):
        self.q = collections.deque(sources)

    def append(self, source):
        self.q.append(source)

    def extend(self, sources):
        self.q.extend(sources)

    def append_end(self):
        """Soft close: END after everything currently queued."""
        self.q.append(END)

    def prepend_end(self):
        """Hard close: END before everything currently queued."""
        self.q.appendleft(END)

    def peek(self):
        """Return the head or None if empty."""
        return self.q[0] if self.q else None

    def drop(self):
        """Remove the head."""
        self.q.popleft()

    @property
    def ended(self):
        """Whether END is at the head."""
        return bool(self.q) and self.q[0] is END


class ReadAdapter(object):
    """Give a read(n)-only object a readinto()."""
    def __init__(self, f):
        self.f = f

    def readinto(self, buf):
        view = memoryview(buf).cast('B')
        data = self.f.read(len(view))
        if data is None:
            return None
        amt = len(data)
        view[:amt] = data
        return amt

    def close(self):
        close = getattr(self.f, 'close', None)
        if close is not None:
            close()


def as_source(obj):
    """Convert obj into something suitable for a SourceQueue.

    bytes-like objects are copied into a BytesIO, sockets are wrapped
    in a Sockfile, objects with readinto() are used as is and objects
    with only read() are wrapped in a ReadAdapter.
    """
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(obj))
    if isinstance(obj, str):
        raise TypeError('Sources must be bytes, not str')
    if isinstance(obj, socket.socket):
        from .sockfile import Sockfile
        return Sockfile(obj, owned=False)
    if hasattr(obj, 'readinto'):
        return obj
    if hasattr(obj, 'read'):
        return ReadAdapter(obj)
    raise TypeError(
        'Cannot read from {!r}: expected bytes or a readable'.format(
            type(obj).__name__))


def tryread(source, buf):
    """Read from source into buf.

    EINTR is retried.  EAGAIN and EWOULDBLOCK become None.  Any other
    error propagates.
    """
    while 1:
        try:
            return source.readinto(buf)
        except EnvironmentError as e:
            if e.errno in WOULDBLOCK:
                return None
            elif e.errno != EINTR:
                raise
