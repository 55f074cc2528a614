"""The byte stream handed to reading algorithms.

Reads are serviced from a SourceQueue.  When the queue is empty (or
its head would block), the reading thread parks itself on the channel
until the controller supplies more input and continues it.  To the
reading algorithm this is indistinguishable from a slow blocking
file.

readinto1() is the primitive: at most one source read.  readinto()
and read() keep going until the request is filled or the stream ends,
like any io.BufferedIOBase, so pickle, struct framing, etc. work
unmodified.  Nothing is buffered: readline() and iteration come from
io.IOBase and read one byte at a time, so a line reader never consumes
bytes belonging to the next read.
"""
__all__ = ['VirtualStream']
import io
import sys
import threading

from . import channel, sources
from .errors import ProtocolError

_PIECE = 1 << 16

class VirtualStream(io.BufferedIOBase):
    def __init__(self, queue, chan, verbose=False):
        """Initialize a VirtualStream.

        queue: sources.SourceQueue to read from.
        chan: channel.Channel shared with the controller.
        verbose: bool, print a line for every suspension.
        """
        super(VirtualStream, self).__init__()
        self.queue = queue
        self.channel = chan
        self.verbose = verbose
        # The only thread allowed to suspend.  Set by the controller.
        self.worker = None
        self._pos = 0

    def readable(self):
        return True

    def seekable(self):
        return False

    def writable(self):
        return False

    def tell(self):
        """Total number of bytes delivered."""
        return self._pos

    def close(self):
        """Hard close: every later read reports end of stream.

        The stream itself stays usable so readers that close their
        input and read again see b'' instead of an error.
        """
        self.queue.prepend_end()

    def _suspend(self):
        if threading.current_thread() is not self.worker:
            raise ProtocolError(
                'Stream would block outside of an active read')
        if self.verbose:
            print(
                'Suspended at byte', self._pos, 'on',
                threading.current_thread().name, file=sys.stderr)
        self.channel.send(channel.SUSPENDED)
        message = self.channel.recv()
        if message is not channel.CONTINUE:
            raise ProtocolError('Expected CONTINUE, got {!r}'.format(message))

    def readinto1(self, buf):
        """Read up to len(buf) bytes from a single source.

        Return 0 at end of stream.
        """
        view = memoryview(buf).cast('B')
        if not len(view):
            return 0
        queue = self.queue
        while 1:
            if queue.ended:
                return 0
            source = queue.peek()
            if source is None:
                self._suspend()
            else:
                amt = sources.tryread(source, view)
                if amt is None:
                    self._suspend()
                elif amt:
                    self._pos += amt
                    return amt
                else:
                    queue.drop()

    def readinto(self, buf):
        """Fill buf unless the stream ends first."""
        view = memoryview(buf).cast('B')
        total = 0
        target = len(view)
        while total < target:
            amt = self.readinto1(view[total:])
            if not amt:
                break
            total += amt
        return total

    def read1(self, size=-1):
        if size is None or size < 0:
            size = io.DEFAULT_BUFFER_SIZE
        buf = bytearray(size)
        amt = self.readinto1(buf)
        return bytes(buf[:amt])

    def read(self, size=-1):
        if size is None or size < 0:
            return self.readall()
        if size <= _PIECE:
            buf = bytearray(size)
            amt = self.readinto(buf)
            return bytes(buf[:amt])
        # size may come from an untrusted header; allocate as data arrives.
        pieces = []
        remaining = size
        while remaining:
            piece = self.read(min(remaining, _PIECE))
            pieces.append(piece)
            remaining -= len(piece)
            if len(piece) < _PIECE and remaining:
                break
        return b''.join(pieces)

    def readall(self):
        """Read until end of stream."""
        chunks = []
        chunk = self.read1()
        while chunk:
            chunks.append(chunk)
            chunk = self.read1()
        return b''.join(chunks)
