"""Use a socket as a readable source."""
__all__ = ['Sockfile']
import functools
import io
import socket

from . import sources

class Sockfile(io.RawIOBase):
    """Wrap a connected socket for reading.

    recv_into is used directly so no extra copies are made.  Timeouts
    and EAGAIN/EWOULDBLOCK are reported as None (would block) so a
    non-blocking socket can be queued before its data arrives.

    A peer that shuts down its write side makes readinto() return 0
    and the socket is treated as exhausted.

    Unless owned, close() only detaches: the socket still belongs to
    the caller, who may keep writing replies on it.
    """
    def __init__(self, sock, owned=False):
        """Wrap a socket.

        sock: socket to read from.
        owned: bool, shutdown(SHUT_RD) and close the socket on close.
        """
        super(Sockfile, self).__init__()
        self.socket = sock
        self.owned = owned
        self._readinto = self._block_to_none(sock.recv_into)
        self._rpos = 0
        self.fileno = sock.fileno

    def detach(self):
        """Set closed state and return the wrapped socket."""
        io.RawIOBase.close(self)
        ret = self.socket
        self.socket = None
        return ret

    def close(self):
        if self.socket is None:
            return
        sock = self.detach()
        if self.owned:
            try:
                sock.shutdown(socket.SHUT_RD)
            except OSError:
                pass
            sock.close()

    def readable(self):
        return True

    def seekable(self):
        return False

    def tell(self):
        """Number of bytes read so far."""
        return self._rpos

    @staticmethod
    def _block_to_none(func):
        """Convert socket timeout and EAGAIN, EWOULDBLOCK to None."""
        @functools.wraps(func)
        def wrap(arg):
            try:
                return func(arg)
            except socket.timeout:
                return None
            except EnvironmentError as e:
                if e.errno in sources.WOULDBLOCK:
                    return None
                raise
        return wrap

    def readinto(self, buf):
        amt = self._readinto(buf)
        if amt:
            self._rpos += amt
        return amt
