"""Drive a blocking reader with input that arrives in pieces.

A Feed owns a queue of sources and a VirtualStream over it.  read()
runs a reading algorithm on the stream in a worker thread.  If the
algorithm finishes, its result is returned.  If it runs out of input,
the worker parks itself mid-call and read() returns a Suspended
instead.  Add more input with extend() (or end the input with end())
and call the Suspended to continue exactly where the algorithm left
off.

    f = Feed(b'hello wo')
    r = f.read(lambda s: s.readline())   # Suspended
    f.extend(b'rld\\n')
    r.resume()                           # b'hello world\\n'

Only one read may be in flight at a time.  Errors raised by the
algorithm or by a source are re-raised by whichever call (read or
resume) ends the read.
"""
__all__ = ['Feed', 'Suspended']
import sys
import threading
import traceback

import outcome

from . import channel, sources, stream
from .errors import ProtocolError

class Suspended(object):
    """A paused read.  Call resume() (or the object) once to continue.

    Only the Suspended most recently returned by a Feed is valid and
    only until it is resumed.
    """
    def __init__(self, feed, worker):
        self.feed = feed
        self.worker = worker

    def resume(self):
        """Continue the read.  Same return as Feed.read()."""
        return self.feed.resume(self)

    __call__ = resume

    @property
    def valid(self):
        return self.feed.suspended is self

    def __repr__(self):
        return '<Suspended read on {} ({})>'.format(
            self.worker.name, 'valid' if self.valid else 'stale')


class Feed(object):
    """Incremental input for blocking readers."""
    def __init__(self, *srcs, verbose=False, daemon=True):
        """Initialize a Feed.

        srcs: initial sources, see `sources.as_source`.
        verbose: bool, print read lifecycle events to stderr.
        daemon: bool, run workers as daemon threads.  A parked worker
            that is never resumed will not keep the process alive.
        """
        self.queue = sources.SourceQueue(map(sources.as_source, srcs))
        self.channel = channel.Channel()
        self.stream = stream.VirtualStream(self.queue, self.channel, verbose)
        self.worker = None
        self.verbose = verbose
        self.daemon = daemon
        self._pending = None
        self._count = 0

    def __enter__(self):
        return self

    def __exit__(self, tp, exc, tb):
        self.close()

    @property
    def active(self):
        """Whether a read is running or suspended."""
        return self.worker is not None

    @property
    def suspended(self):
        """The outstanding Suspended, if any."""
        return self._pending

    def extend(self, *srcs):
        """Queue more sources after the current ones."""
        self.queue.extend([sources.as_source(src) for src in srcs])

    def end(self):
        """No more sources.  Queued sources are still read."""
        self.queue.append_end()

    def close(self):
        """End of stream now, regardless of queued sources.  Permanent."""
        self.stream.close()

    def read(self, func, *args, **kwargs):
        """Run func(stream, *args, **kwargs) until it returns or suspends.

        Return func's result or a Suspended.
        """
        if self.worker is not None:
            raise ProtocolError('A read is already in progress')
        self._count += 1
        worker = threading.Thread(
            target=self._work, args=(func, args, kwargs),
            name='resumable-read-{}'.format(self._count))
        worker.daemon = self.daemon
        self.worker = worker
        self.stream.worker = worker
        if self.verbose:
            print('Starting read on', worker.name, file=sys.stderr)
        try:
            worker.start()
        except BaseException:
            self.worker = None
            self.stream.worker = None
            raise
        return self._wait(worker)

    def resume(self, suspended):
        """Continue a Suspended read.  Same return as read()."""
        if (suspended is not self._pending
                or suspended.worker is not self.worker):
            raise ProtocolError('Cannot continue a completed or superseded read')
        self._pending = None
        if self.verbose:
            print('Resuming read on', suspended.worker.name, file=sys.stderr)
        self.channel.send(channel.CONTINUE)
        return self._wait(suspended.worker)

    def _wait(self, worker):
        message = self.channel.recv()
        if message is channel.SUSPENDED:
            self._pending = Suspended(self, worker)
            return self._pending
        self.worker = None
        self.stream.worker = None
        if self.verbose:
            print('Finished read on', worker.name, file=sys.stderr)
        return message.outcome.unwrap()

    def _work(self, func, args, kwargs):
        result = outcome.capture(func, self.stream, *args, **kwargs)
        if self.verbose and isinstance(result, outcome.Error):
            traceback.print_exception(
                type(result.error), result.error,
                result.error.__traceback__)
        self.channel.send(channel.Finished(result))
