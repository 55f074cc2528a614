"""Collect parsed objects from a Feed without blocking.

Reader hides the Suspended bookkeeping behind the readinto1/readinto
interface used by the stream format readers: data is pushed in with
extend(), objects are pulled out into a container.

readinto1/readinto return values:
    >0: the number of objects appended.
    None: would block, extend() with more data and try again.
    -1: the parse function raised EOFError; the input is finished.
"""
__all__ = ['Reader']

from . import feed

class Reader(object):
    """Repeatedly apply a blocking parse function to a Feed."""
    def __init__(self, parse, *sources, **kwargs):
        """Initialize a Reader.

        parse: callable(stream) -> object.  Raise EOFError at end.
        sources: initial sources.
        kwargs: passed on to `feed.Feed`.
        """
        self.parse = parse
        self.feed = feed.Feed(*sources, **kwargs)
        self.pending = None
        self.done = False

    def __enter__(self):
        return self

    def __exit__(self, tp, exc, tb):
        self.close()

    def extend(self, *sources):
        self.feed.extend(*sources)

    def end(self):
        self.feed.end()

    def close(self):
        self.feed.close()

    def readinto1(self, out):
        """Advance the current parse by as much input as is queued.

        out: container
            out should have an `append()` method.
        """
        if self.done:
            return -1
        try:
            if self.pending is None:
                result = self.feed.read(self.parse)
            else:
                pending = self.pending
                self.pending = None
                result = pending.resume()
        except EOFError:
            self.done = True
            return -1
        if isinstance(result, feed.Suspended):
            self.pending = result
            return None
        out.append(result)
        return 1

    def readinto(self, out):
        """Call readinto1 until it would block or the input ends.

        Return the number of objects appended if any.  Otherwise None
        if would block or -1 if finished.
        """
        count = 0
        result = self.readinto1(out)
        while result == 1:
            count += 1
            result = self.readinto1(out)
        return count or result

    def read(self):
        """Same as readinto(), but return a new list.

        Also return the readinto result because no other way to tell
        whether would block or eof.
        """
        L = []
        return L, self.readinto(L)

    def __iter__(self):
        """Iterate over objects parsed from the currently queued data."""
        L = []
        while self.readinto1(L) == 1:
            yield L.pop()
