"""Serial pickles.

The stream is just pickle.dump() called repeatedly.  Unlike reading
pickles from a partially filled buffer, the unpickler runs once per
object and simply waits when it reaches the end of the queued data, so
there is no retrying on every partial read and no need to search for
`pickle.STOP`.
"""
__all__ = ['load', 'Reader']
import pickle

from .. import reader

def load(f):
    """Unpickle one object.  EOFError at end of stream."""
    return pickle.load(f)

class Reader(reader.Reader):
    """Read serial pickles."""
    def __init__(self, *sources, **kwargs):
        super(Reader, self).__init__(load, *sources, **kwargs)
