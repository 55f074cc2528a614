"""Run blocking readers on input that arrives in pieces.

A reading algorithm written for an ordinary blocking file (readline,
pickle.load, struct framing...) is run against a stream fed from a
queue of sources.  When the queued input runs out, the algorithm is
parked in the middle of whatever it was doing and control returns to
the caller with a Suspended.  Once more input is queued, resuming the
Suspended continues the algorithm where it stopped.  Nothing is
re-parsed and the algorithm needs no changes.

Input end has two forms:
    Feed.end(): soft.  Already queued sources are still read first.
    Feed.close(): hard.  End of stream immediately and permanently.
"""
__all__ = ['Feed', 'Suspended', 'Reader', 'ProtocolError', 'END']

from .errors import ProtocolError
from .feed import Feed, Suspended
from .reader import Reader
from .sources import END
